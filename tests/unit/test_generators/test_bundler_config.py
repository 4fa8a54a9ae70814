"""Unit tests for the bundler configuration generator."""

import pytest

from expo_sdk_engine.exceptions import InvalidArgumentError
from expo_sdk_engine.generators import (
    AppManifestGenerator,
    BundlerConfigGenerator,
    get_generator,
)
from expo_sdk_engine.models import ProjectContext


@pytest.fixture
def generator() -> BundlerConfigGenerator:
    return BundlerConfigGenerator()


def test_skeleton(generator, mobile_context):
    template = generator.generate(mobile_context)

    assert "const { getDefaultConfig } = require('expo/metro-config');" in template.content
    assert template.content.rstrip().endswith("module.exports = config;")
    assert "// config.resolver.alias = {" in template.content
    assert "// config.transformer.minifierConfig = {" in template.content
    assert "config.resolver.platforms" not in template.content
    assert template.config_type == "bundler-config"
    assert template.schema_version == "0.80.0"
    assert template.validation_errors == []


def test_web_resolver_when_requested(generator, universal_context):
    content = generator.render(universal_context)

    assert "config.resolver.platforms = ['ios', 'android', 'native', 'web'];" in content
    assert content.index("resolver.platforms") < content.index("module.exports")


def test_custom_template(tmp_path):
    custom = tmp_path / "metro.j2"
    custom.write_text("{% if web %}web{% else %}native{% endif %}")

    generator = BundlerConfigGenerator(template_path=custom)

    assert generator.render(ProjectContext(platforms=["web"])) == "web"


def test_validate(generator):
    errors, suggestions = generator.validate("const config = {};")

    assert errors == ["Missing getDefaultConfig import", "Missing module.exports"]
    assert suggestions == ["Consider adding path aliases for better imports"]


class TestGetGenerator:
    """Test generator lookup by kind."""

    def test_by_label(self):
        assert isinstance(get_generator("app-manifest"), AppManifestGenerator)

    def test_by_file_name(self):
        generator = get_generator("metro.config.js")

        assert isinstance(generator, BundlerConfigGenerator)
        assert generator.default_filename == "metro.config.js"

    def test_unknown_kind(self):
        with pytest.raises(InvalidArgumentError, match="babel.config.js"):
            get_generator("babel.config.js")
