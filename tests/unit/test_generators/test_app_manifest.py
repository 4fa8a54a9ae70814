"""Unit tests for the app manifest generator."""

import json

import pytest

from expo_sdk_engine.generators import AppManifestGenerator, slug_of
from expo_sdk_engine.models import ProjectContext


@pytest.fixture
def generator() -> AppManifestGenerator:
    return AppManifestGenerator()


class TestSlug:
    """Test slug generation."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("My Cool App!", "my-cool-app"),
            ("TestApp", "testapp"),
            ("  --Weird__Name--  ", "weird-name"),
            ("app 2.0", "app-2-0"),
            (None, "expo-app"),
            ("", "expo-app"),
            ("!!!", "expo-app"),
        ],
    )
    def test_slug_of(self, name, expected):
        assert slug_of(name) == expected


class TestGenerate:
    """Test manifest content."""

    def test_mobile_scenario(self, generator, mobile_context):
        template = generator.generate(mobile_context)
        expo = json.loads(template.content)["expo"]

        assert expo["name"] == "TestApp"
        assert expo["slug"] == "testapp"
        assert expo["version"] == "1.0.0"
        assert expo["ios"]["bundleIdentifier"] == "com.t.app"
        assert expo["ios"]["supportsTablet"] is True
        assert expo["android"]["package"] == "com.t.app"
        assert "adaptiveIcon" in expo["android"]
        assert "web" not in expo
        assert "sdkVersion" not in expo

    def test_result_metadata(self, generator, mobile_context):
        template = generator.generate(mobile_context)

        assert template.config_type == "app-manifest"
        assert template.schema_version == "49.0.0"
        assert template.validation_errors == []
        assert template.suggestions == [
            "Set EAS project ID for builds: expo.extra.eas.projectId"
        ]

    def test_web_block_only_when_requested(self, generator, universal_context):
        expo = generator.build(universal_context)["expo"]

        assert expo["web"] == {"favicon": "./assets/favicon.png"}
        assert expo["slug"] == "my-cool-app"

    def test_platform_blocks_without_platforms(self, generator):
        expo = generator.build(ProjectContext())["expo"]

        assert expo["name"] == "ExpoApp"
        assert expo["slug"] == "expo-app"
        assert expo["ios"] == {"bundleIdentifier": "com.example.app"}
        assert expo["android"] == {"package": "com.example.app", "versionCode": 1}

    def test_placeholders(self, generator, mobile_context):
        expo = generator.build(mobile_context)["expo"]

        assert expo["extra"]["eas"]["projectId"] == "your-project-id"
        assert expo["updates"]["url"] == "https://u.expo.dev/your-project-id"
        assert expo["runtimeVersion"] == {"policy": "sdkVersion"}

    def test_pinned_sdk_version(self, generator):
        expo = generator.build(ProjectContext(name="Old", sdk_version="sdk-48"))["expo"]

        assert expo["sdkVersion"] == "48.0.0"


class TestValidate:
    """Test structural validation of manifests."""

    def test_missing_required_fields(self, generator):
        errors, suggestions = generator.validate({"expo": {}})

        assert errors == ["Missing required field: expo.name", "Missing required field: expo.slug"]
        assert "Add app icon: expo.icon" in suggestions
        assert "Configure splash screen: expo.splash" in suggestions

    def test_real_project_id_not_suggested(self, generator):
        content = json.dumps(
            {
                "expo": {
                    "name": "A",
                    "slug": "a",
                    "icon": "./icon.png",
                    "splash": {},
                    "extra": {"eas": {"projectId": "1f2e3d"}},
                }
            }
        )

        errors, suggestions = generator.validate(content)

        assert errors == []
        assert suggestions == ["Configure splash screen: expo.splash"]

    def test_invalid_json_reports_missing_fields(self, generator):
        errors, _ = generator.validate("{not json")

        assert len(errors) == 2

    def test_non_object_expo_is_an_error(self, generator):
        errors, _ = generator.validate('{"expo": "oops"}')

        assert errors == [
            "Field expo must be an object",
            "Missing required field: expo.name",
            "Missing required field: expo.slug",
        ]

    def test_null_eas_block(self, generator):
        errors, suggestions = generator.validate(
            {"expo": {"name": "A", "slug": "a", "extra": {"eas": None}}}
        )

        assert errors == []
        assert "Set EAS project ID for builds: expo.extra.eas.projectId" in suggestions
