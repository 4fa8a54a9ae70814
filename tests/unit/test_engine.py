"""Unit tests for the SDKEngine facade."""

import json

import pytest

from expo_sdk_engine import SDKEngine
from expo_sdk_engine.config import EngineConfig
from expo_sdk_engine.exceptions import InvalidArgumentError


@pytest.mark.asyncio
async def test_offline_end_to_end(mobile_context) -> None:
    """Test that the facade answers every question offline."""
    async with SDKEngine() as engine:
        module = await engine.resolve("camera")
        notices = await engine.detect_deprecated_apis("camera")
        guide = await engine.generate_migration_guide("sdk-48", "sdk-49")
        matrix = await engine.get_compatibility_matrix()

    assert module.package_name == "expo-camera"
    assert notices == []
    assert guide.estimated_effort == "medium"
    assert matrix.overall_compatibility == 100


def test_synthesis_operations(mobile_context):
    engine = SDKEngine()

    manifest = engine.generate_app_manifest_template(mobile_context)
    build = engine.generate_build_config_template(mobile_context)
    bundler = engine.generate_bundler_config_template(mobile_context)
    snack = engine.generate_snack_compatible_code(["camera"], "basic", mobile_context)
    result = engine.generate_snack_url(snack)

    assert json.loads(manifest.content)["expo"]["slug"] == "testapp"
    assert build.config_type == "build-config"
    assert bundler.config_type == "bundler-config"
    assert result.platform_support == ["ios", "android"]
    assert engine.commands.generate_build_command("ios").flags["platform"] == "ios"


def test_generate_template_unknown_kind(mobile_context):
    with pytest.raises(InvalidArgumentError):
        SDKEngine().generate_template("tsconfig.json", mobile_context)


@pytest.mark.asyncio
async def test_injected_providers(mock_providers) -> None:
    engine = SDKEngine(EngineConfig(latest_sdk_number=50), providers=mock_providers)

    module = await engine.resolve("camera")
    await engine.close()

    assert module.description.startswith("A React component")
    assert engine.deprecations.severity_of("SDK 47") == "error"
    for provider in mock_providers:
        provider.close.assert_awaited_once()
