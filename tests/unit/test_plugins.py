"""Unit tests for the PluginValidator."""

import pytest

from expo_sdk_engine.models import ProjectContext
from expo_sdk_engine.plugins import PluginValidator, js_type_of


@pytest.fixture
def validator(engine_config) -> PluginValidator:
    return PluginValidator(engine_config)


@pytest.mark.parametrize(
    "value,expected",
    [("x", "string"), (True, "boolean"), (3, "number"), (1.5, "number"), ({}, "object"), ([], "object")],
)
def test_js_type_of(value, expected):
    assert js_type_of(value) == expected


def test_valid_camera_plugin(validator):
    result = validator.validate_plugin_configuration(
        "expo-camera",
        {"cameraPermission": "Allow camera", "microphonePermission": "Allow mic"},
        ProjectContext(platforms=["ios", "android"], sdk_version="sdk-48"),
    )

    assert result.is_valid
    assert result.version_compatible
    assert result.platform_support == ["ios", "android"]
    assert result.issues == []
    assert result.suggestions == []


def test_unsupported_platform(validator):
    result = validator.validate_plugin_configuration(
        "expo-camera", {}, ProjectContext(platforms=["ios", "web"])
    )

    assert not result.is_valid
    assert "Plugin expo-camera does not support: web" in result.issues
    assert "Consider setting cameraPermission property" in result.suggestions


def test_wrong_option_type(validator):
    result = validator.validate_plugin_configuration(
        "expo-location", {"locationAlwaysAndWhenInUsePermission": True}, ProjectContext()
    )

    assert result.issues == [
        "Property locationAlwaysAndWhenInUsePermission should be string, got boolean"
    ]


def test_incompatible_sdk(validator):
    result = validator.validate_plugin_configuration(
        "expo-camera", None, ProjectContext(sdk_version="sdk-45")
    )

    assert not result.version_compatible
    assert "Plugin expo-camera may not be compatible with SDK sdk-45" in result.issues


def test_unknown_plugin_uses_default_record(validator):
    result = validator.validate_plugin_configuration(
        "react-native-reanimated", {}, ProjectContext(platforms=["web"], sdk_version="latest")
    )

    assert result.is_valid
    assert result.platform_support == ["ios", "android", "web"]
