"""Config plugin validation against a static plugin table."""

import logging
from types import MappingProxyType
from typing import Any, Optional

from expo_sdk_engine.config import EngineConfig
from expo_sdk_engine.knowledge.versions import sdk_number_or_latest
from expo_sdk_engine.models import PluginValidationResult, ProjectContext

logger = logging.getLogger(__name__)

PLUGIN_DATABASE = MappingProxyType(
    {
        "expo-camera": {
            "supported_sdk_versions": ("47", "48", "49"),
            "platforms": ("ios", "android"),
            "config_schema": {
                "cameraPermission": "string",
                "microphonePermission": "string",
            },
        },
        "expo-location": {
            "supported_sdk_versions": ("47", "48", "49"),
            "platforms": ("ios", "android", "web"),
            "config_schema": {"locationAlwaysAndWhenInUsePermission": "string"},
        },
    }
)

DEFAULT_PLUGIN = MappingProxyType(
    {
        "supported_sdk_versions": ("49",),
        "platforms": ("ios", "android", "web"),
        "config_schema": {},
    }
)


def js_type_of(value: Any) -> str:
    """Name a Python value by its JSON/JavaScript type ("string", "number", ...)."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if value is None:
        return "null"
    return "object"


class PluginValidator:
    """Validates config plugin entries for a project."""

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or EngineConfig()

    def validate_plugin_configuration(
        self,
        plugin_name: str,
        plugin_config: Optional[dict[str, Any]],
        context: ProjectContext,
    ) -> PluginValidationResult:
        """Check SDK compatibility, platform support and config keys of a plugin.

        Unknown plugins are checked against a permissive default record.

        Args:
            plugin_name: Package name of the plugin (e.g. "expo-camera").
            plugin_config: Options passed to the plugin.
            context: Project description.

        Returns:
            PluginValidationResult. ``is_valid`` is True when no issues were found.
        """
        info = PLUGIN_DATABASE.get(plugin_name, DEFAULT_PLUGIN)
        issues: list[str] = []
        suggestions: list[str] = []

        version_compatible = True
        if context.sdk_version:
            major = sdk_number_or_latest(context.sdk_version, self.config.latest_sdk_number)
            version_compatible = str(major) in info["supported_sdk_versions"]
        if not version_compatible:
            issues.append(
                f"Plugin {plugin_name} may not be compatible with SDK {context.sdk_version}"
            )
            suggestions.append("Consider updating to a compatible version or SDK version")

        platform_support = list(info["platforms"])
        unsupported = [p for p in context.platforms if p not in platform_support]
        if unsupported:
            issues.append(f"Plugin {plugin_name} does not support: {', '.join(unsupported)}")
            suggestions.append("Consider platform-specific alternatives or conditional usage")

        options = plugin_config or {}
        for key, expected in info["config_schema"].items():
            if key not in options:
                suggestions.append(f"Consider setting {key} property")
                continue
            actual = js_type_of(options[key])
            if actual != expected:
                issues.append(f"Property {key} should be {expected}, got {actual}")

        logger.info("Validated plugin %s: %d issue(s)", plugin_name, len(issues))
        return PluginValidationResult(
            plugin_name=plugin_name,
            is_valid=not issues,
            version_compatible=version_compatible,
            platform_support=platform_support,
            issues=issues,
            suggestions=suggestions,
        )
