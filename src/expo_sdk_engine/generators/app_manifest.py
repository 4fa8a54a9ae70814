"""App manifest (app.json) template generator."""

import json
import logging
import re
from typing import Any, Optional

from expo_sdk_engine.generators.base import BaseTemplateGenerator, parse_object, section
from expo_sdk_engine.knowledge.versions import LATEST, parse_sdk_number
from expo_sdk_engine.models import APP_MANIFEST, ProjectContext

logger = logging.getLogger(__name__)

DEFAULT_APP_NAME = "ExpoApp"
DEFAULT_SLUG = "expo-app"
DEFAULT_IDENTIFIER = "com.example.app"
PROJECT_ID_PLACEHOLDER = "your-project-id"

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def slug_of(name: Optional[str]) -> str:
    """Turn a project name into a URL-safe slug.

    Lowercases, collapses runs of non-alphanumerics into one hyphen and
    trims hyphens at both ends.

    Args:
        name: Project name. Empty or None yields the default slug.

    Returns:
        The slug, e.g. "my-cool-app" for "My Cool App!".
    """
    if not name:
        return DEFAULT_SLUG
    slug = _NON_ALNUM_RE.sub("-", name.lower()).strip("-")
    return slug or DEFAULT_SLUG


class AppManifestGenerator(BaseTemplateGenerator):
    """Generates the app manifest with per-platform blocks."""

    @property
    def config_type(self) -> str:
        return APP_MANIFEST

    @property
    def default_filename(self) -> str:
        return "app.json"

    @property
    def schema_version(self) -> str:
        return "49.0.0"

    def build(self, context: ProjectContext) -> dict:
        """Build the manifest as a dictionary.

        iOS and Android blocks are always present; the tablet flag and the
        adaptive icon are added only for requested platforms. The web block
        exists only when web is requested.
        """
        ios: dict[str, Any] = {
            "bundleIdentifier": context.bundle_identifier or DEFAULT_IDENTIFIER
        }
        if context.targets("ios"):
            ios["supportsTablet"] = True

        android: dict[str, Any] = {
            "package": context.package_name or DEFAULT_IDENTIFIER,
            "versionCode": 1,
        }
        if context.targets("android"):
            android["adaptiveIcon"] = {
                "foregroundImage": "./assets/adaptive-icon.png",
                "backgroundColor": "#FFFFFF",
            }

        expo: dict[str, Any] = {
            "name": context.name or DEFAULT_APP_NAME,
            "slug": slug_of(context.name),
            "version": "1.0.0",
            "orientation": "portrait",
            "icon": "./assets/icon.png",
            "userInterfaceStyle": "light",
            "splash": {
                "image": "./assets/splash.png",
                "resizeMode": "contain",
                "backgroundColor": "#ffffff",
            },
            "assetBundlePatterns": ["**/*"],
            "ios": ios,
            "android": android,
        }
        if context.targets("web"):
            expo["web"] = {"favicon": "./assets/favicon.png"}

        expo["extra"] = {"eas": {"projectId": PROJECT_ID_PLACEHOLDER}}
        expo["runtimeVersion"] = {"policy": "sdkVersion"}
        expo["updates"] = {"url": f"https://u.expo.dev/{PROJECT_ID_PLACEHOLDER}"}

        if context.sdk_version and context.sdk_version != LATEST:
            number = parse_sdk_number(context.sdk_version)
            if number is not None:
                expo["sdkVersion"] = f"{number}.0.0"

        return {"expo": expo}

    def render(self, context: ProjectContext) -> str:
        logger.info("Generating app manifest for project: %s", context.name)
        return json.dumps(self.build(context), indent=2)

    def validate(self, content: Any) -> tuple[list[str], list[str]]:
        """Require name and slug; recommend icon, splash and a project id."""
        config = parse_object(content)
        errors: list[str] = []
        suggestions: list[str] = []

        if "expo" in config and not isinstance(config["expo"], dict):
            errors.append("Field expo must be an object")
        expo = section(config, "expo")

        if not expo.get("name"):
            errors.append("Missing required field: expo.name")
        if not expo.get("slug"):
            errors.append("Missing required field: expo.slug")

        if not expo.get("icon"):
            suggestions.append("Add app icon: expo.icon")
        if not expo.get("splash"):
            suggestions.append("Configure splash screen: expo.splash")
        project_id = section(expo, "extra", "eas").get("projectId")
        if not project_id or project_id == PROJECT_ID_PLACEHOLDER:
            suggestions.append("Set EAS project ID for builds: expo.extra.eas.projectId")

        return errors, suggestions
