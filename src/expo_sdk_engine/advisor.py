"""Heuristic optimization advice for generated configuration artifacts."""

import json
import logging
from typing import Any, Callable, Optional

from expo_sdk_engine.config import EngineConfig
from expo_sdk_engine.generators.base import parse_object, section
from expo_sdk_engine.generators.bundler_config import WEB_RESOLVER_MARKER
from expo_sdk_engine.knowledge.versions import LATEST, parse_sdk_number
from expo_sdk_engine.models import (
    APP_MANIFEST,
    BUILD_CONFIG,
    BUNDLER_CONFIG,
    PRIORITY_ORDER,
    OptimizationSuggestion,
    ProjectContext,
    normalize_artifact_kind,
)

logger = logging.getLogger(__name__)

Rule = Callable[[Any, ProjectContext], list[OptimizationSuggestion]]


def _as_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    return json.dumps(content)


def app_manifest_rules(content: Any, context: ProjectContext) -> list[OptimizationSuggestion]:
    expo = section(parse_object(content), "expo")
    suggestions = []
    if not expo.get("assetBundlePatterns"):
        suggestions.append(
            OptimizationSuggestion(
                category="performance",
                priority="medium",
                title="Asset Bundle Patterns Optimization",
                description="Configure assetBundlePatterns to reduce bundle size",
                fix_command='Add "assetBundlePatterns": ["**/*"] to expo config',
                documentation_url=(
                    "https://docs.expo.dev/versions/latest/config/app/#assetbundlepatterns"
                ),
            )
        )
    if not expo.get("icon"):
        suggestions.append(
            OptimizationSuggestion(
                category="maintainability",
                priority="high",
                title="Missing App Icon",
                description="Add app icon for better user experience",
                fix_command='Add "icon": "./assets/icon.png" to expo config',
                documentation_url="https://docs.expo.dev/versions/latest/config/app/#icon",
            )
        )
    return suggestions


def build_config_rules(content: Any, context: ProjectContext) -> list[OptimizationSuggestion]:
    production = section(parse_object(content), "build", "production")
    suggestions = []
    if section(production, "ios").get("resourceClass") == "default":
        suggestions.append(
            OptimizationSuggestion(
                category="performance",
                priority="medium",
                title="iOS Build Resource Class",
                description="Consider using m-medium for faster builds",
                fix_command='Set resourceClass to "m-medium" in eas.json',
                documentation_url="https://docs.expo.dev/build-reference/infrastructure/",
            )
        )
    if context.targets("android") and not section(production, "android").get("buildType"):
        suggestions.append(
            OptimizationSuggestion(
                category="performance",
                priority="medium",
                title="Android Build Type Optimization",
                description="Configure buildType for Android builds",
                fix_command='Add buildType: "apk" or "app-bundle" to android profile',
                documentation_url="https://docs.expo.dev/build-reference/apk/",
            )
        )
    return suggestions


def bundler_config_rules(content: Any, context: ProjectContext) -> list[OptimizationSuggestion]:
    if not context.targets("web") or WEB_RESOLVER_MARKER in _as_text(content):
        return []
    return [
        OptimizationSuggestion(
            category="compatibility",
            priority="high",
            title="Web Platform Support",
            description="Add web platform support to Metro config",
            fix_command='Add resolver.platforms array including "web"',
            documentation_url="https://docs.expo.dev/guides/customizing-metro/",
        )
    ]


ARTIFACT_RULES: dict[str, Rule] = {
    APP_MANIFEST: app_manifest_rules,
    BUILD_CONFIG: build_config_rules,
    BUNDLER_CONFIG: bundler_config_rules,
}


class OptimizationAdvisor:
    """Applies per-artifact and project-wide heuristics.

    Attributes:
        config: Engine configuration (supplies the latest SDK number).
    """

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or EngineConfig()

    def generate_optimization_suggestions(
        self, artifact_kind: str, content: Any, context: ProjectContext
    ) -> list[OptimizationSuggestion]:
        """Return priority-sorted suggestions for an artifact.

        Args:
            artifact_kind: Artifact kind label or legacy file name. Unknown
                kinds only get the project-wide rules.
            content: Artifact content, serialized or parsed.
            context: Project description.

        Returns:
            Suggestions ordered high, medium, low; ties keep discovery order.
        """
        kind = normalize_artifact_kind(artifact_kind)
        rules = ARTIFACT_RULES.get(kind)
        if rules is None:
            logger.debug("No artifact rules for %s", artifact_kind)

        suggestions = rules(content, context) if rules else []
        suggestions.extend(self.general_rules(context))
        logger.info("Generated %d optimization suggestion(s) for %s", len(suggestions), kind)
        return sorted(suggestions, key=lambda s: PRIORITY_ORDER[s.priority])

    def general_rules(self, context: ProjectContext) -> list[OptimizationSuggestion]:
        """Project-wide rules that apply to every artifact kind."""
        if not context.sdk_version or context.sdk_version == LATEST:
            return []

        latest = self.config.latest_sdk_number
        current = parse_sdk_number(context.sdk_version, latest)
        if current is None or current >= latest:
            return []

        return [
            OptimizationSuggestion(
                category="security",
                priority="high",
                title="SDK Version Update",
                description=(
                    f"Consider upgrading from SDK {current} to latest for security and features"
                ),
                fix_command="npx expo install --fix",
                documentation_url=(
                    "https://docs.expo.dev/workflow/upgrading-expo-sdk-walkthrough/"
                ),
            )
        ]
