"""Build/submit configuration (eas.json) template generator."""

import json
import logging
from typing import Any

from expo_sdk_engine.generators.base import BaseTemplateGenerator, parse_object, section
from expo_sdk_engine.models import BUILD_CONFIG, ProjectContext

logger = logging.getLogger(__name__)

CLI_VERSION_CONSTRAINT = ">= 5.9.0"


class BuildConfigGenerator(BaseTemplateGenerator):
    """Generates build profiles and the store submission block."""

    @property
    def config_type(self) -> str:
        return BUILD_CONFIG

    @property
    def default_filename(self) -> str:
        return "eas.json"

    @property
    def schema_version(self) -> str:
        return "5.9.0"

    def build(self, context: ProjectContext) -> dict:
        """Build the configuration as a dictionary."""
        submit: dict[str, Any] = {}
        if context.targets("ios"):
            submit["ios"] = {
                "appleId": "your-apple-id@example.com",
                "ascAppId": "1234567890",
                "appleTeamId": "YOUR_TEAM_ID",
            }
        if context.targets("android"):
            submit["android"] = {
                "serviceAccountKeyPath": "./service-account-key.json",
                "track": "internal",
            }

        return {
            "cli": {"version": CLI_VERSION_CONSTRAINT},
            "build": {
                "development": {
                    "developmentClient": True,
                    "distribution": "internal",
                    "ios": {"resourceClass": "m-medium"},
                    "android": {"resourceClass": "medium"},
                },
                "preview": {
                    "distribution": "internal",
                    "ios": {"resourceClass": "m-medium"},
                    "android": {"resourceClass": "medium"},
                },
                "production": {
                    "ios": {"resourceClass": "m-medium"},
                    "android": {"resourceClass": "large"},
                },
            },
            "submit": {"production": submit},
        }

    def render(self, context: ProjectContext) -> str:
        logger.info("Generating build config for project: %s", context.name)
        return json.dumps(self.build(context), indent=2)

    def validate(self, content: Any) -> tuple[list[str], list[str]]:
        """Require a build section; recommend a CLI pin and production profile."""
        config = parse_object(content)
        errors: list[str] = []
        suggestions: list[str] = []

        build = config.get("build")
        if not build:
            errors.append("Missing required field: build")
        elif not isinstance(build, dict):
            errors.append("Field build must be an object")
        if not section(config, "cli").get("version"):
            suggestions.append("Specify EAS CLI version: cli.version")
        if isinstance(build, dict) and build and not build.get("production"):
            suggestions.append("Add production build profile")

        return errors, suggestions
