"""Bundler configuration (metro.config.js) template generator."""

import logging
from pathlib import Path
from typing import Any, Optional

from expo_sdk_engine.generators.base import BaseTemplateGenerator, load_template
from expo_sdk_engine.models import BUNDLER_CONFIG, ProjectContext

logger = logging.getLogger(__name__)

WEB_RESOLVER_MARKER = "resolver.platforms"


class BundlerConfigGenerator(BaseTemplateGenerator):
    """Generates the bundler configuration from a Jinja2 template.

    Attributes:
        template: The Jinja2 template used for rendering.
    """

    def __init__(self, template_path: Optional[Path] = None) -> None:
        """Initialize the generator.

        Args:
            template_path: Optional custom Jinja2 template. Defaults to the
                bundled ``metro.config.js.j2``.
        """
        self.template = load_template("metro.config.js.j2", template_path)

    @property
    def config_type(self) -> str:
        return BUNDLER_CONFIG

    @property
    def default_filename(self) -> str:
        return "metro.config.js"

    @property
    def schema_version(self) -> str:
        return "0.80.0"

    def render(self, context: ProjectContext) -> str:
        logger.info("Generating bundler config for project: %s", context.name)
        return self.template.render(web=context.targets("web"))

    def validate(self, content: Any) -> tuple[list[str], list[str]]:
        """Require the default-config import and an export; recommend aliases."""
        text = content if isinstance(content, str) else ""
        errors: list[str] = []
        suggestions: list[str] = []

        if "getDefaultConfig" not in text:
            errors.append("Missing getDefaultConfig import")
        if "module.exports" not in text:
            errors.append("Missing module.exports")
        if "resolver.alias" not in text:
            suggestions.append("Consider adding path aliases for better imports")

        return errors, suggestions
