"""Base interface for configuration template generators.

Generators synthesize one configuration artifact from a ProjectContext
and validate its structure. Validation problems are returned as data,
so generation itself always succeeds.
"""

import json
import logging
from abc import ABC, abstractmethod
from importlib.resources import files
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, Template

from expo_sdk_engine.models import ConfigTemplate, ProjectContext

logger = logging.getLogger(__name__)

# JavaScript output, so no HTML escaping
_ENV_OPTIONS = {
    "autoescape": False,
    "keep_trailing_newline": True,
    "trim_blocks": True,
    "lstrip_blocks": True,
}


def load_template(name: str, template_path: Optional[Path] = None) -> Template:
    """Load a Jinja2 template, bundled or from disk.

    Args:
        name: File name of the bundled template under ``expo_sdk_engine.templates``.
        template_path: Optional custom template file that replaces the bundled one.

    Returns:
        The compiled template.
    """
    if template_path:
        env = Environment(
            loader=FileSystemLoader(template_path.parent), **_ENV_OPTIONS
        )
        return env.get_template(template_path.name)

    template_content = (
        files("expo_sdk_engine.templates").joinpath(name).read_text(encoding="utf-8")
    )
    env = Environment(**_ENV_OPTIONS)
    return env.from_string(template_content)


def parse_object(content: Any) -> dict:
    """Return a JSON artifact as a dictionary.

    Args:
        content: Parsed dictionary or serialized JSON.

    Returns:
        The object, or an empty dictionary when the content is not valid
        JSON or its top level is not an object.
    """
    if isinstance(content, dict):
        return content
    try:
        parsed = json.loads(content)
    except (TypeError, json.JSONDecodeError) as e:
        logger.debug("Artifact is not valid JSON: %s", e)
        return {}
    return parsed if isinstance(parsed, dict) else {}


def section(mapping: Any, *keys: str) -> dict:
    """Walk nested keys, yielding {} wherever a level is not an object."""
    for key in keys:
        value = mapping.get(key) if isinstance(mapping, dict) else None
        mapping = value if isinstance(value, dict) else {}
    return mapping if isinstance(mapping, dict) else {}

class BaseTemplateGenerator(ABC):
    """Abstract base class for configuration template generators."""

    @abstractmethod
    def render(self, context: ProjectContext) -> str:
        """Render the artifact for a project.

        Args:
            context: Project description.

        Returns:
            Serialized artifact content.
        """
        ...

    @abstractmethod
    def validate(self, content: Any) -> tuple[list[str], list[str]]:
        """Check an artifact's structure.

        Args:
            content: Serialized artifact, or its parsed form where applicable.

        Returns:
            Tuple of (errors, suggestions).
        """
        ...

    def generate(self, context: ProjectContext) -> ConfigTemplate:
        """Render and validate the artifact for a project.

        Args:
            context: Project description.

        Returns:
            ConfigTemplate carrying content and validation results.
        """
        content = self.render(context)
        errors, suggestions = self.validate(content)
        return ConfigTemplate(
            content=content,
            config_type=self.config_type,
            validation_errors=errors,
            suggestions=suggestions,
            schema_version=self.schema_version,
        )

    @property
    @abstractmethod
    def config_type(self) -> str:
        """Return the artifact kind label (e.g. "app-manifest")."""
        ...

    @property
    @abstractmethod
    def default_filename(self) -> str:
        """Return the file name the artifact is conventionally saved as."""
        ...

    @property
    def schema_version(self) -> Optional[str]:
        """Return the schema version the artifact targets."""
        return None
