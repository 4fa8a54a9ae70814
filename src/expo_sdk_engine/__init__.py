"""Expo SDK Engine - module metadata, migration and configuration synthesis.

This package resolves SDK module metadata from several sources, analyzes
deprecations across SDK releases and synthesizes configuration files,
build-service commands and shareable sandboxes.
"""

__version__ = "0.1.0"

from expo_sdk_engine.config import EngineConfig
from expo_sdk_engine.engine import SDKEngine
from expo_sdk_engine.exceptions import EngineError, InvalidArgumentError, UpstreamFetchError
from expo_sdk_engine.models import (
    CompatibilityMatrix,
    ConfigTemplate,
    MigrationGuide,
    Module,
    ProjectContext,
)

__all__ = [
    "__version__",
    "CompatibilityMatrix",
    "ConfigTemplate",
    "EngineConfig",
    "EngineError",
    "InvalidArgumentError",
    "MigrationGuide",
    "Module",
    "ProjectContext",
    "SDKEngine",
    "UpstreamFetchError",
]
