"""Configuration template generators.

This module provides generators for the app manifest, the build/submit
configuration and the bundler configuration.
"""

from expo_sdk_engine.exceptions import InvalidArgumentError
from expo_sdk_engine.generators.app_manifest import AppManifestGenerator, slug_of
from expo_sdk_engine.generators.base import BaseTemplateGenerator
from expo_sdk_engine.generators.build_config import BuildConfigGenerator
from expo_sdk_engine.generators.bundler_config import BundlerConfigGenerator
from expo_sdk_engine.models import (
    APP_MANIFEST,
    BUILD_CONFIG,
    BUNDLER_CONFIG,
    normalize_artifact_kind,
)

__all__ = [
    "AppManifestGenerator",
    "BaseTemplateGenerator",
    "BuildConfigGenerator",
    "BundlerConfigGenerator",
    "get_generator",
    "slug_of",
]

_GENERATORS: dict[str, type[BaseTemplateGenerator]] = {
    APP_MANIFEST: AppManifestGenerator,
    BUILD_CONFIG: BuildConfigGenerator,
    BUNDLER_CONFIG: BundlerConfigGenerator,
}


def get_generator(kind: str) -> BaseTemplateGenerator:
    """Return the generator for an artifact kind.

    Args:
        kind: Artifact kind label or legacy file name.

    Returns:
        Generator instance for the kind.

    Raises:
        InvalidArgumentError: If the kind is not recognized.
    """
    generator_cls = _GENERATORS.get(normalize_artifact_kind(kind))
    if generator_cls is None:
        raise InvalidArgumentError("artifact kind", kind, _GENERATORS)
    return generator_cls()
