"""Metadata providers for module resolution.

This module provides the registry, repository and documentation
providers, in HTTP-backed and offline flavours.
"""

from expo_sdk_engine.config import EngineConfig
from expo_sdk_engine.providers.base import BaseProvider
from expo_sdk_engine.providers.docs import DocsProvider
from expo_sdk_engine.providers.http import HttpProvider
from expo_sdk_engine.providers.offline import (
    OfflineDocsProvider,
    OfflineRegistryProvider,
    OfflineRepositoryProvider,
)
from expo_sdk_engine.providers.registry import NpmRegistryProvider
from expo_sdk_engine.providers.repository import GitHubRepositoryProvider

__all__ = [
    "BaseProvider",
    "DocsProvider",
    "GitHubRepositoryProvider",
    "HttpProvider",
    "NpmRegistryProvider",
    "OfflineDocsProvider",
    "OfflineRegistryProvider",
    "OfflineRepositoryProvider",
    "build_providers",
]


def build_providers(
    config: EngineConfig,
) -> tuple[BaseProvider, BaseProvider, BaseProvider]:
    """Create the (registry, repository, docs) providers for a config.

    Args:
        config: Engine configuration. ``offline`` selects the static providers.

    Returns:
        Tuple of registry, repository and documentation providers.
    """
    if config.offline:
        return (
            OfflineRegistryProvider(),
            OfflineRepositoryProvider(),
            OfflineDocsProvider(),
        )

    return (
        NpmRegistryProvider(timeout=config.request_timeout),
        GitHubRepositoryProvider(config.github_token, timeout=config.request_timeout),
        DocsProvider(timeout=config.request_timeout),
    )
