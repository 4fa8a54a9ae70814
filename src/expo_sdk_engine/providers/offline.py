"""Offline providers backed by the static knowledge tables.

These providers never touch the network. They produce the same record
shapes as the HTTP providers so the aggregator can treat both alike.
"""

from datetime import UTC, datetime
from typing import Any

from expo_sdk_engine.knowledge.versions import SDK_VERSIONS
from expo_sdk_engine.providers.base import BaseProvider, Source, default_package_name
from expo_sdk_engine.providers.docs import documentation_url, fallback_description

DEFAULT_PACKAGE_VERSION = "12.3.0"


class OfflineRegistryProvider(BaseProvider):
    """Registry records derived from the SDK version tables."""

    @property
    def name(self) -> str:
        return "offline-registry"

    @property
    def source(self) -> Source:
        return "registry"

    async def fetch(self, module_name: str, sdk_version: str) -> dict[str, Any]:
        release = SDK_VERSIONS.get(sdk_version, SDK_VERSIONS["latest"])
        return {
            "package_name": default_package_name(module_name),
            "version": release.modules.get(module_name, DEFAULT_PACKAGE_VERSION),
            "dependencies": {"react-native": "^0.72.0"},
            "peer_dependencies": {},
        }


class OfflineRepositoryProvider(BaseProvider):
    """Repository records pointing into the SDK monorepo."""

    @property
    def name(self) -> str:
        return "offline-repository"

    @property
    def source(self) -> Source:
        return "repository"

    async def fetch(self, module_name: str, sdk_version: str) -> dict[str, Any]:
        package = default_package_name(module_name)
        return {
            "repository_url": f"https://github.com/expo/expo/tree/main/packages/{package}",
            "stars": 0,
            "open_issues": 0,
            "last_activity": datetime.now(UTC).isoformat(),
        }


class OfflineDocsProvider(BaseProvider):
    """Documentation records with generated descriptions."""

    @property
    def name(self) -> str:
        return "offline-docs"

    @property
    def source(self) -> Source:
        return "docs"

    async def fetch(self, module_name: str, sdk_version: str) -> dict[str, Any]:
        return {
            "description": fallback_description(module_name),
            "documentation_url": documentation_url(module_name, sdk_version),
        }
