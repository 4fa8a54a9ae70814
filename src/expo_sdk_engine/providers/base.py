"""Base interface for module metadata providers.

Providers look up one partial record for a module from one external
source. The SourceAggregator queries the registry, repository and
documentation providers concurrently and merges their records.
"""

from abc import ABC, abstractmethod
from typing import Any, Literal

from expo_sdk_engine.knowledge.versions import LATEST, parse_sdk_number

Source = Literal["registry", "repository", "docs"]


def default_package_name(module_name: str) -> str:
    """Return the registry package for a short module name.

    Args:
        module_name: Short name such as "camera", or a full package name.

    Returns:
        "expo-<name>" for short names, the input unchanged for full names.
    """
    if module_name.startswith(("expo-", "@")):
        return module_name
    return f"expo-{module_name}"


def docs_version_path(sdk_version: str) -> str:
    """Return the documentation path segment for an SDK label."""
    if sdk_version == LATEST:
        return LATEST
    number = parse_sdk_number(sdk_version)
    return f"v{number}.0.0" if number is not None else LATEST


class BaseProvider(ABC):
    """Abstract base class for metadata providers.

    Providers are async so the aggregator can run all three lookups at
    once. A provider either returns its partial record or raises
    UpstreamFetchError; it never returns a partial failure.
    """

    @abstractmethod
    async def fetch(self, module_name: str, sdk_version: str) -> dict[str, Any]:
        """Look up the partial record for a module.

        Args:
            module_name: Short module name (e.g. "camera").
            sdk_version: SDK label the lookup is for.

        Returns:
            Provider-specific record. See the concrete providers for keys.

        Raises:
            UpstreamFetchError: If the lookup fails.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the provider name for logging and error messages."""
        ...

    @property
    @abstractmethod
    def source(self) -> Source:
        """Return which aggregation slot this provider fills."""
        ...

    async def close(self) -> None:
        """Release any resources held by the provider."""
