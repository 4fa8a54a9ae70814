"""Concurrent multi-source aggregation of module metadata.

The aggregator asks the registry, repository and documentation providers
for their partial records at the same time and merges them field by
field according to ``FIELD_SOURCES``.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from expo_sdk_engine.exceptions import UpstreamFetchError
from expo_sdk_engine.providers.base import BaseProvider

logger = logging.getLogger(__name__)

# canonical field -> (source slot, key in that source's record)
FIELD_SOURCES: dict[str, tuple[str, str]] = {
    "package_name": ("registry", "package_name"),
    "version": ("registry", "version"),
    "dependencies": ("registry", "dependencies"),
    "peer_dependencies": ("registry", "peer_dependencies"),
    "description": ("docs", "description"),
    "documentation_url": ("docs", "documentation_url"),
    "repository_url": ("repository", "repository_url"),
}


@dataclass(frozen=True)
class AggregatedRecord:
    """Canonical record merged from the three provider records.

    Every other Module field is derived by the ModuleResolver.
    """

    module_name: str
    sdk_version: str
    package_name: Optional[str] = None
    version: Optional[str] = None
    dependencies: dict[str, str] = field(default_factory=dict)
    peer_dependencies: dict[str, str] = field(default_factory=dict)
    description: Optional[str] = None
    documentation_url: Optional[str] = None
    repository_url: Optional[str] = None


def merge_records(
    module_name: str, sdk_version: str, partials: dict[str, dict[str, Any]]
) -> AggregatedRecord:
    """Merge per-source records using the ``FIELD_SOURCES`` table.

    Args:
        module_name: Module being resolved.
        sdk_version: SDK label being resolved.
        partials: Records keyed by source slot ("registry", "repository", "docs").

    Returns:
        AggregatedRecord. Fields whose source lacks the key stay at their default.
    """
    merged: dict[str, Any] = {}
    for field_name, (source, key) in FIELD_SOURCES.items():
        value = partials.get(source, {}).get(key)
        if value is not None:
            merged[field_name] = value
    return AggregatedRecord(module_name=module_name, sdk_version=sdk_version, **merged)


class SourceAggregator:
    """Runs the three provider lookups concurrently and merges the results.

    A failure of any single lookup fails the whole aggregation; there is no
    partial-merge fallback.

    Attributes:
        registry: Provider for package name, version and dependencies.
        repository: Provider for the source repository URL.
        docs: Provider for the description and documentation URL.
    """

    def __init__(
        self,
        registry: BaseProvider,
        repository: BaseProvider,
        docs: BaseProvider,
    ) -> None:
        self.registry = registry
        self.repository = repository
        self.docs = docs

    async def aggregate(self, module_name: str, sdk_version: str) -> AggregatedRecord:
        """Fetch and merge the provider records for a module.

        Args:
            module_name: Short module name.
            sdk_version: SDK label.

        Returns:
            The merged AggregatedRecord.

        Raises:
            UpstreamFetchError: If any provider lookup fails.
        """
        providers = (self.registry, self.repository, self.docs)
        logger.debug(
            "Aggregating %s@%s from %s",
            module_name,
            sdk_version,
            ", ".join(p.name for p in providers),
        )

        try:
            records = await asyncio.gather(
                *(p.fetch(module_name, sdk_version) for p in providers)
            )
        except UpstreamFetchError:
            logger.error("Aggregation failed for %s@%s", module_name, sdk_version)
            raise
        except Exception as e:
            logger.error(
                "Unexpected provider error for %s@%s: %s", module_name, sdk_version, e
            )
            raise UpstreamFetchError(module_name, str(e)) from e

        partials = {p.source: record for p, record in zip(providers, records)}
        return merge_records(module_name, sdk_version, partials)

    async def close(self) -> None:
        """Close every provider."""
        for provider in (self.registry, self.repository, self.docs):
            await provider.close()

    async def __aenter__(self) -> "SourceAggregator":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
