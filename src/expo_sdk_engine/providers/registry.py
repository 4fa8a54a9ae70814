"""npm registry provider.

Fetches the published manifest of a module's package and extracts the
package name, version and dependency maps.
"""

import logging
from typing import Any

from expo_sdk_engine.providers.base import Source, default_package_name
from expo_sdk_engine.providers.http import HttpProvider

logger = logging.getLogger(__name__)

NPM_REGISTRY_URL = "https://registry.npmjs.org"


class NpmRegistryProvider(HttpProvider):
    """Provider for package metadata from the npm registry.

    Record keys: ``package_name``, ``version``, ``dependencies``,
    ``peer_dependencies``.
    """

    def __init__(self, base_url: str = NPM_REGISTRY_URL, timeout: float = 10.0) -> None:
        """Initialize the registry provider.

        Args:
            base_url: Registry root URL.
            timeout: Total request timeout in seconds.
        """
        super().__init__(timeout=timeout)
        self.base_url = base_url.rstrip("/")

    @property
    def name(self) -> str:
        return "npm"

    @property
    def source(self) -> Source:
        return "registry"

    async def fetch(self, module_name: str, sdk_version: str) -> dict[str, Any]:
        """Fetch the latest published manifest for the module's package.

        Args:
            module_name: Short module name.
            sdk_version: SDK label (unused; the registry is version-agnostic).

        Returns:
            Registry record for the package.

        Raises:
            UpstreamFetchError: If the registry lookup fails.
        """
        package = default_package_name(module_name)
        url = f"{self.base_url}/{package}/latest"
        logger.debug("Fetching npm manifest from %s", url)

        data = await self._get(url, module_name)
        return {
            "package_name": data.get("name", package),
            "version": data.get("version"),
            "dependencies": data.get("dependencies") or {},
            "peer_dependencies": data.get("peerDependencies") or {},
        }
