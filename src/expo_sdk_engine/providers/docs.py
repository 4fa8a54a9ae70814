"""Documentation site provider.

Reads a module's documentation page and takes its description from the
page's ``<meta name="description">`` tag.
"""

import logging
from typing import Any

from bs4 import BeautifulSoup

from expo_sdk_engine.providers.base import Source, docs_version_path
from expo_sdk_engine.providers.http import HttpProvider

logger = logging.getLogger(__name__)

DOCS_URL = "https://docs.expo.dev"


def documentation_url(module_name: str, sdk_version: str, base_url: str = DOCS_URL) -> str:
    """Return the documentation page URL for a module and SDK label."""
    return f"{base_url}/versions/{docs_version_path(sdk_version)}/sdk/{module_name}/"


def meta_description(page: str) -> str:
    """Return the page's meta description, or "" when it has none."""
    soup = BeautifulSoup(page, "html.parser")
    tag = soup.find("meta", attrs={"name": "description"})
    if tag is None:
        return ""
    return (tag.get("content") or "").strip()


def fallback_description(module_name: str) -> str:
    """Return the description used when a page has none."""
    return f"Expo SDK module for {module_name} functionality"


class DocsProvider(HttpProvider):
    """Provider for module descriptions from the documentation site.

    Record keys: ``description``, ``documentation_url``.
    """

    def __init__(self, base_url: str = DOCS_URL, timeout: float = 10.0) -> None:
        super().__init__(timeout=timeout)
        self.base_url = base_url.rstrip("/")

    @property
    def name(self) -> str:
        return "docs"

    @property
    def source(self) -> Source:
        return "docs"

    async def fetch(self, module_name: str, sdk_version: str) -> dict[str, Any]:
        """Fetch the module's documentation page.

        Args:
            module_name: Short module name.
            sdk_version: SDK label selecting the versioned docs.

        Returns:
            Documentation record for the module.

        Raises:
            UpstreamFetchError: If the page cannot be fetched.
        """
        url = documentation_url(module_name, sdk_version, self.base_url)
        logger.debug("Fetching documentation page %s", url)

        page = await self._get(url, module_name, as_json=False)
        description = meta_description(page)
        return {
            "description": description or fallback_description(module_name),
            "documentation_url": url,
        }
