"""GitHub repository provider.

The SDK modules live in one monorepo, so the repository record combines
repository-wide activity with the module's package directory URL.
"""

import logging
from typing import Any, Optional

import aiohttp

from expo_sdk_engine.providers.base import Source, default_package_name
from expo_sdk_engine.providers.http import HttpProvider

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
MONOREPO = "expo/expo"


class GitHubRepositoryProvider(HttpProvider):
    """Provider for repository information from the GitHub API.

    Record keys: ``repository_url``, ``stars``, ``open_issues``,
    ``last_activity``.

    Attributes:
        github_token: Optional personal access token for higher rate limits.
    """

    def __init__(
        self,
        github_token: Optional[str] = None,
        repository: str = MONOREPO,
        timeout: float = 10.0,
    ) -> None:
        """Initialize GitHubRepositoryProvider.

        Args:
            github_token: Optional GitHub token for API authentication.
            repository: "owner/name" of the repository holding the modules.
            timeout: Total request timeout in seconds.
        """
        super().__init__(timeout=timeout)
        self.github_token = github_token
        self.repository = repository

    @property
    def name(self) -> str:
        return "GitHub"

    @property
    def source(self) -> Source:
        return "repository"

    def _create_session(self) -> aiohttp.ClientSession:
        headers = {"Accept": "application/vnd.github+json"}
        if self.github_token:
            headers["Authorization"] = f"Bearer {self.github_token}"
        return aiohttp.ClientSession(
            headers=headers,
            timeout=aiohttp.ClientTimeout(total=self.timeout),
        )

    async def fetch(self, module_name: str, sdk_version: str) -> dict[str, Any]:
        """Fetch repository activity and the module's source URL.

        Args:
            module_name: Short module name.
            sdk_version: SDK label (unused).

        Returns:
            Repository record for the module.

        Raises:
            UpstreamFetchError: If the GitHub lookup fails.
        """
        url = f"{GITHUB_API_URL}/repos/{self.repository}"
        logger.debug("Fetching repository info from %s", url)

        data = await self._get(url, module_name)
        html_url = data.get("html_url", f"https://github.com/{self.repository}")
        branch = data.get("default_branch", "main")
        package = default_package_name(module_name)
        return {
            "repository_url": f"{html_url}/tree/{branch}/packages/{package}",
            "stars": data.get("stargazers_count", 0),
            "open_issues": data.get("open_issues_count", 0),
            "last_activity": data.get("pushed_at"),
        }
