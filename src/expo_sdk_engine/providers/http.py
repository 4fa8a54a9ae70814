from typing import Any, Optional

import aiohttp

from expo_sdk_engine.exceptions import UpstreamFetchError
from expo_sdk_engine.providers.base import BaseProvider


class HttpProvider(BaseProvider):
    """Provider that looks records up over HTTP.

    One aiohttp session is opened lazily and reused for every lookup made
    by the provider until ``close`` is awaited.
    """

    def __init__(self, timeout: float = 10.0) -> None:
        """Initialize the HttpProvider.

        Args:
            timeout: Total request timeout in seconds.
        """
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Return the open session, reopening it after ``close``."""
        if self._session is None or self._session.closed:
            self._session = self._create_session()
        return self._session

    def _create_session(self) -> aiohttp.ClientSession:
        """Open a session bounded by the provider timeout.

        Override to add default headers (the repository provider sends its
        token this way).
        """
        return aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout)
        )

    async def _get(self, url: str, module_name: str, as_json: bool = True) -> Any:
        """GET ``url`` and return the decoded body.

        Args:
            url: URL to fetch.
            module_name: Module being resolved, for error messages.
            as_json: Decode the body as JSON instead of text.

        Returns:
            Decoded JSON payload or response text.

        Raises:
            UpstreamFetchError: On a non-200 status, undecodable body or
                network error.
        """
        try:
            session = await self._get_session()
            async with session.get(url) as response:
                if response.status != 200:
                    raise UpstreamFetchError(
                        module_name,
                        f"{url} returned status {response.status}",
                        provider=self.name,
                    )
                if as_json:
                    return await response.json(content_type=None)
                return await response.text()
        except aiohttp.ClientError as e:
            raise UpstreamFetchError(
                module_name, f"network error: {e}", provider=self.name
            ) from e
        except ValueError as e:
            raise UpstreamFetchError(
                module_name, f"invalid response body: {e}", provider=self.name
            ) from e

    async def close(self) -> None:
        """Release the HTTP session if one is open."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "HttpProvider":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
