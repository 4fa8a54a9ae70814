"""Unit tests for the npm registry provider."""

from typing import AsyncGenerator

import pytest
from aiohttp import ClientError
from aioresponses import aioresponses

from expo_sdk_engine.exceptions import UpstreamFetchError
from expo_sdk_engine.providers.registry import NpmRegistryProvider

CAMERA_URL = "https://registry.npmjs.org/expo-camera/latest"


@pytest.fixture
async def registry() -> AsyncGenerator[NpmRegistryProvider, None]:
    """Return an NpmRegistryProvider instance for testing."""
    provider = NpmRegistryProvider()
    yield provider
    await provider.close()


@pytest.mark.asyncio
async def test_fetch_successful(registry: NpmRegistryProvider) -> None:
    """Test extracting package fields from the registry manifest."""
    with aioresponses() as mock:
        mock.get(
            CAMERA_URL,
            payload={
                "name": "expo-camera",
                "version": "13.4.4",
                "dependencies": {"invariant": "^2.2.4"},
                "peerDependencies": {"react": "*"},
            },
        )

        record = await registry.fetch("camera", "latest")

    assert record == {
        "package_name": "expo-camera",
        "version": "13.4.4",
        "dependencies": {"invariant": "^2.2.4"},
        "peer_dependencies": {"react": "*"},
    }


@pytest.mark.asyncio
async def test_fetch_missing_dependency_maps(registry: NpmRegistryProvider) -> None:
    """Test that absent dependency maps become empty dicts."""
    with aioresponses() as mock:
        mock.get(CAMERA_URL, payload={"name": "expo-camera", "version": "13.4.4"})

        record = await registry.fetch("camera", "latest")

    assert record["dependencies"] == {}
    assert record["peer_dependencies"] == {}


@pytest.mark.asyncio
async def test_fetch_scoped_package_name(registry: NpmRegistryProvider) -> None:
    """Test that full package names are used as-is."""
    url = "https://registry.npmjs.org/@expo/vector-icons/latest"
    with aioresponses() as mock:
        mock.get(url, payload={"name": "@expo/vector-icons", "version": "13.0.0"})

        record = await registry.fetch("@expo/vector-icons", "latest")

    assert record["package_name"] == "@expo/vector-icons"


@pytest.mark.asyncio
async def test_fetch_not_found(registry: NpmRegistryProvider) -> None:
    """Test that a 404 raises UpstreamFetchError naming the module."""
    with aioresponses() as mock:
        mock.get(CAMERA_URL, status=404)

        with pytest.raises(UpstreamFetchError) as exc_info:
            await registry.fetch("camera", "latest")

    assert exc_info.value.module_name == "camera"
    assert exc_info.value.provider == "npm"
    assert "404" in str(exc_info.value)


@pytest.mark.asyncio
async def test_fetch_network_error(registry: NpmRegistryProvider) -> None:
    """Test that connection errors are wrapped."""
    with aioresponses() as mock:
        mock.get(CAMERA_URL, exception=ClientError("connection reset"))

        with pytest.raises(UpstreamFetchError, match="network error"):
            await registry.fetch("camera", "latest")


@pytest.mark.asyncio
async def test_fetch_invalid_json(registry: NpmRegistryProvider) -> None:
    """Test that an undecodable body is an upstream failure."""
    with aioresponses() as mock:
        mock.get(CAMERA_URL, body="<html>not json</html>")

        with pytest.raises(UpstreamFetchError, match="invalid response body"):
            await registry.fetch("camera", "latest")


@pytest.mark.asyncio
async def test_context_manager_closes_session() -> None:
    """Test that leaving the context closes the HTTP session."""
    async with NpmRegistryProvider() as provider:
        session = await provider._get_session()

    assert session.closed
    assert provider._session is None
