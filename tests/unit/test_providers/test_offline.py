"""Unit tests for the offline providers and provider selection."""

import pytest

from expo_sdk_engine.config import EngineConfig
from expo_sdk_engine.providers import (
    DocsProvider,
    GitHubRepositoryProvider,
    NpmRegistryProvider,
    OfflineDocsProvider,
    OfflineRegistryProvider,
    OfflineRepositoryProvider,
    build_providers,
)
from expo_sdk_engine.providers.base import default_package_name, docs_version_path
from expo_sdk_engine.providers.offline import DEFAULT_PACKAGE_VERSION


@pytest.mark.parametrize(
    "name,expected",
    [
        ("camera", "expo-camera"),
        ("expo-camera", "expo-camera"),
        ("@react-native-async-storage/async-storage", "@react-native-async-storage/async-storage"),
    ],
)
def test_default_package_name(name, expected):
    assert default_package_name(name) == expected


def test_docs_version_path():
    assert docs_version_path("latest") == "latest"
    assert docs_version_path("sdk-47") == "v47.0.0"
    assert docs_version_path("nightly") == "latest"


@pytest.mark.asyncio
async def test_offline_registry_uses_release_table():
    provider = OfflineRegistryProvider()

    latest = await provider.fetch("camera", "latest")
    older = await provider.fetch("camera", "sdk-48")
    unknown = await provider.fetch("haptics", "latest")

    assert latest["package_name"] == "expo-camera"
    assert latest["version"] == "13.4.0"
    assert older["version"] == "13.2.1"
    assert unknown["version"] == DEFAULT_PACKAGE_VERSION
    assert latest["peer_dependencies"] == {}


@pytest.mark.asyncio
async def test_offline_repository_and_docs():
    repository = await OfflineRepositoryProvider().fetch("location", "latest")
    docs = await OfflineDocsProvider().fetch("location", "latest")

    assert repository["repository_url"].endswith("/packages/expo-location")
    assert docs["description"] == "Expo SDK module for location functionality"
    assert docs["documentation_url"] == "https://docs.expo.dev/versions/latest/sdk/location/"


def test_build_providers_offline():
    registry, repository, docs = build_providers(EngineConfig())

    assert isinstance(registry, OfflineRegistryProvider)
    assert isinstance(repository, OfflineRepositoryProvider)
    assert isinstance(docs, OfflineDocsProvider)
    assert [p.source for p in (registry, repository, docs)] == ["registry", "repository", "docs"]


def test_build_providers_online():
    config = EngineConfig(offline=False, github_token="ghp_test", request_timeout=3.0)

    registry, repository, docs = build_providers(config)

    assert isinstance(registry, NpmRegistryProvider)
    assert isinstance(repository, GitHubRepositoryProvider)
    assert isinstance(docs, DocsProvider)
    assert repository.github_token == "ghp_test"
    assert registry.timeout == 3.0
