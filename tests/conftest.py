"""Shared fixtures for the expo_sdk_engine test suite."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from expo_sdk_engine.aggregator import SourceAggregator
from expo_sdk_engine.config import EngineConfig
from expo_sdk_engine.models import ProjectContext
from expo_sdk_engine.providers import (
    BaseProvider,
    OfflineDocsProvider,
    OfflineRegistryProvider,
    OfflineRepositoryProvider,
)
from expo_sdk_engine.resolver import ModuleResolver


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Return a fake clock starting at t=1000."""
    return FakeClock()


@pytest.fixture
def engine_config() -> EngineConfig:
    """Return the default offline engine configuration."""
    return EngineConfig()


def make_provider(name: str, source: str, record: dict[str, Any]) -> MagicMock:
    """Return a mock provider whose fetch resolves to ``record``."""
    mock = MagicMock(spec=BaseProvider)
    mock.name = name
    mock.source = source
    mock.fetch = AsyncMock(return_value=record)
    mock.close = AsyncMock()
    return mock


@pytest.fixture
def registry_record() -> dict[str, Any]:
    """Sample registry record for expo-camera."""
    return {
        "package_name": "expo-camera",
        "version": "13.4.0",
        "dependencies": {"react-native": "^0.72.0"},
        "peer_dependencies": {"expo-modules-core": "*"},
    }


@pytest.fixture
def repository_record() -> dict[str, Any]:
    """Sample repository record for expo-camera."""
    return {
        "repository_url": "https://github.com/expo/expo/tree/main/packages/expo-camera",
        "stars": 30000,
        "open_issues": 1200,
        "last_activity": "2023-09-20T10:00:00Z",
    }


@pytest.fixture
def docs_record() -> dict[str, Any]:
    """Sample documentation record for expo-camera."""
    return {
        "description": "A React component that renders a preview of the device camera.",
        "documentation_url": "https://docs.expo.dev/versions/latest/sdk/camera/",
    }


@pytest.fixture
def mock_providers(registry_record, repository_record, docs_record) -> tuple[MagicMock, ...]:
    """Return mocked (registry, repository, docs) providers."""
    return (
        make_provider("npm", "registry", registry_record),
        make_provider("GitHub", "repository", repository_record),
        make_provider("docs", "docs", docs_record),
    )


@pytest.fixture
def offline_aggregator() -> SourceAggregator:
    """Return an aggregator over the offline providers."""
    return SourceAggregator(
        OfflineRegistryProvider(), OfflineRepositoryProvider(), OfflineDocsProvider()
    )


@pytest.fixture
def resolver(offline_aggregator, engine_config) -> ModuleResolver:
    """Return a resolver over the offline providers."""
    return ModuleResolver(offline_aggregator, engine_config)


@pytest.fixture
def mobile_context() -> ProjectContext:
    """iOS + Android project context."""
    return ProjectContext(
        name="TestApp",
        platforms=["ios", "android"],
        bundle_identifier="com.t.app",
        package_name="com.t.app",
    )


@pytest.fixture
def universal_context() -> ProjectContext:
    """iOS + Android + web project context."""
    return ProjectContext(name="My Cool App!", platforms=["ios", "android", "web"])
