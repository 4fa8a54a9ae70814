"""Unit tests for data models."""

import dataclasses

import pytest

from expo_sdk_engine.knowledge.modules import MODULE_METHODS
from expo_sdk_engine.models import (
    APP_MANIFEST,
    BUILD_CONFIG,
    BUNDLER_CONFIG,
    Deprecation,
    ProjectContext,
    normalize_artifact_kind,
)


class TestNormalizeArtifactKind:
    """Test artifact kind labels and file name aliases."""

    @pytest.mark.parametrize(
        "kind,expected",
        [
            ("app-manifest", APP_MANIFEST),
            ("app.json", APP_MANIFEST),
            ("eas.json", BUILD_CONFIG),
            ("metro.config.js", BUNDLER_CONFIG),
            ("bundler-config", BUNDLER_CONFIG),
        ],
    )
    def test_known_kinds(self, kind, expected):
        assert normalize_artifact_kind(kind) == expected

    def test_unknown_kind_passes_through(self):
        assert normalize_artifact_kind("babel.config.js") == "babel.config.js"


def test_deprecation_is_immutable():
    """Test that cached records cannot be patched in place."""
    deprecation = Deprecation(reason="Replaced", since="SDK 45")

    with pytest.raises(dataclasses.FrozenInstanceError):
        deprecation.reason = "changed"


def test_project_context_targets():
    """Test platform membership on a project context."""
    context = ProjectContext(platforms=["ios", "web"])

    assert context.targets("ios")
    assert context.targets("web")
    assert not context.targets("android")


def test_project_context_defaults_are_independent():
    """Test that default platform lists are not shared."""
    first = ProjectContext()
    first.platforms.append("ios")

    assert ProjectContext().platforms == []


def test_method_catalog_entries_have_availability():
    """Test that every catalog method records when it became available."""
    for methods in MODULE_METHODS.values():
        for method in methods:
            assert method.availability.since.startswith("SDK ")
