"""Unit tests for the OptimizationAdvisor."""

import json

import pytest

from expo_sdk_engine.advisor import OptimizationAdvisor
from expo_sdk_engine.generators import BuildConfigGenerator, BundlerConfigGenerator
from expo_sdk_engine.models import PRIORITY_ORDER, ProjectContext


@pytest.fixture
def advisor(engine_config) -> OptimizationAdvisor:
    return OptimizationAdvisor(engine_config)


def priorities(suggestions):
    return [s.priority for s in suggestions]


def test_app_manifest_missing_fields(advisor):
    suggestions = advisor.generate_optimization_suggestions(
        "app.json", {"expo": {}}, ProjectContext()
    )

    assert [s.title for s in suggestions] == [
        "Missing App Icon",
        "Asset Bundle Patterns Optimization",
    ]
    assert suggestions[0].category == "maintainability"
    assert suggestions[1].category == "performance"


def test_app_manifest_from_json_string(advisor):
    content = json.dumps({"expo": {"icon": "./icon.png", "assetBundlePatterns": ["**/*"]}})

    assert advisor.generate_optimization_suggestions("app-manifest", content, ProjectContext()) == []


def test_build_config_rules(advisor):
    content = {"build": {"production": {"ios": {"resourceClass": "default"}}}}

    suggestions = advisor.generate_optimization_suggestions(
        "eas.json", content, ProjectContext(platforms=["android"])
    )

    assert [s.title for s in suggestions] == [
        "iOS Build Resource Class",
        "Android Build Type Optimization",
    ]


def test_generated_build_config_for_ios_is_clean(advisor):
    context = ProjectContext(platforms=["ios"])
    content = BuildConfigGenerator().render(context)

    assert advisor.generate_optimization_suggestions("build-config", content, context) == []


def test_bundler_without_web_resolver(advisor):
    context = ProjectContext(platforms=["ios", "web"])
    content = BundlerConfigGenerator().render(ProjectContext(platforms=["ios"]))

    suggestions = advisor.generate_optimization_suggestions("metro.config.js", content, context)

    assert len(suggestions) == 1
    assert suggestions[0].priority == "high"
    assert suggestions[0].category == "compatibility"


def test_bundler_with_web_resolver(advisor, universal_context):
    content = BundlerConfigGenerator().render(universal_context)

    assert advisor.generate_optimization_suggestions(
        "bundler-config", content, universal_context
    ) == []


def test_stale_sdk_is_high_security(advisor):
    suggestions = advisor.generate_optimization_suggestions(
        "app.json", {"expo": {"icon": "i"}}, ProjectContext(sdk_version="sdk-47")
    )

    assert priorities(suggestions) == ["high", "medium"]
    assert suggestions[0].category == "security"
    assert suggestions[0].fix_command == "npx expo install --fix"
    assert "SDK 47" in suggestions[0].description


@pytest.mark.parametrize("sdk_version", [None, "latest", "sdk-49"])
def test_current_sdk_not_flagged(advisor, sdk_version):
    suggestions = advisor.generate_optimization_suggestions(
        "unknown-kind", {}, ProjectContext(sdk_version=sdk_version)
    )

    assert suggestions == []


def test_sorted_by_priority_with_stable_ties(advisor):
    """Test high before medium with discovery order kept inside a priority."""
    suggestions = advisor.generate_optimization_suggestions(
        "eas.json",
        {"build": {"production": {"ios": {"resourceClass": "default"}}}},
        ProjectContext(platforms=["android"], sdk_version="sdk-48"),
    )

    ranks = [PRIORITY_ORDER[p] for p in priorities(suggestions)]
    assert ranks == sorted(ranks)
    assert [s.title for s in suggestions] == [
        "SDK Version Update",
        "iOS Build Resource Class",
        "Android Build Type Optimization",
    ]


@pytest.mark.parametrize(
    "kind,content,title",
    [
        ("app-manifest", '{"expo": "oops"}', "Missing App Icon"),
        ("app-manifest", "[1, 2]", "Missing App Icon"),
        ("build-config", '{"build": ["production"]}', "Android Build Type Optimization"),
        (
            "build-config",
            {"build": {"production": {"ios": None, "android": "x"}}},
            "Android Build Type Optimization",
        ),
    ],
)
def test_malformed_sections_are_treated_as_empty(advisor, kind, content, title):
    suggestions = advisor.generate_optimization_suggestions(
        kind, content, ProjectContext(platforms=["android"])
    )

    assert title in [s.title for s in suggestions]
