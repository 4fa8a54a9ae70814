"""Unit tests for the build/submit configuration generator."""

import json

import pytest

from expo_sdk_engine.generators import BuildConfigGenerator
from expo_sdk_engine.models import ProjectContext


@pytest.fixture
def generator() -> BuildConfigGenerator:
    return BuildConfigGenerator()


def test_profiles(generator, mobile_context):
    template = generator.generate(mobile_context)
    config = json.loads(template.content)

    assert config["cli"] == {"version": ">= 5.9.0"}
    assert set(config["build"]) == {"development", "preview", "production"}
    assert config["build"]["development"]["developmentClient"] is True
    assert config["build"]["development"]["distribution"] == "internal"
    assert config["build"]["preview"]["distribution"] == "internal"
    assert config["build"]["production"]["android"]["resourceClass"] == "large"
    assert template.config_type == "build-config"
    assert template.schema_version == "5.9.0"
    assert template.validation_errors == []
    assert template.suggestions == []


def test_submit_blocks_follow_platforms(generator):
    ios_only = generator.build(ProjectContext(platforms=["ios"]))["submit"]["production"]
    android_only = generator.build(ProjectContext(platforms=["android"]))["submit"]["production"]

    assert set(ios_only) == {"ios"}
    assert ios_only["ios"]["appleId"] == "your-apple-id@example.com"
    assert "appleTeamId" in ios_only["ios"]
    assert set(android_only) == {"android"}
    assert android_only["android"]["serviceAccountKeyPath"] == "./service-account-key.json"


def test_submit_empty_without_platforms(generator):
    assert generator.build(ProjectContext())["submit"] == {"production": {}}


def test_validate_missing_build(generator):
    errors, suggestions = generator.validate({"cli": {"version": ">= 5.0.0"}})

    assert errors == ["Missing required field: build"]
    assert suggestions == []


def test_validate_suggestions(generator):
    errors, suggestions = generator.validate(json.dumps({"build": {"preview": {}}}))

    assert errors == []
    assert suggestions == ["Specify EAS CLI version: cli.version", "Add production build profile"]


def test_validate_non_object_build(generator):
    errors, suggestions = generator.validate('{"build": ["production"], "cli": "5.9.0"}')

    assert errors == ["Field build must be an object"]
    assert suggestions == ["Specify EAS CLI version: cli.version"]
