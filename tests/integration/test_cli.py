import json

import pytest
from typer.testing import CliRunner

from expo_sdk_engine.cli import app
from expo_sdk_engine.models import DeprecationReport

runner = CliRunner()


@pytest.fixture(autouse=True)
def offline_env(monkeypatch):
    """Keep every CLI run on the bundled offline data."""
    monkeypatch.delenv("EXPO_ENGINE_OFFLINE", raising=False)
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)


def test_module_command():
    """Test resolving a module offline."""
    result = runner.invoke(app, ["module", "camera"])

    assert result.exit_code == 0
    assert '"package_name": "expo-camera"' in result.stdout
    assert '"module_type": "core"' in result.stdout


def test_module_permissions_for_web():
    result = runner.invoke(app, ["module", "camera", "--permissions", "--platform", "web"])

    assert result.exit_code == 0
    assert '"required": []' in result.stdout


def test_migrate_command():
    result = runner.invoke(app, ["migrate", "sdk-48", "sdk-49"])

    assert result.exit_code == 0
    assert '"estimated_effort": "medium"' in result.stdout
    assert "Update Expo SDK" in result.stdout


def test_matrix_command():
    result = runner.invoke(app, ["matrix"])

    assert result.exit_code == 0
    assert '"overall_compatibility": 100' in result.stdout


def test_scan_command_without_deprecations(tmp_path):
    source = tmp_path / "App.js"
    source.write_text("import { Camera } from 'expo-camera';\n")

    result = runner.invoke(app, ["scan", str(source)])

    assert result.exit_code == 0
    assert '"migration_required": false' in result.stdout


def test_scan_command_requires_migration(tmp_path):
    """Test that an error-level deprecation exits with code 1."""
    source = tmp_path / "App.js"
    source.write_text("import AppLoading from 'expo-app-loading';\n")

    result = runner.invoke(app, ["scan", str(source)])

    assert result.exit_code == 1
    assert "Migration required" in result.output


def test_template_command_to_file(tmp_path):
    """Test that template --output writes the artifact."""
    output_file = tmp_path / "app.json"

    result = runner.invoke(
        app,
        [
            "template",
            "app-manifest",
            "--name",
            "Test App",
            "-p",
            "ios",
            "-p",
            "android",
            "--output",
            str(output_file),
        ],
    )

    assert result.exit_code == 0
    assert "Generated:" in result.stdout
    manifest = json.loads(output_file.read_text())
    assert manifest["expo"]["slug"] == "test-app"
    assert manifest["expo"]["ios"]["supportsTablet"] is True


def test_template_command_unknown_kind():
    result = runner.invoke(app, ["template", "tsconfig.json"])

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_command_command():
    result = runner.invoke(app, ["command", "build", "ios"])

    assert result.exit_code == 0
    assert "eas build --platform ios --development-client" in result.stdout


def test_command_command_invalid_platform():
    result = runner.invoke(app, ["command", "build", "xbox"])

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_command_command_bad_flag():
    result = runner.invoke(app, ["command", "update", "ios", "--flag", "nokey"])

    assert result.exit_code != 0


def test_snack_command():
    result = runner.invoke(app, ["snack", "camera", "-p", "ios", "-p", "android"])

    assert result.exit_code == 0
    assert "https://snack.expo.dev/" in result.stdout
    assert '"expo-camera"' in result.stdout


def test_snack_command_code():
    result = runner.invoke(app, ["snack", "camera", "--code", "-p", "ios"])

    assert result.exit_code == 0
    assert "Platform.OS === 'ios'" in result.stdout


def test_optimize_command(tmp_path):
    source = tmp_path / "app.json"
    source.write_text(json.dumps({"expo": {"name": "x"}}))

    result = runner.invoke(app, ["optimize", "app.json", str(source)])

    assert result.exit_code == 0
    assert "Missing App Icon" in result.stdout


def test_plugin_command_valid():
    result = runner.invoke(
        app,
        ["plugin", "expo-location", "--config", '{"locationAlwaysAndWhenInUsePermission": "ok"}'],
    )

    assert result.exit_code == 0
    assert '"is_valid": true' in result.stdout


def test_plugin_command_invalid():
    result = runner.invoke(app, ["plugin", "expo-camera", "-p", "web"])

    assert result.exit_code == 1
    assert '"is_valid": false' in result.stdout


@pytest.mark.parametrize(
    "args",
    [
        ["deprecations", "camera"],
        ["migrate", "sdk-48", "sdk-49"],
        ["matrix"],
    ],
)
def test_online_options_are_forwarded(mocker, args):
    """Test that the async commands pass --online and the token through."""
    run = mocker.patch("expo_sdk_engine.cli._run_async", return_value={})

    result = runner.invoke(app, [*args, "--online", "--github-token", "tok"])

    assert result.exit_code == 0
    _, online, github_token = run.call_args.args
    assert online is True
    assert github_token == "tok"


def test_scan_forwards_online_options(mocker, tmp_path):
    source = tmp_path / "App.js"
    source.write_text("const x = 1;\n")
    run = mocker.patch(
        "expo_sdk_engine.cli._run_async",
        return_value=DeprecationReport(),
    )

    result = runner.invoke(app, ["scan", str(source), "--online", "--github-token", "tok"])

    assert result.exit_code == 0
    assert run.call_args.args[1:] == (True, "tok")
