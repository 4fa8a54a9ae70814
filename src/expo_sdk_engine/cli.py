"""Command-line interface for expo_sdk_engine.

Provides subcommands for module lookup, deprecation analysis, migration
guides, compatibility matrices and configuration/command synthesis.
Results are printed as JSON.
"""

import asyncio
import dataclasses
import json
import logging
from pathlib import Path
from typing import Annotated, Any, Awaitable, Callable, Mapping, Optional

import typer
from rich.console import Console

from expo_sdk_engine.config import EngineConfig
from expo_sdk_engine.engine import SDKEngine
from expo_sdk_engine.exceptions import EngineError
from expo_sdk_engine.models import ProjectContext

app = typer.Typer(
    name="expo-sdk-engine",
    help="Expo SDK module metadata, migration and configuration synthesis.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger("expo_sdk_engine")

SdkOption = Annotated[
    str, typer.Option("--sdk", help="SDK version label, e.g. 'latest' or 'sdk-48'")
]
PlatformsOption = Annotated[
    Optional[list[str]],
    typer.Option("--platform", "-p", help="Target platform (repeatable)"),
]
OnlineOption = Annotated[
    bool, typer.Option("--online", help="Query npm, GitHub and the docs site")
]
GithubTokenOption = Annotated[
    Optional[str],
    typer.Option(
        "--github-token",
        envvar="GITHUB_TOKEN",
        help="GitHub API token for higher rate limits",
    ),
]
VerboseOption = Annotated[
    bool, typer.Option("--verbose", "-v", help="Enable verbose output")
]


def _setup_logging(verbose: bool) -> None:
    """Configure logging level based on verbosity flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.getLogger("expo_sdk_engine").setLevel(level)


def _build_config(online: bool = False, github_token: Optional[str] = None) -> EngineConfig:
    config = EngineConfig.from_env()
    if online:
        config = dataclasses.replace(config, offline=False)
    if github_token:
        config = dataclasses.replace(config, github_token=github_token)
    return config


def _to_data(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_data(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Mapping):
        return {key: _to_data(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_data(item) for item in value]
    return value


def _print_json(value: Any) -> None:
    console.print_json(json.dumps(_to_data(value), default=str))


def _fail(message: str) -> None:
    err_console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(code=1)


def _run_async(
    operation: Callable[[SDKEngine], Awaitable[Any]],
    online: bool = False,
    github_token: Optional[str] = None,
) -> Any:
    """Run an async engine operation, mapping engine errors to exit code 1."""

    async def run() -> Any:
        async with SDKEngine(_build_config(online, github_token)) as engine:
            return await operation(engine)

    try:
        return asyncio.run(run())
    except EngineError as e:
        _fail(str(e))


def _context(
    name: Optional[str],
    platforms: Optional[list[str]],
    sdk: Optional[str],
    bundle_id: Optional[str] = None,
    package: Optional[str] = None,
    profile: Optional[str] = None,
) -> ProjectContext:
    return ProjectContext(
        name=name,
        platforms=list(platforms or []),
        sdk_version=sdk,
        bundle_identifier=bundle_id,
        package_name=package,
        build_profile=profile,
    )


def _parse_flags(flags: Optional[list[str]]) -> dict[str, str]:
    parsed: dict[str, str] = {}
    for item in flags or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got '{item}'", param_hint="--flag")
        parsed[key] = value
    return parsed


@app.command()
def module(
    name: Annotated[str, typer.Argument(help="Module name, e.g. 'camera'")],
    sdk: SdkOption = "latest",
    permissions: Annotated[
        bool, typer.Option("--permissions", help="Show permission requirements only")
    ] = False,
    platform: Annotated[
        Optional[str], typer.Option("--platform", "-p", help="Filter permissions by platform")
    ] = None,
    online: OnlineOption = False,
    github_token: GithubTokenOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Resolve an SDK module and print its metadata."""
    _setup_logging(verbose)

    async def operation(engine: SDKEngine) -> Any:
        if permissions:
            return await engine.resolver.get_permission_requirements(name, platform)
        return await engine.resolve(name, sdk)

    _print_json(_run_async(operation, online, github_token))


@app.command()
def deprecations(
    name: Annotated[str, typer.Argument(help="Module name")],
    sdk: SdkOption = "latest",
    online: OnlineOption = False,
    github_token: GithubTokenOption = None,
    verbose: VerboseOption = False,
) -> None:
    """List deprecated APIs of a module."""
    _setup_logging(verbose)
    _print_json(
        _run_async(
            lambda engine: engine.detect_deprecated_apis(name, sdk), online, github_token
        )
    )


@app.command()
def scan(
    source: Annotated[
        Path,
        typer.Argument(help="JavaScript/TypeScript file to scan", exists=True, readable=True),
    ],
    sdk: SdkOption = "latest",
    online: OnlineOption = False,
    github_token: GithubTokenOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Scan source code for deprecated SDK usage.

    Exit codes:
        0 - No migration required
        1 - Error-level deprecations found or error occurred
    """
    _setup_logging(verbose)
    code = source.read_text(encoding="utf-8")
    report = _run_async(
        lambda engine: engine.deprecations.analyze_code_for_deprecated_usage(code, sdk),
        online,
        github_token,
    )
    _print_json(report)
    if report.migration_required:
        err_console.print("[red]Migration required[/red]")
        raise typer.Exit(code=1)


@app.command()
def migrate(
    from_version: Annotated[str, typer.Argument(help="Current SDK label, e.g. 'sdk-48'")],
    to_version: Annotated[str, typer.Argument(help="Target SDK label, e.g. 'sdk-49'")],
    online: OnlineOption = False,
    github_token: GithubTokenOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the migration guide between two SDK releases."""
    _setup_logging(verbose)
    _print_json(
        _run_async(
            lambda engine: engine.generate_migration_guide(from_version, to_version),
            online,
            github_token,
        )
    )


@app.command()
def matrix(
    sdk: SdkOption = "latest",
    online: OnlineOption = False,
    github_token: GithubTokenOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the compatibility matrix for an SDK release."""
    _setup_logging(verbose)
    _print_json(
        _run_async(
            lambda engine: engine.get_compatibility_matrix(sdk), online, github_token
        )
    )


@app.command()
def template(
    kind: Annotated[
        str,
        typer.Argument(help="app-manifest, build-config or bundler-config (or a file name)"),
    ],
    name: Annotated[Optional[str], typer.Option("--name", "-n", help="Project name")] = None,
    platforms: PlatformsOption = None,
    sdk: Annotated[Optional[str], typer.Option("--sdk", help="SDK version label")] = None,
    bundle_id: Annotated[
        Optional[str], typer.Option("--bundle-id", help="iOS bundle identifier")
    ] = None,
    package: Annotated[
        Optional[str], typer.Option("--package", help="Android package name")
    ] = None,
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Write the artifact to a file")
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Generate a configuration artifact and validate it."""
    _setup_logging(verbose)
    context = _context(name, platforms, sdk, bundle_id, package)
    try:
        result = SDKEngine(_build_config()).generate_template(kind, context)
    except EngineError as e:
        _fail(str(e))

    for error in result.validation_errors:
        err_console.print(f"[red]Validation error:[/red] {error}")
    for suggestion in result.suggestions:
        err_console.print(f"[yellow]Suggestion:[/yellow] {suggestion}")

    if output:
        output.write_text(result.content, encoding="utf-8")
        console.print(f"[green]Generated:[/green] {output}")
    else:
        console.print(result.content, markup=False, highlight=False)


@app.command()
def command(
    operation: Annotated[str, typer.Argument(help="build, submit, update or credentials")],
    platform: Annotated[str, typer.Argument(help="ios, android or all")],
    profile: Annotated[str, typer.Option("--profile", help="Build profile")] = "development",
    credentials_operation: Annotated[
        str,
        typer.Option("--operation", help="Credentials operation: configure, reset, validate"),
    ] = "configure",
    flags: Annotated[
        Optional[list[str]], typer.Option("--flag", help="Extra flag as key=value (repeatable)")
    ] = None,
) -> None:
    """Synthesize a build-service command."""
    synthesizer = SDKEngine(_build_config()).commands
    extra = _parse_flags(flags)
    generators = {
        "build": synthesizer.generate_build_command,
        "submit": synthesizer.generate_submit_command,
        "update": synthesizer.generate_update_command,
    }
    try:
        if operation == "credentials":
            result = synthesizer.generate_credentials_command(
                platform, profile, credentials_operation, extra
            )
        elif operation in generators:
            result = generators[operation](platform, profile, extra)
        else:
            _fail(
                f"Unknown operation: {operation}. "
                "Valid operations: build, submit, update, credentials"
            )
    except EngineError as e:
        _fail(str(e))
    _print_json(result)


@app.command()
def snack(
    modules: Annotated[list[str], typer.Argument(help="Modules used by the example")],
    pattern: Annotated[str, typer.Option("--pattern", help="Usage pattern")] = "basic",
    name: Annotated[Optional[str], typer.Option("--name", "-n", help="Project name")] = None,
    platforms: PlatformsOption = None,
    sdk: Annotated[Optional[str], typer.Option("--sdk", help="SDK version label")] = None,
    show_code: Annotated[
        bool, typer.Option("--code", help="Print the example code instead of the URLs")
    ] = False,
) -> None:
    """Compose a shareable sandbox for a set of modules."""
    engine = SDKEngine(_build_config())
    config = engine.generate_snack_compatible_code(modules, pattern, _context(name, platforms, sdk))
    if show_code:
        console.print(config.code, markup=False, highlight=False)
        return
    _print_json(engine.generate_snack_url(config))


@app.command()
def optimize(
    kind: Annotated[str, typer.Argument(help="Artifact kind or file name")],
    source: Annotated[
        Path, typer.Argument(help="Artifact file to analyze", exists=True, readable=True)
    ],
    platforms: PlatformsOption = None,
    sdk: Annotated[Optional[str], typer.Option("--sdk", help="SDK version label")] = None,
) -> None:
    """Suggest optimizations for a configuration artifact."""
    content = source.read_text(encoding="utf-8")
    suggestions = SDKEngine(_build_config()).generate_optimization_suggestions(
        kind, content, _context(None, platforms, sdk)
    )
    _print_json(suggestions)


@app.command()
def plugin(
    name: Annotated[str, typer.Argument(help="Plugin package, e.g. 'expo-camera'")],
    options: Annotated[
        Optional[str], typer.Option("--config", help="Plugin options as a JSON object")
    ] = None,
    platforms: PlatformsOption = None,
    sdk: Annotated[Optional[str], typer.Option("--sdk", help="SDK version label")] = None,
) -> None:
    """Validate a config plugin entry."""
    try:
        plugin_config = json.loads(options) if options else {}
    except json.JSONDecodeError as e:
        _fail(f"Invalid --config JSON: {e}")
    result = SDKEngine(_build_config()).validate_plugin_configuration(
        name, plugin_config, _context(None, platforms, sdk)
    )
    _print_json(result)
    if not result.is_valid:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
