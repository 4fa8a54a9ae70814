"""Core data models for expo_sdk_engine.

This module defines the records produced by the engine: resolved SDK
modules and their API surface, version and migration information,
compatibility summaries, generated configuration artifacts, synthesized
commands, sandbox (Snack) compositions and optimization advice.

Records that are cached by the engine are frozen, and their mapping
fields are read-only views. A refresh replaces the cached record, it
never patches it.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from types import MappingProxyType
from typing import Any, Literal, Mapping, Optional

Platform = Literal["ios", "android", "web", "universal"]
ModuleType = Literal["core", "community", "deprecated"]
Severity = Literal["info", "warning", "error"]
Priority = Literal["high", "medium", "low"]
Effort = Literal["low", "medium", "high"]

APP_MANIFEST = "app-manifest"
BUILD_CONFIG = "build-config"
BUNDLER_CONFIG = "bundler-config"

ARTIFACT_KINDS = (APP_MANIFEST, BUILD_CONFIG, BUNDLER_CONFIG)

# Legacy file names accepted wherever an artifact kind is expected
_ARTIFACT_ALIASES = {
    "app.json": APP_MANIFEST,
    "eas.json": BUILD_CONFIG,
    "metro.config.js": BUNDLER_CONFIG,
}

SEVERITY_ORDER = {"info": 0, "warning": 1, "error": 2}
PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}


def normalize_artifact_kind(kind: str) -> str:
    """Map an artifact kind or legacy file name to its canonical label.

    Args:
        kind: Artifact kind such as "app-manifest" or "app.json".

    Returns:
        The canonical label, or the input unchanged if it is not recognized.
    """
    return _ARTIFACT_ALIASES.get(kind, kind)


def _freeze(record: Any, *names: str) -> None:
    """Replace mapping fields of a frozen record with read-only views.

    Plain dict values one level down are wrapped as well.
    """
    for name in names:
        value = getattr(record, name)
        frozen = {
            key: MappingProxyType(dict(item)) if isinstance(item, dict) else item
            for key, item in value.items()
        }
        object.__setattr__(record, name, MappingProxyType(frozen))


@dataclass(frozen=True)
class CodeExample:
    """A usage example attached to a module or method."""

    title: str
    description: str
    code: str
    language: str = "typescript"
    platforms: tuple[str, ...] = ()
    dependencies: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _freeze(self, "dependencies")


@dataclass(frozen=True)
class Parameter:
    """A single method parameter."""

    name: str
    type: str
    required: bool = True
    default: Optional[str] = None
    description: str = ""


@dataclass(frozen=True)
class Availability:
    """Lifecycle of a method across SDK releases.

    Attributes:
        since: First SDK release exposing the method (e.g. "SDK 40").
        deprecated: SDK release that deprecated the method, if any.
        replacement: Name of the API that replaces it.
        migration_url: Documentation for moving off the method.
    """

    since: str
    deprecated: Optional[str] = None
    replacement: Optional[str] = None
    migration_url: Optional[str] = None


@dataclass(frozen=True)
class Deprecation:
    """Deprecation record for a module or constant."""

    reason: str
    since: str
    replacement: Optional[str] = None


@dataclass(frozen=True)
class Method:
    """A callable exported by an SDK module."""

    name: str
    signature: str
    description: str
    return_type: str
    availability: Availability
    parameters: tuple[Parameter, ...] = ()
    examples: tuple[CodeExample, ...] = ()
    platforms: tuple[str, ...] = ()
    permissions: tuple[str, ...] = ()


@dataclass(frozen=True)
class Constant:
    """A named constant exported by an SDK module."""

    name: str
    type: str
    value: Any
    description: str
    platforms: tuple[str, ...] = ()
    deprecated: Optional[Deprecation] = None


@dataclass(frozen=True)
class TypeDefinition:
    """A named type (interface, enum, alias) exported by an SDK module."""

    name: str
    kind: str
    definition: str
    description: str
    properties: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _freeze(self, "properties")


@dataclass(frozen=True)
class Module:
    """Fully resolved SDK module.

    Built by the ModuleResolver from the aggregated provider record plus
    the static knowledge tables. One instance exists per (name, sdk_version)
    cache entry and is replaced wholesale on refresh.

    Attributes:
        name: Short module name (e.g. "camera").
        package_name: Registry package (e.g. "expo-camera").
        description: Human-readable summary from the documentation source.
        version: Package version from the registry source.
        sdk_version: SDK label the module was resolved against.
        installation: Install instruction.
        platforms: Supported platforms.
        permissions: Permissions the module requires.
        dependencies: Runtime dependencies from the registry.
        peer_dependencies: Peer dependencies from the registry.
        methods: Ordered exported methods.
        constants: Exported constants keyed by name.
        types: Exported types keyed by name.
        examples: Module-level usage examples.
        documentation_url: Documentation page.
        repository_url: Source repository location.
        last_modified: When this record was resolved.
        module_type: "core", "community" or "deprecated".
        deprecated: Module-level deprecation record, if any.
    """

    name: str
    package_name: str
    description: str
    version: str
    sdk_version: str
    installation: str
    platforms: tuple[str, ...]
    permissions: tuple[str, ...]
    dependencies: Mapping[str, str]
    peer_dependencies: Mapping[str, str]
    methods: tuple[Method, ...]
    constants: Mapping[str, Constant]
    types: Mapping[str, TypeDefinition]
    examples: tuple[CodeExample, ...]
    documentation_url: Optional[str]
    repository_url: Optional[str]
    last_modified: datetime
    module_type: ModuleType
    deprecated: Optional[Deprecation] = None

    def __post_init__(self) -> None:
        _freeze(self, "dependencies", "peer_dependencies", "constants", "types")

    def get_method(self, name: str) -> Optional[Method]:
        """Return the method with the given name, if the module exports it."""
        for method in self.methods:
            if method.name == name:
                return method
        return None


@dataclass(frozen=True)
class VersionInfo:
    """Metadata for one SDK release label."""

    version: str
    release_date: date
    status: Literal["latest", "supported", "deprecated", "unsupported"]
    changelog: str
    modules: Mapping[str, str] = field(default_factory=dict)
    support_ends: Optional[date] = None

    def __post_init__(self) -> None:
        _freeze(self, "modules")


@dataclass(frozen=True)
class PlatformCompatibility:
    """Support details for one module on one platform."""

    platform: str
    supported: bool
    min_version: str
    limitations: tuple[str, ...] = ()
    notes: str = ""


@dataclass(frozen=True)
class APIReference:
    """Exports of a module keyed by exported name."""

    module_name: str
    namespace: str
    exports: Mapping[str, Mapping[str, str]]

    def __post_init__(self) -> None:
        _freeze(self, "exports")


@dataclass
class PermissionRequirements:
    """Required and optional permissions with descriptions."""

    required: list[str] = field(default_factory=list)
    optional: list[str] = field(default_factory=list)
    description: dict[str, str] = field(default_factory=dict)


@dataclass
class InstallationSteps:
    """Commands and notes needed to add a module to a project."""

    commands: list[str]
    config_steps: list[str] = field(default_factory=list)
    additional_notes: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DeprecationNotice:
    """A deprecated item found in a module or in user code.

    Severity (``warning_level``) is derived from how old the deprecation is.
    """

    module: str
    item_type: Literal["module", "method", "property", "constant"]
    item_name: str
    deprecated_since: str
    warning_level: Severity
    message: str
    replacement: Optional[str] = None
    removal_date: Optional[str] = None
    migration_url: Optional[str] = None


@dataclass(frozen=True)
class ChangeExample:
    """Before/after snippet for a breaking change."""

    before: str
    after: str


@dataclass(frozen=True)
class BreakingChange:
    """A documented incompatibility between two SDK releases."""

    module: str
    change_type: Literal[
        "method_removed", "method_renamed", "parameter_changed", "behavior_changed"
    ]
    description: str
    action_required: str
    example: Optional[ChangeExample] = None


@dataclass(frozen=True)
class DeprecatedModule:
    """A module deprecated between two SDK releases."""

    name: str
    deprecated_since: str
    reason: str
    replacement: Optional[str] = None
    removal_date: Optional[str] = None
    migration_guide_url: Optional[str] = None


@dataclass(frozen=True)
class MigrationStep:
    """One numbered step of a migration guide."""

    step_number: int
    title: str
    description: str
    commands: tuple[str, ...] = ()
    file_changes: tuple[str, ...] = ()
    verification_steps: tuple[str, ...] = ()


@dataclass(frozen=True)
class MigrationGuide:
    """Upgrade instructions between two SDK releases."""

    from_version: str
    to_version: str
    breaking_changes: tuple[BreakingChange, ...]
    deprecated_modules: tuple[DeprecatedModule, ...]
    migration_steps: tuple[MigrationStep, ...]
    estimated_effort: Effort
    notes: str


@dataclass
class DeprecationReport:
    """Result of scanning a code snippet for deprecated API usage."""

    warnings: list[DeprecationNotice] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    migration_required: bool = False


@dataclass(frozen=True)
class ModuleCompatibility:
    """Compatibility of one module with an SDK release."""

    supported: bool
    version: str
    issues: tuple[str, ...] = ()
    workarounds: tuple[str, ...] = ()
    alternative: Optional[str] = None


@dataclass(frozen=True)
class PlatformSupport:
    """Support level of one platform for an SDK release."""

    supported: bool
    minimum_version: str
    limitations: tuple[str, ...] = ()
    known_issues: tuple[str, ...] = ()


@dataclass(frozen=True)
class CompatibilityMatrix:
    """Scored module and platform support for an SDK release."""

    sdk_version: str
    modules: Mapping[str, ModuleCompatibility]
    platforms: Mapping[str, PlatformSupport]
    overall_compatibility: int

    def __post_init__(self) -> None:
        _freeze(self, "modules", "platforms")


@dataclass
class ProjectContext:
    """Caller-supplied description of the project being configured.

    Supplied fresh per call and never persisted.
    """

    name: Optional[str] = None
    platforms: list[str] = field(default_factory=list)
    sdk_version: Optional[str] = None
    bundle_identifier: Optional[str] = None
    package_name: Optional[str] = None
    build_profile: Optional[str] = None

    def targets(self, platform: str) -> bool:
        """Return True if the project targets the given platform."""
        return platform in self.platforms


@dataclass
class ConfigTemplate:
    """A generated configuration artifact and its validation result."""

    content: str
    config_type: str
    validation_errors: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    schema_version: Optional[str] = None


@dataclass
class EasCommandResult:
    """A synthesized build-service command."""

    command: str
    description: str
    prerequisites: list[str]
    flags: dict[str, str]
    estimated_time: str
    documentation_url: str


@dataclass
class SnackConfig:
    """Inputs for a shareable sandbox."""

    dependencies: dict[str, str]
    code: str
    name: str
    description: Optional[str] = None
    platforms: list[str] = field(default_factory=list)
    sdk_version: Optional[str] = None


@dataclass
class SnackResult:
    """A published sandbox with its URLs and compatibility score."""

    url: str
    embed_url: str
    web_player_url: str
    dependencies: dict[str, str]
    compatibility_score: int
    platform_support: list[str]


@dataclass
class OptimizationSuggestion:
    """A single piece of advice about a generated artifact."""

    category: Literal["performance", "security", "compatibility", "maintainability"]
    priority: Priority
    title: str
    description: str
    fix_command: Optional[str] = None
    documentation_url: Optional[str] = None


@dataclass
class PluginValidationResult:
    """Outcome of validating a config plugin entry."""

    plugin_name: str
    is_valid: bool
    version_compatible: bool
    platform_support: list[str]
    issues: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
