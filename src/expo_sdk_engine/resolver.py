"""Module resolution with caching.

The ModuleResolver turns an aggregated provider record into a complete,
immutable Module by adding platform support, permissions, the API
catalog and examples from the static knowledge tables. Unknown modules
are not an error: they resolve with empty catalogs.
"""

import logging
import re
from datetime import UTC, datetime
from typing import Optional

from expo_sdk_engine.aggregator import AggregatedRecord, SourceAggregator
from expo_sdk_engine.cache import TTLCache
from expo_sdk_engine.config import EngineConfig
from expo_sdk_engine.knowledge import modules as kb
from expo_sdk_engine.knowledge.versions import LATEST, SDK_VERSIONS
from expo_sdk_engine.models import (
    APIReference,
    CodeExample,
    InstallationSteps,
    Method,
    Module,
    ModuleType,
    PermissionRequirements,
    PlatformCompatibility,
    VersionInfo,
)
from expo_sdk_engine.providers.base import default_package_name

logger = logging.getLogger(__name__)

_GENERICS_RE = re.compile(r"<([^>]+)>")

# platform -> predicate deciding whether a permission name applies to it
_PERMISSION_FILTERS = {
    "ios": lambda perm: not perm.startswith("android."),
    "android": lambda perm: "iOS" not in perm,
    "web": lambda perm: False,
}


def classify_module(module_name: str) -> ModuleType:
    """Return "deprecated", "core" or "community" for a module name."""
    if module_name in kb.MODULE_DEPRECATIONS:
        return "deprecated"
    return "core" if module_name in kb.CORE_MODULES else "community"


def filter_permissions(
    permissions: PermissionRequirements, platform: str
) -> PermissionRequirements:
    """Keep only the permissions that apply to ``platform``.

    Args:
        permissions: Unfiltered requirements.
        platform: Target platform. Unknown platforms keep everything.

    Returns:
        New PermissionRequirements with filtered required/optional lists.
    """
    keep = _PERMISSION_FILTERS.get(platform, lambda perm: True)
    return PermissionRequirements(
        required=[p for p in permissions.required if keep(p)],
        optional=[p for p in permissions.optional if keep(p)],
        description=dict(permissions.description),
    )


class ModuleResolver:
    """Resolves SDK modules and answers questions about them.

    Resolved modules are cached per ``name@sdk_version`` for the configured
    TTL. Concurrent misses for the same key may each aggregate; the last
    writer's record wins.

    Attributes:
        aggregator: Source aggregator used on cache misses.
        config: Engine configuration.
    """

    def __init__(
        self,
        aggregator: SourceAggregator,
        config: Optional[EngineConfig] = None,
        module_cache: Optional[TTLCache[Module]] = None,
        api_cache: Optional[TTLCache[APIReference]] = None,
        version_cache: Optional[TTLCache[VersionInfo]] = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            aggregator: Aggregator queried on cache misses.
            config: Engine configuration. Defaults to ``EngineConfig()``.
            module_cache: Cache for resolved modules.
            api_cache: Cache for API references.
            version_cache: Cache for SDK version info.
        """
        self.aggregator = aggregator
        self.config = config or EngineConfig()
        ttl = self.config.cache_ttl_seconds
        self.module_cache = module_cache or TTLCache("modules", ttl)
        self.api_cache = api_cache or TTLCache("api", ttl)
        self.version_cache = version_cache or TTLCache("versions", ttl)

    async def resolve(self, module_name: str, sdk_version: str = LATEST) -> Module:
        """Resolve a module for an SDK release.

        Args:
            module_name: Short module name (e.g. "camera").
            sdk_version: SDK label. Defaults to "latest".

        Returns:
            The cached Module if still fresh, otherwise a newly built one.

        Raises:
            UpstreamFetchError: If any provider lookup fails.
        """
        cache_key = f"{module_name}@{sdk_version}"
        cached = self.module_cache.get(cache_key)
        if cached is not None:
            logger.debug("Module cache hit for %s", cache_key)
            return cached

        logger.info("Resolving SDK module %s", cache_key)
        record = await self.aggregator.aggregate(module_name, sdk_version)
        module = self.build_module(record)
        self.module_cache.set(cache_key, module)
        return module

    def build_module(self, record: AggregatedRecord) -> Module:
        """Build a Module from an aggregated record and the knowledge tables.

        Args:
            record: Merged provider record.

        Returns:
            New immutable Module.
        """
        name = record.module_name
        package_name = record.package_name or default_package_name(name)
        return Module(
            name=name,
            package_name=package_name,
            description=record.description or "",
            version=record.version or "unknown",
            sdk_version=record.sdk_version,
            installation=f"npx expo install {package_name}",
            platforms=kb.MODULE_PLATFORMS.get(name, kb.DEFAULT_PLATFORMS),
            permissions=tuple(kb.MODULE_PERMISSIONS.get(name, kb.EMPTY_PERMISSIONS)["required"]),
            dependencies=dict(record.dependencies),
            peer_dependencies=dict(record.peer_dependencies),
            methods=kb.MODULE_METHODS.get(name, ()),
            constants=dict(kb.MODULE_CONSTANTS.get(name, {})),
            types=dict(kb.MODULE_TYPES.get(name, {})),
            examples=kb.MODULE_EXAMPLES.get(name, ()),
            documentation_url=record.documentation_url,
            repository_url=record.repository_url,
            last_modified=datetime.now(UTC),
            module_type=classify_module(name),
            deprecated=kb.MODULE_DEPRECATIONS.get(name),
        )

    async def get_permission_requirements(
        self, module_name: str, platform: Optional[str] = None
    ) -> PermissionRequirements:
        """Return required and optional permissions for a module.

        Args:
            module_name: Short module name.
            platform: Optional platform to filter the permissions for.

        Returns:
            PermissionRequirements, empty for unknown modules.
        """
        table = kb.MODULE_PERMISSIONS.get(module_name, kb.EMPTY_PERMISSIONS)
        permissions = PermissionRequirements(
            required=list(table["required"]),
            optional=list(table["optional"]),
            description=dict(table["description"]),
        )
        if platform:
            return filter_permissions(permissions, platform)
        return permissions

    async def generate_installation_steps(
        self,
        module_name: str,
        platform: Optional[list[str]] = None,
        project_type: str = "managed",
        typescript: bool = True,
    ) -> InstallationSteps:
        """Build install commands, configuration steps and usage notes.

        Args:
            module_name: Short module name.
            platform: Platforms the project targets.
            project_type: "managed" or "bare".
            typescript: Whether the project uses TypeScript.

        Returns:
            InstallationSteps. Unknown modules get install commands only.
        """
        module = await self.resolve(module_name)
        logger.debug(
            "Installation steps for %s (platform=%s, project_type=%s, typescript=%s)",
            module_name,
            platform,
            project_type,
            typescript,
        )

        commands = [f"npx expo install {module.package_name}"]
        if module.peer_dependencies:
            commands.append(f"npx expo install {' '.join(module.peer_dependencies)}")

        return InstallationSteps(
            commands=commands,
            config_steps=list(kb.CONFIG_STEPS.get(module_name, ())),
            additional_notes=list(kb.ADDITIONAL_NOTES.get(module_name, ())),
        )

    async def get_platform_compatibility(
        self, module_name: str, sdk_version: str = LATEST
    ) -> list[PlatformCompatibility]:
        """Return per-platform support details for a module."""
        module = await self.resolve(module_name, sdk_version)
        limitations = kb.PLATFORM_LIMITATIONS.get(module_name, {})
        notes = kb.PLATFORM_NOTES.get(module_name, {})
        min_versions = kb.MIN_PLATFORM_VERSIONS.get(module_name, {})
        return [
            PlatformCompatibility(
                platform=platform,
                supported=platform in module.platforms,
                min_version=min_versions.get(platform, ""),
                limitations=limitations.get(platform, ()),
                notes=notes.get(platform, ""),
            )
            for platform in ("ios", "android", "web")
        ]

    async def get_api_reference(
        self, module_name: str, sdk_version: str = LATEST
    ) -> APIReference:
        """Return the exports (methods, constants, types) of a module.

        Args:
            module_name: Short module name.
            sdk_version: SDK label.

        Returns:
            Cached or newly built APIReference.
        """
        cache_key = f"api_{module_name}@{sdk_version}"
        cached = self.api_cache.get(cache_key)
        if cached is not None:
            return cached

        module = await self.resolve(module_name, sdk_version)
        exports: dict[str, dict[str, str]] = {}
        for method in module.methods:
            exports[method.name] = {
                "type": "function",
                "signature": method.signature,
                "description": method.description,
            }
        for key, constant in module.constants.items():
            exports[key] = {
                "type": "constant",
                "signature": f"{constant.name}: {constant.type}",
                "description": constant.description,
            }
        for key, type_def in module.types.items():
            exports[key] = {
                "type": type_def.kind,
                "signature": type_def.definition,
                "description": type_def.description,
            }

        reference = APIReference(
            module_name=module.name, namespace=module.package_name, exports=exports
        )
        self.api_cache.set(cache_key, reference)
        return reference

    @staticmethod
    def analyze_method_signature(method: Method) -> dict:
        """Break a method signature into parameters, return type and generics.

        Args:
            method: Method to analyze.

        Returns:
            Dictionary with ``parameters``, ``return_type``, ``generics`` and
            ``overloads``.
        """
        match = _GENERICS_RE.search(method.signature)
        generics = [g.strip() for g in match.group(1).split(",")] if match else []
        return {
            "parameters": [
                {
                    "name": p.name,
                    "type": p.type,
                    "required": p.required,
                    "default": p.default,
                    "description": p.description,
                }
                for p in method.parameters
            ],
            "return_type": method.return_type,
            "generics": generics,
            "overloads": [method.signature],
        }

    async def generate_usage_examples(
        self, module_name: str, method_name: Optional[str] = None
    ) -> list[CodeExample]:
        """Return examples for a method, or for the whole module.

        An unknown method name yields an empty list.
        """
        module = await self.resolve(module_name)
        if method_name:
            method = module.get_method(method_name)
            return list(method.examples) if method else []
        return list(module.examples)

    async def get_sdk_version_info(self, version: str) -> VersionInfo:
        """Return release metadata for an SDK label.

        Unknown labels resolve to the latest release.
        """
        cached = self.version_cache.get(version)
        if cached is not None:
            return cached

        info = SDK_VERSIONS.get(version, SDK_VERSIONS[LATEST])
        self.version_cache.set(version, info)
        return info

    async def get_available_sdk_versions(self) -> list[VersionInfo]:
        """Return every known release, newest first."""
        infos = [await self.get_sdk_version_info(label) for label in SDK_VERSIONS]
        return sorted(infos, key=lambda info: info.release_date, reverse=True)
