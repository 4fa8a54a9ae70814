"""Deprecation detection and migration guide generation.

Severity of a deprecation grows with its age: the further the
deprecating release lies behind the newest known SDK, the more urgent
the warning.
"""

import logging
import re
from typing import Optional

from expo_sdk_engine.cache import TTLCache
from expo_sdk_engine.config import DEFAULT_LATEST_SDK, EngineConfig
from expo_sdk_engine.knowledge.migrations import (
    BREAKING_CHANGES,
    DEPRECATED_CALLS,
    DEPRECATED_MODULES,
    pair_key,
)
from expo_sdk_engine.knowledge.versions import LATEST, parse_sdk_number, sdk_number_or_latest
from expo_sdk_engine.models import (
    BreakingChange,
    DeprecatedModule,
    DeprecationNotice,
    DeprecationReport,
    Effort,
    MigrationGuide,
    MigrationStep,
    Severity,
)
from expo_sdk_engine.resolver import ModuleResolver

logger = logging.getLogger(__name__)

IMPORT_RE = re.compile(r"""import\s+.*?\s+from\s+['"]([^'"]+)['"]""")
CALL_SITE_RE = re.compile(r"(\w+)\.(\w+)\(")

_SDK_PACKAGE_PREFIX = "expo-"


def severity_of(deprecated_since: str, latest_sdk: int = DEFAULT_LATEST_SDK) -> Severity:
    """Derive a warning level from the release that deprecated an item.

    Args:
        deprecated_since: Release label such as "SDK 46".
        latest_sdk: Major number of the newest known SDK.

    Returns:
        "error" when deprecated three or more releases ago, "warning" for
        one or two, otherwise "info". Unparseable labels are "info".
    """
    since = parse_sdk_number(deprecated_since, latest_sdk)
    if since is None:
        return "info"

    diff = latest_sdk - since
    if diff >= 3:
        return "error"
    if diff >= 1:
        return "warning"
    return "info"


def estimate_effort(
    breaking_changes: tuple[BreakingChange, ...],
    deprecated_modules: tuple[DeprecatedModule, ...],
) -> Effort:
    """Estimate migration effort from the number of combined changes."""
    change_count = len(breaking_changes) + len(deprecated_modules)
    if change_count == 0:
        return "low"
    if change_count <= 3:
        return "medium"
    return "high"


class DeprecationAnalyzer:
    """Finds deprecated APIs and builds migration guides.

    Attributes:
        resolver: Module resolver used to load module records.
        config: Engine configuration (supplies the latest SDK number).
    """

    def __init__(
        self,
        resolver: ModuleResolver,
        config: Optional[EngineConfig] = None,
        migration_cache: Optional[TTLCache[MigrationGuide]] = None,
    ) -> None:
        self.resolver = resolver
        self.config = config or resolver.config
        self.migration_cache = migration_cache or TTLCache(
            "migrations", self.config.cache_ttl_seconds
        )

    def severity_of(self, deprecated_since: str) -> Severity:
        """``severity_of`` against the configured latest SDK."""
        return severity_of(deprecated_since, self.config.latest_sdk_number)

    async def detect_deprecated_apis(
        self, module_name: str, sdk_version: str = LATEST
    ) -> list[DeprecationNotice]:
        """List deprecated items of a module.

        Emits one notice for a deprecated module (always "error"), one per
        deprecated method (severity from its age) and one per deprecated
        constant (always "warning").

        Args:
            module_name: Short module name.
            sdk_version: SDK label.

        Returns:
            Deprecation notices, empty when nothing is deprecated.

        Raises:
            UpstreamFetchError: If the module cannot be resolved.
        """
        module = await self.resolver.resolve(module_name, sdk_version)
        notices: list[DeprecationNotice] = []

        if module.deprecated:
            notices.append(
                DeprecationNotice(
                    module=module_name,
                    item_type="module",
                    item_name=module_name,
                    deprecated_since=module.deprecated.since,
                    replacement=module.deprecated.replacement,
                    warning_level="error",
                    message=f"Module {module_name} is deprecated: {module.deprecated.reason}",
                    migration_url=(
                        f"https://docs.expo.dev/versions/latest/sdk/{module_name}/#migration"
                    ),
                )
            )

        for method in module.methods:
            since = method.availability.deprecated
            if since:
                notices.append(
                    DeprecationNotice(
                        module=module_name,
                        item_type="method",
                        item_name=method.name,
                        deprecated_since=since,
                        replacement=method.availability.replacement,
                        warning_level=self.severity_of(since),
                        message=f"Method {method.name} is deprecated since {since}",
                        migration_url=method.availability.migration_url,
                    )
                )

        for constant_name, constant in module.constants.items():
            if constant.deprecated:
                notices.append(
                    DeprecationNotice(
                        module=module_name,
                        item_type="constant",
                        item_name=constant_name,
                        deprecated_since=constant.deprecated.since,
                        replacement=constant.deprecated.replacement,
                        warning_level="warning",
                        message=(
                            f"Constant {constant_name} is deprecated: "
                            f"{constant.deprecated.reason}"
                        ),
                    )
                )

        logger.debug("Found %d deprecation(s) in %s", len(notices), module_name)
        return notices

    async def generate_migration_guide(
        self, from_version: str, to_version: str
    ) -> MigrationGuide:
        """Build the upgrade guide between two SDK releases.

        Args:
            from_version: Current SDK label (e.g. "sdk-48").
            to_version: Target SDK label (e.g. "sdk-49").

        Returns:
            Cached or newly built MigrationGuide.
        """
        key = pair_key(from_version, to_version)
        cached = self.migration_cache.get(key)
        if cached is not None:
            return cached

        logger.info("Generating migration guide %s -> %s", from_version, to_version)
        breaking_changes = BREAKING_CHANGES.get(key, ())
        deprecated_modules = DEPRECATED_MODULES.get(key, ())

        guide = MigrationGuide(
            from_version=from_version,
            to_version=to_version,
            breaking_changes=breaking_changes,
            deprecated_modules=deprecated_modules,
            migration_steps=self._migration_steps(from_version, to_version, breaking_changes),
            estimated_effort=estimate_effort(breaking_changes, deprecated_modules),
            notes=(
                f"Migration from {from_version} to {to_version}. "
                "Please test thoroughly before deploying."
            ),
        )
        self.migration_cache.set(key, guide)
        return guide

    def _migration_steps(
        self,
        from_version: str,
        to_version: str,
        breaking_changes: tuple[BreakingChange, ...],
    ) -> tuple[MigrationStep, ...]:
        target = sdk_number_or_latest(to_version, self.config.latest_sdk_number)
        steps = [
            MigrationStep(
                step_number=1,
                title="Update Expo SDK",
                description=f"Upgrade from {from_version} to {to_version}",
                commands=(f"npx expo install expo@^{target}.0.0", "npx expo install --fix"),
                verification_steps=("Run npx expo-doctor to check for issues",),
            ),
            MigrationStep(
                step_number=2,
                title="Update Dependencies",
                description="Update related packages and dependencies",
                commands=("npm update", "npx expo install --fix"),
                verification_steps=("Check package.json for version conflicts",),
            ),
        ]

        for change in breaking_changes:
            steps.append(
                MigrationStep(
                    step_number=len(steps) + 1,
                    title=f"Fix Breaking Change: {change.module}",
                    description=change.description,
                    file_changes=(f"Update {change.module} usage: {change.action_required}",),
                    verification_steps=(f"Test {change.module} functionality",),
                )
            )
        return tuple(steps)

    async def analyze_code_for_deprecated_usage(
        self, code_snippet: str, sdk_version: str = LATEST
    ) -> DeprecationReport:
        """Scan source code for deprecated modules and call sites.

        Imports of SDK packages are checked with ``detect_deprecated_apis``;
        ``Receiver.method(`` call sites are checked against the table of
        deprecated calls.

        Args:
            code_snippet: JavaScript or TypeScript source.
            sdk_version: SDK label the code targets.

        Returns:
            DeprecationReport. ``migration_required`` is True when any notice
            has "error" severity.
        """
        report = DeprecationReport()

        for target in IMPORT_RE.findall(code_snippet):
            if not target.startswith(_SDK_PACKAGE_PREFIX):
                continue
            module_name = target[len(_SDK_PACKAGE_PREFIX):]
            report.warnings.extend(
                await self.detect_deprecated_apis(module_name, sdk_version)
            )

        for receiver, method_name in CALL_SITE_RE.findall(code_snippet):
            entry = DEPRECATED_CALLS.get((receiver, method_name))
            if entry is None:
                continue
            notice = DeprecationNotice(
                module=entry["module"],
                item_type="method",
                item_name=method_name,
                deprecated_since=entry["since"],
                replacement=entry["replacement"],
                warning_level=self.severity_of(entry["since"]),
                message=entry["message"],
            )
            report.warnings.append(notice)
            report.suggestions.append(
                f"Consider replacing {receiver}.{method_name}() with "
                f"{notice.replacement or 'the new API'}"
            )

        report.migration_required = any(
            w.warning_level == "error" for w in report.warnings
        )
        return report
