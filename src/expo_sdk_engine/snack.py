"""Sandbox (Snack) composition.

Resolves sandbox dependencies for a module list, renders a runnable
example app and derives shareable URLs plus a compatibility score.
"""

import base64
import logging
import re
from datetime import UTC, datetime
from pathlib import Path
from typing import Optional

from expo_sdk_engine.config import EngineConfig
from expo_sdk_engine.generators.base import load_template
from expo_sdk_engine.knowledge.versions import LATEST, parse_sdk_number, sdk_number_or_latest
from expo_sdk_engine.models import ProjectContext, SnackConfig, SnackResult
from expo_sdk_engine.providers.base import default_package_name
from expo_sdk_engine.resolver import classify_module

logger = logging.getLogger(__name__)

SNACK_BASE_URL = "https://snack.expo.dev"
DEFAULT_SNACK_PLATFORMS = ("ios", "android", "web")

SNACK_UNSUPPORTED_PACKAGES = frozenset(
    {"@react-native-async-storage/async-storage", "react-native-sqlite-storage"}
)

THIRD_PARTY_PEER_DEPENDENCIES = {"react": ">=18.0.0", "react-native": ">=0.70.0"}

PLATFORM_LABELS = {"ios": "iOS", "android": "Android", "web": "Web"}

_SNACK_ID_RE = re.compile(r"[^a-zA-Z0-9]")


def import_name_of(module_name: str) -> str:
    """Return the PascalCase import binding for a module ("media-library" -> "MediaLibrary")."""
    return "".join(part[:1].upper() + part[1:] for part in module_name.split("-"))


def calculate_snack_compatibility(
    config: SnackConfig, latest_sdk: Optional[int] = None
) -> int:
    """Score how well a sandbox config will run, clamped to [0, 100].

    Args:
        config: Sandbox configuration.
        latest_sdk: Newest known SDK major. SDKs below it lose points.

    Returns:
        The compatibility score.
    """
    score = 100

    dep_count = len(config.dependencies)
    if dep_count > 10:
        score -= 20
    elif dep_count > 5:
        score -= 10

    if "web" in config.platforms:
        score += 5
    if len(config.platforms) < 3:
        score -= 15

    if config.sdk_version and latest_sdk is not None:
        major = parse_sdk_number(config.sdk_version, latest_sdk)
        if major is not None and major < latest_sdk:
            score -= 10

    return max(0, min(100, score))


class SnackComposer:
    """Composes sandbox configurations and their shareable URLs.

    Attributes:
        config: Engine configuration (supplies the latest SDK number).
        template: Jinja2 template for the example app.
    """

    def __init__(
        self, config: Optional[EngineConfig] = None, template_path: Optional[Path] = None
    ) -> None:
        self.config = config or EngineConfig()
        self.template = load_template("snack_app.js.j2", template_path)

    @property
    def latest_sdk(self) -> int:
        return self.config.latest_sdk_number

    def package_of(self, module_name: str) -> str:
        """Return the package name for an SDK module or third-party package."""
        if classify_module(module_name) == "community":
            return module_name
        return default_package_name(module_name)

    def resolve_dependencies(
        self, module_names: list[str], sdk_version: Optional[str] = None
    ) -> dict[str, str]:
        """Build the sandbox dependency map.

        The runtime package is pinned to the SDK major. SDK modules follow
        the same release line; third-party packages float on "latest" and
        bring their peer dependencies. Packages the sandbox cannot run are
        removed from the result.

        Args:
            module_names: SDK module names or third-party package names.
            sdk_version: SDK label, "latest" when omitted.

        Returns:
            Package name to version range map.
        """
        major = sdk_number_or_latest(sdk_version or LATEST, self.latest_sdk)
        dependencies = {"expo": f"~{major}.0.0"}
        sdk_packages: dict[str, str] = {}

        for name in module_names:
            if classify_module(name) == "community":
                dependencies[name] = "latest"
                dependencies.update(THIRD_PARTY_PEER_DEPENDENCIES)
            else:
                sdk_packages[default_package_name(name)] = f"~{major}.1.0"

        dependencies.update(sdk_packages)

        removed = SNACK_UNSUPPORTED_PACKAGES.intersection(dependencies)
        if removed:
            logger.info("Dropping sandbox-unsupported packages: %s", ", ".join(sorted(removed)))
        return {pkg: version for pkg, version in dependencies.items() if pkg not in removed}

    def generate_platform_specific_code(
        self, pattern: str, module_names: list[str], platforms: list[str]
    ) -> str:
        """Render the example app with one branch per known platform.

        Args:
            pattern: Usage pattern the example illustrates.
            module_names: Modules to import.
            platforms: Platforms to branch on. Unknown platforms are skipped.

        Returns:
            JavaScript source of the example app.
        """
        modules = [
            {"import_name": import_name_of(name), "package_name": self.package_of(name)}
            for name in module_names
        ]
        branches = [
            {"platform": platform, "label": PLATFORM_LABELS[platform]}
            for platform in platforms
            if platform in PLATFORM_LABELS
        ]
        return self.template.render(
            modules=modules,
            branches=branches,
            pattern=pattern,
            title=" + ".join(module_names),
        )

    def map_sdk_version(self, sdk_version: Optional[str]) -> str:
        """Map an SDK label to the sandbox's "<major>.0.0" form."""
        return f"{sdk_number_or_latest(sdk_version, self.latest_sdk)}.0.0"

    def generate_snack_compatible_code(
        self, module_names: list[str], pattern: str, context: ProjectContext
    ) -> SnackConfig:
        """Compose a sandbox configuration for a module list.

        Args:
            module_names: Modules the example uses.
            pattern: Usage pattern the example illustrates.
            context: Project description.

        Returns:
            SnackConfig with dependencies and rendered example code.
        """
        logger.info("Generating sandbox code for: %s", ", ".join(module_names))
        platforms = list(context.platforms or DEFAULT_SNACK_PLATFORMS)
        return SnackConfig(
            dependencies=self.resolve_dependencies(module_names, context.sdk_version),
            code=self.generate_platform_specific_code(pattern, module_names, platforms),
            name=f"{context.name or 'ExpoApp'} Example",
            description=f"Example using {', '.join(module_names)} modules",
            platforms=platforms,
            sdk_version=self.map_sdk_version(context.sdk_version),
        )

    def generate_snack_id(self, config: SnackConfig, now: Optional[datetime] = None) -> str:
        """Derive an opaque 12-character identifier from the name and a timestamp."""
        now = now or datetime.now(UTC)
        raw = f"{config.name}{int(now.timestamp() * 1000)}".encode("utf-8")
        return _SNACK_ID_RE.sub("", base64.b64encode(raw).decode("ascii"))[:12]

    def generate_snack_url(
        self, config: SnackConfig, now: Optional[datetime] = None
    ) -> SnackResult:
        """Build the shareable, embed and web-player URLs for a sandbox.

        Args:
            config: Sandbox configuration.
            now: Timestamp used for the identifier. Defaults to the current time.

        Returns:
            SnackResult with URLs and the compatibility score.
        """
        snack_id = self.generate_snack_id(config, now)
        logger.info("Generated sandbox %s for %s", snack_id, config.name)
        return SnackResult(
            url=f"{SNACK_BASE_URL}/{snack_id}",
            embed_url=f"{SNACK_BASE_URL}/embedded/{snack_id}",
            web_player_url=f"{SNACK_BASE_URL}/{snack_id}?platform=web",
            dependencies=dict(config.dependencies),
            compatibility_score=calculate_snack_compatibility(config, self.latest_sdk),
            platform_support=list(config.platforms or DEFAULT_SNACK_PLATFORMS),
        )
