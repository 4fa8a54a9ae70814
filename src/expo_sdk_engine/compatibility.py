"""Scored compatibility matrix across modules and platforms."""

import logging
from typing import Optional

from expo_sdk_engine.cache import TTLCache
from expo_sdk_engine.exceptions import EngineError
from expo_sdk_engine.models import CompatibilityMatrix, ModuleCompatibility, PlatformSupport
from expo_sdk_engine.resolver import ModuleResolver

logger = logging.getLogger(__name__)

MATRIX_MODULES = ("camera", "location", "notifications", "constants")

PLATFORM_SUPPORT = {
    "ios": PlatformSupport(
        supported=True,
        minimum_version="11.0",
        limitations=("Some features require iOS 13+",),
    ),
    "android": PlatformSupport(
        supported=True,
        minimum_version="6.0",
        limitations=("Camera2 API required",),
        known_issues=("Some emulators may have camera issues",),
    ),
    "web": PlatformSupport(
        supported=True,
        minimum_version="Chrome 80+",
        limitations=("Limited camera controls", "No background processing"),
        known_issues=("HTTPS required for camera access",),
    ),
}


def overall_score(
    modules: dict[str, ModuleCompatibility], platforms: dict[str, PlatformSupport]
) -> int:
    """Average the supported-module and supported-platform percentages.

    Returns:
        Rounded score clamped to [0, 100]. Empty groups count as 0%.
    """
    module_pct = (
        100 * sum(1 for m in modules.values() if m.supported) / len(modules)
        if modules
        else 0.0
    )
    platform_pct = (
        100 * sum(1 for p in platforms.values() if p.supported) / len(platforms)
        if platforms
        else 0.0
    )
    return max(0, min(100, round((module_pct + platform_pct) / 2)))


class CompatibilityMatrixBuilder:
    """Builds and caches a CompatibilityMatrix per SDK release.

    Attributes:
        resolver: Module resolver used for each matrix module.
        modules: Module roster evaluated for every matrix.
    """

    def __init__(
        self,
        resolver: ModuleResolver,
        matrix_cache: Optional[TTLCache[CompatibilityMatrix]] = None,
        modules: tuple[str, ...] = MATRIX_MODULES,
    ) -> None:
        self.resolver = resolver
        self.modules = modules
        self.matrix_cache = matrix_cache or TTLCache(
            "compatibility", resolver.config.cache_ttl_seconds
        )

    async def get_compatibility_matrix(self, sdk_version: str) -> CompatibilityMatrix:
        """Return the compatibility matrix for an SDK release.

        A module that fails to resolve is recorded as unsupported rather than
        failing the whole matrix.

        Args:
            sdk_version: SDK label.

        Returns:
            Cached or newly built CompatibilityMatrix.
        """
        cache_key = f"compatibility_{sdk_version}"
        cached = self.matrix_cache.get(cache_key)
        if cached is not None:
            return cached

        logger.info("Building compatibility matrix for %s", sdk_version)
        modules = {
            name: await self._module_compatibility(name, sdk_version)
            for name in self.modules
        }
        platforms = dict(PLATFORM_SUPPORT)

        matrix = CompatibilityMatrix(
            sdk_version=sdk_version,
            modules=modules,
            platforms=platforms,
            overall_compatibility=overall_score(modules, platforms),
        )
        self.matrix_cache.set(cache_key, matrix)
        return matrix

    async def _module_compatibility(
        self, module_name: str, sdk_version: str
    ) -> ModuleCompatibility:
        try:
            module = await self.resolver.resolve(module_name, sdk_version)
        except EngineError as e:
            logger.warning(
                "Treating %s as unsupported for %s: %s", module_name, sdk_version, e
            )
            return ModuleCompatibility(
                supported=False,
                version="unknown",
                issues=("Module not available in this SDK version",),
                alternative="Check latest SDK for replacement",
            )

        deprecation = module.deprecated
        if deprecation is None:
            return ModuleCompatibility(supported=True, version=module.version)

        return ModuleCompatibility(
            supported=False,
            version=module.version,
            issues=(f"Deprecated since {deprecation.since}",),
            workarounds=(
                (f"Use {deprecation.replacement} instead",) if deprecation.replacement else ()
            ),
            alternative=deprecation.replacement,
        )
