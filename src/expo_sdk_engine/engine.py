"""Engine facade wiring every component to one configuration.

Example:
    async with SDKEngine() as engine:
        module = await engine.resolve("camera")
        guide = await engine.generate_migration_guide("sdk-48", "sdk-49")
"""

import logging
from typing import Any, Optional

from expo_sdk_engine.advisor import OptimizationAdvisor
from expo_sdk_engine.aggregator import SourceAggregator
from expo_sdk_engine.commands import CommandSynthesizer
from expo_sdk_engine.compatibility import CompatibilityMatrixBuilder
from expo_sdk_engine.config import EngineConfig
from expo_sdk_engine.deprecation import DeprecationAnalyzer
from expo_sdk_engine.generators import get_generator
from expo_sdk_engine.knowledge.versions import LATEST
from expo_sdk_engine.models import (
    APP_MANIFEST,
    BUILD_CONFIG,
    BUNDLER_CONFIG,
    CompatibilityMatrix,
    ConfigTemplate,
    DeprecationNotice,
    MigrationGuide,
    Module,
    OptimizationSuggestion,
    PluginValidationResult,
    ProjectContext,
    SnackConfig,
    SnackResult,
)
from expo_sdk_engine.plugins import PluginValidator
from expo_sdk_engine.providers import BaseProvider, build_providers
from expo_sdk_engine.resolver import ModuleResolver
from expo_sdk_engine.snack import SnackComposer

logger = logging.getLogger(__name__)


class SDKEngine:
    """Single entry point to resolution, analysis and synthesis.

    Components are public attributes so callers can reach operations the
    facade does not forward (e.g. ``engine.resolver.get_api_reference``).

    Attributes:
        config: Engine configuration.
        aggregator: Source aggregator over the three providers.
        resolver: Module resolver.
        deprecations: Deprecation and migration analyzer.
        compatibility: Compatibility matrix builder.
        commands: Command synthesizer.
        snack: Sandbox composer.
        advisor: Optimization advisor.
        plugins: Plugin configuration validator.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        providers: Optional[tuple[BaseProvider, BaseProvider, BaseProvider]] = None,
    ) -> None:
        """Initialize the engine.

        Args:
            config: Engine configuration. Defaults to ``EngineConfig()``.
            providers: Optional (registry, repository, docs) providers that
                replace the ones selected by ``config``.
        """
        self.config = config or EngineConfig()
        registry, repository, docs = providers or build_providers(self.config)
        logger.debug(
            "Engine providers: %s, %s, %s", registry.name, repository.name, docs.name
        )

        self.aggregator = SourceAggregator(registry, repository, docs)
        self.resolver = ModuleResolver(self.aggregator, self.config)
        self.deprecations = DeprecationAnalyzer(self.resolver, self.config)
        self.compatibility = CompatibilityMatrixBuilder(self.resolver)
        self.commands = CommandSynthesizer()
        self.snack = SnackComposer(self.config)
        self.advisor = OptimizationAdvisor(self.config)
        self.plugins = PluginValidator(self.config)

    async def resolve(self, module_name: str, sdk_version: str = LATEST) -> Module:
        return await self.resolver.resolve(module_name, sdk_version)

    async def detect_deprecated_apis(
        self, module_name: str, sdk_version: str = LATEST
    ) -> list[DeprecationNotice]:
        return await self.deprecations.detect_deprecated_apis(module_name, sdk_version)

    async def generate_migration_guide(self, from_version: str, to_version: str) -> MigrationGuide:
        return await self.deprecations.generate_migration_guide(from_version, to_version)

    async def get_compatibility_matrix(self, sdk_version: str = LATEST) -> CompatibilityMatrix:
        return await self.compatibility.get_compatibility_matrix(sdk_version)

    def generate_template(self, artifact_kind: str, context: ProjectContext) -> ConfigTemplate:
        """Generate any configuration artifact by kind label or file name.

        Raises:
            InvalidArgumentError: If the kind is not recognized.
        """
        return get_generator(artifact_kind).generate(context)

    def generate_app_manifest_template(self, context: ProjectContext) -> ConfigTemplate:
        return self.generate_template(APP_MANIFEST, context)

    def generate_build_config_template(self, context: ProjectContext) -> ConfigTemplate:
        return self.generate_template(BUILD_CONFIG, context)

    def generate_bundler_config_template(self, context: ProjectContext) -> ConfigTemplate:
        return self.generate_template(BUNDLER_CONFIG, context)

    def generate_snack_compatible_code(
        self, module_names: list[str], pattern: str, context: ProjectContext
    ) -> SnackConfig:
        return self.snack.generate_snack_compatible_code(module_names, pattern, context)

    def generate_snack_url(self, config: SnackConfig) -> SnackResult:
        return self.snack.generate_snack_url(config)

    def generate_optimization_suggestions(
        self, artifact_kind: str, content: Any, context: ProjectContext
    ) -> list[OptimizationSuggestion]:
        return self.advisor.generate_optimization_suggestions(artifact_kind, content, context)

    def validate_plugin_configuration(
        self,
        plugin_name: str,
        plugin_config: Optional[dict[str, Any]],
        context: ProjectContext,
    ) -> PluginValidationResult:
        return self.plugins.validate_plugin_configuration(plugin_name, plugin_config, context)

    async def close(self) -> None:
        """Release provider HTTP sessions."""
        await self.aggregator.close()

    async def __aenter__(self) -> "SDKEngine":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
