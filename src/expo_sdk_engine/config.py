"""Runtime configuration for the SDK metadata engine."""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_CACHE_TTL_SECONDS = 60 * 60
DEFAULT_LATEST_SDK = 49


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class EngineConfig:
    """Settings shared by every engine component.

    Attributes:
        cache_ttl_seconds: Lifetime of module, API reference, migration and
            compatibility cache entries.
        latest_sdk_number: Major number of the newest known SDK release. Used
            for deprecation severity and staleness checks.
        offline: Use the static offline providers instead of HTTP lookups.
        github_token: Optional token sent to the GitHub API.
        request_timeout: Total timeout in seconds for each HTTP lookup.
    """

    cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS
    latest_sdk_number: int = DEFAULT_LATEST_SDK
    offline: bool = True
    github_token: Optional[str] = None
    request_timeout: float = 10.0

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build a config from ``EXPO_ENGINE_*`` environment variables.

        Returns:
            EngineConfig with defaults for any variable that is unset.
        """
        env = os.environ
        return cls(
            cache_ttl_seconds=float(
                env.get("EXPO_ENGINE_CACHE_TTL", DEFAULT_CACHE_TTL_SECONDS)
            ),
            latest_sdk_number=int(env.get("EXPO_ENGINE_LATEST_SDK", DEFAULT_LATEST_SDK)),
            offline=_env_flag(env.get("EXPO_ENGINE_OFFLINE", "true")),
            github_token=env.get("GITHUB_TOKEN") or None,
            request_timeout=float(env.get("EXPO_ENGINE_TIMEOUT", 10.0)),
        )
