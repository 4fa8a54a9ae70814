"""Build-service command synthesis.

Each operation yields an EasCommandResult: the command line, its flag
map, prerequisites, a time estimate and a documentation link. Nothing
is executed.
"""

import logging
from typing import Optional

from expo_sdk_engine.exceptions import InvalidArgumentError
from expo_sdk_engine.models import EasCommandResult

logger = logging.getLogger(__name__)

VALID_PLATFORMS = ("ios", "android", "all")
DEFAULT_PROFILE = "development"

DOCUMENTATION_URLS = {
    "build": "https://docs.expo.dev/build/setup/",
    "submit": "https://docs.expo.dev/submit/introduction/",
    "update": "https://docs.expo.dev/eas-update/introduction/",
    "credentials": "https://docs.expo.dev/app-signing/app-credentials/",
}

# credentials sub-operation -> extra flag
CREDENTIALS_FLAGS = {
    "reset": {"clear": "true"},
    "validate": {"check": "true"},
}


def validate_platform(platform: str) -> None:
    """Raise InvalidArgumentError unless ``platform`` is ios, android or all."""
    if platform not in VALID_PLATFORMS:
        raise InvalidArgumentError("platform", platform, VALID_PLATFORMS)


def format_flags(flags: dict[str, str]) -> str:
    """Render a flag map as command-line switches.

    A value of "true" renders as a bare switch (``--latest``), anything
    else as ``--key value``.
    """
    return " ".join(
        f"--{key}" if value == "true" else f"--{key} {value}"
        for key, value in flags.items()
    )


def estimate_build_time(platform: str, profile: str) -> str:
    if platform == "all":
        return "8-15 minutes"
    if profile == "development":
        return "3-8 minutes"
    if platform == "ios":
        return "4-10 minutes"
    if platform == "android":
        return "5-12 minutes"
    return "5-10 minutes"


def estimate_submit_time(platform: str) -> str:
    if platform == "android":
        return "1-2 minutes"
    return "1-3 minutes"


def estimate_credentials_time(operation: str) -> str:
    if operation == "configure":
        return "2-5 minutes"
    if operation == "reset":
        return "30 seconds - 1 minute"
    return "1-3 minutes"


def _platform_label(platform: str) -> str:
    return "for all platforms" if platform == "all" else f"for {platform}"


class CommandSynthesizer:
    """Synthesizes build, submit, update and credentials commands.

    The synthesizer holds no state between calls.
    """

    def generate_build_command(
        self,
        platform: str,
        profile: str = DEFAULT_PROFILE,
        extra_flags: Optional[dict[str, str]] = None,
    ) -> EasCommandResult:
        """Synthesize a build command.

        Args:
            platform: "ios", "android" or "all".
            profile: Build profile name.
            extra_flags: Caller flags, merged last.

        Returns:
            EasCommandResult for ``eas build``.

        Raises:
            InvalidArgumentError: If the platform is not recognized.
        """
        validate_platform(platform)
        operation_flags = {"development-client": "true"} if profile == DEFAULT_PROFILE else {}
        flags = self._flags("build", platform, profile, operation_flags, extra_flags)

        prerequisites = [
            "Install EAS CLI: npm install -g eas-cli",
            "Login to Expo account: eas login",
            "Initialize EAS: eas build:configure",
        ]
        if platform in ("ios", "all"):
            prerequisites += ["Apple Developer account required", "iOS bundle identifier configured"]
        if platform in ("android", "all"):
            prerequisites += ["Android package name configured", "Keystore configured (for production)"]

        return EasCommandResult(
            command=self._command("build", flags),
            description=f"Build {_platform_label(platform)} using {profile} profile",
            prerequisites=prerequisites,
            flags=flags,
            estimated_time=estimate_build_time(platform, profile),
            documentation_url=DOCUMENTATION_URLS["build"],
        )

    def generate_submit_command(
        self,
        platform: str,
        profile: str = DEFAULT_PROFILE,
        extra_flags: Optional[dict[str, str]] = None,
    ) -> EasCommandResult:
        """Synthesize a store submission command.

        The platform is always stated explicitly, including "all".

        Raises:
            InvalidArgumentError: If the platform is not recognized.
        """
        validate_platform(platform)
        flags = self._flags("submit", platform, profile, {"latest": "true"}, extra_flags)

        prerequisites = ["App successfully built with EAS", "Store credentials configured"]
        if platform == "ios":
            prerequisites += [
                "App Store Connect account",
                "App Store listing created",
                "iOS distribution certificate",
            ]
        elif platform == "android":
            prerequisites += [
                "Google Play Console account",
                "App listing created in Google Play",
                "Upload keystore configured",
            ]

        store = {"ios": "App Store", "android": "Google Play Store"}.get(platform, "the app stores")
        return EasCommandResult(
            command=self._command("submit", flags),
            description=f"Submit {platform} app to {store} using {profile} profile",
            prerequisites=prerequisites,
            flags=flags,
            estimated_time=estimate_submit_time(platform),
            documentation_url=DOCUMENTATION_URLS["submit"],
        )

    def generate_update_command(
        self,
        platform: str,
        profile: str = DEFAULT_PROFILE,
        extra_flags: Optional[dict[str, str]] = None,
    ) -> EasCommandResult:
        """Synthesize an over-the-air update command.

        Raises:
            InvalidArgumentError: If the platform is not recognized.
        """
        validate_platform(platform)
        flags = self._flags("update", platform, profile, {"auto": "true"}, extra_flags)
        return EasCommandResult(
            command=self._command("update", flags),
            description=f"Publish OTA update {_platform_label(platform)} using {profile} profile",
            prerequisites=[
                "EAS Update configured in app.json",
                "Runtime version properly set",
                "Update URL configured",
                "EAS CLI logged in",
            ],
            flags=flags,
            estimated_time="30 seconds - 2 minutes",
            documentation_url=DOCUMENTATION_URLS["update"],
        )

    def generate_credentials_command(
        self,
        platform: str,
        profile: str = DEFAULT_PROFILE,
        operation: str = "configure",
        extra_flags: Optional[dict[str, str]] = None,
    ) -> EasCommandResult:
        """Synthesize a credentials management command.

        Args:
            platform: "ios", "android" or "all".
            profile: Accepted for symmetry with the other operations; unused.
            operation: "configure", "reset" or "validate". Other values add no flags.
            extra_flags: Caller flags, merged last.

        Raises:
            InvalidArgumentError: If the platform is not recognized.
        """
        validate_platform(platform)
        flags = {"platform": platform, **CREDENTIALS_FLAGS.get(operation, {})}
        flags.update(extra_flags or {})

        prerequisites = ["EAS CLI installed and logged in", "Project configured for EAS"]
        if platform == "ios":
            prerequisites.append("Apple Developer account")
            if operation == "configure":
                prerequisites += ["Development/Distribution certificates", "Provisioning profiles"]
        elif platform == "android" and operation == "configure":
            prerequisites.append("Keystore file or credentials")

        logger.debug("Credentials command for %s (%s, profile=%s)", platform, operation, profile)
        return EasCommandResult(
            command=f"eas credentials {format_flags(flags)}".strip(),
            description=f"Manage {platform} credentials - {operation}",
            prerequisites=prerequisites,
            flags=flags,
            estimated_time=estimate_credentials_time(operation),
            documentation_url=DOCUMENTATION_URLS["credentials"],
        )

    def _flags(
        self,
        operation: str,
        platform: str,
        profile: str,
        operation_flags: dict[str, str],
        extra_flags: Optional[dict[str, str]],
    ) -> dict[str, str]:
        flags: dict[str, str] = {}
        if platform != "all" or operation == "submit":
            flags["platform"] = platform
        if profile:
            flags["profile"] = profile
        flags.update(operation_flags)
        flags.update(extra_flags or {})
        logger.debug("Flags for %s: %s", operation, flags)
        return flags

    @staticmethod
    def _command(operation: str, flags: dict[str, str]) -> str:
        # the default profile is implied by the build service
        shown = {
            key: value
            for key, value in flags.items()
            if not (key == "profile" and value == DEFAULT_PROFILE)
        }
        return f"eas {operation} {format_flags(shown)}".strip()
