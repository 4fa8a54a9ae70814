"""Static knowledge about SDK release labels."""

import re
from datetime import date
from types import MappingProxyType
from typing import Optional

from expo_sdk_engine.config import DEFAULT_LATEST_SDK
from expo_sdk_engine.models import VersionInfo

LATEST = "latest"

_SDK_NUMBER_RE = re.compile(r"(?:sdk[-\s]?)?(\d+)", re.IGNORECASE)

SDK_VERSIONS = MappingProxyType(
    {
        "latest": VersionInfo(
            version="SDK 49",
            release_date=date(2023, 9, 15),
            status="latest",
            changelog="Latest stable release with new features",
            modules={"camera": "13.4.0", "location": "16.1.0", "notifications": "0.20.1"},
        ),
        "sdk-49": VersionInfo(
            version="SDK 49",
            release_date=date(2023, 9, 15),
            status="supported",
            changelog="Stable release with React Native 0.72",
            modules={"camera": "13.4.0", "location": "16.1.0", "notifications": "0.20.1"},
        ),
        "sdk-48": VersionInfo(
            version="SDK 48",
            release_date=date(2023, 6, 15),
            status="supported",
            changelog="Previous stable release with React Native 0.71",
            modules={"camera": "13.2.1", "location": "15.1.1", "notifications": "0.18.1"},
            support_ends=date(2024, 6, 15),
        ),
        "sdk-47": VersionInfo(
            version="SDK 47",
            release_date=date(2022, 11, 15),
            status="deprecated",
            changelog="React Native 0.70 release",
            modules={"camera": "13.1.0", "location": "15.0.1", "notifications": "0.17.0"},
            support_ends=date(2023, 11, 15),
        ),
    }
)


def parse_sdk_number(label: Optional[str], latest: int = DEFAULT_LATEST_SDK) -> Optional[int]:
    """Extract the SDK major number from a release label.

    Understands "latest", "sdk-48", "SDK 48" and "48.0.0".

    Args:
        label: Release label. ``None`` and "latest" map to ``latest``.
        latest: Major number of the newest known release.

    Returns:
        The major number, or None if the label carries no number.
    """
    if not label or label == LATEST:
        return latest

    match = _SDK_NUMBER_RE.match(label.strip())
    if match is None:
        return None
    return int(match.group(1))


def sdk_number_or_latest(label: Optional[str], latest: int = DEFAULT_LATEST_SDK) -> int:
    """Like ``parse_sdk_number`` but unparseable labels map to ``latest``."""
    number = parse_sdk_number(label, latest)
    return latest if number is None else number
