"""Static knowledge about changes between SDK releases.

Breaking changes and deprecated modules are keyed by the version-pair
string ``"<from>_to_<to>"``.
"""

from types import MappingProxyType

from expo_sdk_engine.models import BreakingChange, ChangeExample, DeprecatedModule


def pair_key(from_version: str, to_version: str) -> str:
    """Return the lookup key for a version pair."""
    return f"{from_version}_to_{to_version}"


BREAKING_CHANGES = MappingProxyType(
    {
        "sdk-48_to_sdk-49": (
            BreakingChange(
                module="camera",
                change_type="method_renamed",
                description="takePictureAsync renamed to takePictureAsync2",
                action_required="Update method calls and parameter structure",
                example=ChangeExample(
                    before="await camera.takePictureAsync({ quality: 0.8 })",
                    after='await camera.takePictureAsync2({ quality: 0.8, format: "jpeg" })',
                ),
            ),
        ),
        "sdk-47_to_sdk-48": (
            BreakingChange(
                module="constants",
                change_type="behavior_changed",
                description="Constants.manifest is null for apps using EAS Update",
                action_required="Read app config values from Constants.expoConfig",
                example=ChangeExample(
                    before="Constants.manifest.extra.apiUrl",
                    after="Constants.expoConfig.extra.apiUrl",
                ),
            ),
        ),
        "sdk-47_to_sdk-49": (
            BreakingChange(
                module="constants",
                change_type="behavior_changed",
                description="Constants.manifest is null for apps using EAS Update",
                action_required="Read app config values from Constants.expoConfig",
            ),
            BreakingChange(
                module="camera",
                change_type="method_renamed",
                description="takePictureAsync renamed to takePictureAsync2",
                action_required="Update method calls and parameter structure",
            ),
            BreakingChange(
                module="notifications",
                change_type="parameter_changed",
                description="getExpoPushTokenAsync requires an explicit projectId",
                action_required="Pass projectId from Constants.expoConfig.extra.eas",
                example=ChangeExample(
                    before="await Notifications.getExpoPushTokenAsync()",
                    after="await Notifications.getExpoPushTokenAsync({ projectId })",
                ),
            ),
        ),
    }
)

DEPRECATED_MODULES = MappingProxyType(
    {
        "sdk-48_to_sdk-49": (
            DeprecatedModule(
                name="expo-legacy-camera",
                deprecated_since="SDK 49",
                replacement="expo-camera",
                removal_date="SDK 51",
                reason="Replaced with improved camera API",
                migration_guide_url="https://docs.expo.dev/versions/latest/sdk/camera/#migration",
            ),
        ),
        "sdk-47_to_sdk-49": (
            DeprecatedModule(
                name="expo-legacy-camera",
                deprecated_since="SDK 49",
                replacement="expo-camera",
                removal_date="SDK 51",
                reason="Replaced with improved camera API",
                migration_guide_url="https://docs.expo.dev/versions/latest/sdk/camera/#migration",
            ),
            DeprecatedModule(
                name="expo-app-loading",
                deprecated_since="SDK 45",
                replacement="expo-splash-screen",
                removal_date="SDK 49",
                reason="Replaced by expo-splash-screen",
            ),
        ),
    }
)

# (receiver, method) -> deprecation details for call sites found in user code
DEPRECATED_CALLS = MappingProxyType(
    {
        ("Camera", "takePictureAsync"): {
            "module": "camera",
            "since": "SDK 48",
            "replacement": "takePictureAsync2",
            "message": "takePictureAsync is deprecated, use takePictureAsync2 instead",
        },
        ("Notifications", "presentNotificationAsync"): {
            "module": "notifications",
            "since": "SDK 41",
            "replacement": "scheduleNotificationAsync",
            "message": (
                "presentNotificationAsync is deprecated, use "
                "scheduleNotificationAsync with a null trigger instead"
            ),
        },
        ("Permissions", "askAsync"): {
            "module": "permissions",
            "since": "SDK 41",
            "replacement": "the module-specific request*PermissionsAsync method",
            "message": "Permissions.askAsync is deprecated, use module permission methods",
        },
    }
)
