"""Static per-module knowledge tables.

The tables are deliberately partial. Lookups for modules that are not
listed fall back to the defaults defined next to each table.
"""

from types import MappingProxyType

from expo_sdk_engine.models import (
    Availability,
    CodeExample,
    Constant,
    Deprecation,
    Method,
    Parameter,
    TypeDefinition,
)

CORE_MODULES = frozenset(
    {"camera", "location", "notifications", "constants", "haptics", "media-library"}
)

DEFAULT_PLATFORMS = ("ios", "android")

MODULE_PLATFORMS = MappingProxyType(
    {
        "camera": ("ios", "android", "web"),
        "location": ("ios", "android", "web"),
        "notifications": ("ios", "android"),
        "haptics": ("ios", "android"),
        "media-library": ("ios", "android"),
        "constants": ("ios", "android", "web", "universal"),
    }
)

EMPTY_PERMISSIONS = MappingProxyType({"required": (), "optional": (), "description": {}})

MODULE_PERMISSIONS = MappingProxyType(
    {
        "camera": {
            "required": ("CAMERA", "RECORD_AUDIO"),
            "optional": ("WRITE_EXTERNAL_STORAGE",),
            "description": {
                "CAMERA": "Access the device camera",
                "RECORD_AUDIO": "Record audio while capturing video",
                "WRITE_EXTERNAL_STORAGE": "Save captured media to shared storage",
            },
        },
        "location": {
            "required": ("ACCESS_FINE_LOCATION",),
            "optional": ("ACCESS_BACKGROUND_LOCATION",),
            "description": {
                "ACCESS_FINE_LOCATION": "Read the precise device location",
                "ACCESS_BACKGROUND_LOCATION": "Read the location while the app is backgrounded",
            },
        },
        "notifications": {
            "required": ("NOTIFICATIONS",),
            "optional": ("android.permission.SCHEDULE_EXACT_ALARM",),
            "description": {
                "NOTIFICATIONS": "Display local and push notifications",
                "android.permission.SCHEDULE_EXACT_ALARM": "Deliver notifications at an exact time",
            },
        },
        "media-library": {
            "required": ("MEDIA_LIBRARY",),
            "optional": (
                "android.permission.ACCESS_MEDIA_LOCATION",
                "iOS.NSPhotoLibraryAddUsageDescription",
            ),
            "description": {
                "MEDIA_LIBRARY": "Read and write the photo library",
                "android.permission.ACCESS_MEDIA_LOCATION": "Read location metadata of media",
                "iOS.NSPhotoLibraryAddUsageDescription": "Add photos without full library access",
            },
        },
    }
)

MODULE_DEPRECATIONS = MappingProxyType(
    {
        "app-loading": Deprecation(
            reason="Replaced by expo-splash-screen",
            since="SDK 45",
            replacement="expo-splash-screen",
        ),
    }
)

_PERMISSION_RESPONSE = "Promise<PermissionResponse>"

MODULE_METHODS = MappingProxyType(
    {
        "camera": (
            Method(
                name="requestCameraPermissionsAsync",
                signature=f"requestCameraPermissionsAsync(): {_PERMISSION_RESPONSE}",
                description="Asks the user to grant camera permissions.",
                return_type=_PERMISSION_RESPONSE,
                availability=Availability(since="SDK 40"),
                examples=(
                    CodeExample(
                        title="Basic Permission Request",
                        description="Request camera access before rendering a preview",
                        code="const { status } = await Camera.requestCameraPermissionsAsync();",
                        platforms=("ios", "android"),
                        dependencies={"expo-camera": "^13.4.0"},
                    ),
                ),
                platforms=("ios", "android", "web"),
                permissions=("CAMERA",),
            ),
            Method(
                name="getCameraPermissionsAsync",
                signature=f"getCameraPermissionsAsync(): {_PERMISSION_RESPONSE}",
                description="Checks the current camera permission status.",
                return_type=_PERMISSION_RESPONSE,
                availability=Availability(since="SDK 40"),
                platforms=("ios", "android", "web"),
            ),
        ),
        "location": (
            Method(
                name="requestForegroundPermissionsAsync",
                signature=f"requestForegroundPermissionsAsync(): {_PERMISSION_RESPONSE}",
                description="Asks the user to grant foreground location permissions.",
                return_type=_PERMISSION_RESPONSE,
                availability=Availability(since="SDK 41"),
                platforms=("ios", "android", "web"),
                permissions=("ACCESS_FINE_LOCATION",),
            ),
            Method(
                name="getCurrentPositionAsync",
                signature=(
                    "getCurrentPositionAsync(options?: LocationOptions): "
                    "Promise<LocationObject>"
                ),
                description="Requests a one-time delivery of the current location.",
                return_type="Promise<LocationObject>",
                availability=Availability(since="SDK 33"),
                parameters=(
                    Parameter(
                        name="options",
                        type="LocationOptions",
                        required=False,
                        default="{}",
                        description="Accuracy and timeout options",
                    ),
                ),
                examples=(
                    CodeExample(
                        title="Current Position",
                        description="Read the device position once",
                        code=(
                            "const location = await Location.getCurrentPositionAsync"
                            "({ accuracy: Location.Accuracy.High });"
                        ),
                        platforms=("ios", "android", "web"),
                        dependencies={"expo-location": "^16.1.0"},
                    ),
                ),
                platforms=("ios", "android", "web"),
                permissions=("ACCESS_FINE_LOCATION",),
            ),
        ),
        "notifications": (
            Method(
                name="scheduleNotificationAsync",
                signature=(
                    "scheduleNotificationAsync(request: NotificationRequestInput): "
                    "Promise<string>"
                ),
                description="Schedules a notification to be triggered in the future.",
                return_type="Promise<string>",
                availability=Availability(since="SDK 38"),
                parameters=(
                    Parameter(
                        name="request",
                        type="NotificationRequestInput",
                        description="Content and trigger of the notification",
                    ),
                ),
                platforms=("ios", "android"),
            ),
            Method(
                name="presentNotificationAsync",
                signature=(
                    "presentNotificationAsync(content: NotificationContentInput): "
                    "Promise<string>"
                ),
                description="Presents a notification immediately.",
                return_type="Promise<string>",
                availability=Availability(
                    since="SDK 38",
                    deprecated="SDK 41",
                    replacement="scheduleNotificationAsync",
                    migration_url=(
                        "https://docs.expo.dev/versions/latest/sdk/notifications/"
                        "#presentnotificationasynccontent-identifier"
                    ),
                ),
                platforms=("ios", "android"),
            ),
            Method(
                name="getExpoPushTokenAsync",
                signature=(
                    "getExpoPushTokenAsync(options?: ExpoPushTokenOptions): "
                    "Promise<ExpoPushToken>"
                ),
                description="Returns a push token for the push notification service.",
                return_type="Promise<ExpoPushToken>",
                availability=Availability(since="SDK 38"),
                parameters=(
                    Parameter(
                        name="options",
                        type="ExpoPushTokenOptions",
                        required=False,
                        description="Project and device identifiers",
                    ),
                ),
                platforms=("ios", "android"),
            ),
        ),
    }
)

MODULE_CONSTANTS = MappingProxyType(
    {
        "camera": {
            "Type": Constant(
                name="Type",
                type="enum",
                value={"back": 0, "front": 1},
                description="Camera facing direction",
                platforms=("ios", "android"),
            ),
        },
        "constants": {
            "expoConfig": Constant(
                name="expoConfig",
                type="ExpoConfig | null",
                value=None,
                description="The app config embedded at build time",
                platforms=("ios", "android", "web"),
            ),
            "manifest": Constant(
                name="manifest",
                type="AppManifest | null",
                value=None,
                description="Classic manifest of the running app",
                platforms=("ios", "android", "web"),
                deprecated=Deprecation(
                    reason="Not populated for apps using the modern manifest format",
                    since="SDK 46",
                    replacement="Constants.expoConfig",
                ),
            ),
        },
    }
)

MODULE_TYPES = MappingProxyType(
    {
        "camera": {
            "PermissionResponse": TypeDefinition(
                name="PermissionResponse",
                kind="interface",
                definition="interface PermissionResponse { status: PermissionStatus; }",
                description="Result of a permission request",
                properties={
                    "status": {
                        "type": "PermissionStatus",
                        "description": "Permission state",
                        "required": True,
                    }
                },
            ),
        },
        "location": {
            "LocationObject": TypeDefinition(
                name="LocationObject",
                kind="type",
                definition="type LocationObject = { coords: LocationObjectCoords; timestamp: number; }",
                description="A device location with its timestamp",
                properties={
                    "coords": {"type": "LocationObjectCoords", "required": True},
                    "timestamp": {"type": "number", "required": True},
                },
            ),
        },
    }
)

MODULE_EXAMPLES = MappingProxyType(
    {
        "camera": (
            CodeExample(
                title="Basic Camera Usage",
                description="Request permission and render a flippable camera preview",
                code="""const [hasPermission, setHasPermission] = useState(null);
const [type, setType] = useState(Camera.Constants.Type.back);

useEffect(() => {
  (async () => {
    const { status } = await Camera.requestCameraPermissionsAsync();
    setHasPermission(status === 'granted');
  })();
}, []);

return (
  <Camera style={styles.camera} type={type}>
    <Button title="Flip" onPress={() => setType(type === Camera.Constants.Type.back
      ? Camera.Constants.Type.front : Camera.Constants.Type.back)} />
  </Camera>
);""",
                platforms=("ios", "android"),
                dependencies={"expo-camera": "^13.4.0"},
            ),
        ),
        "location": (
            CodeExample(
                title="Foreground Location",
                description="Ask for permission and print the current coordinates",
                code="""useEffect(() => {
  (async () => {
    const { status } = await Location.requestForegroundPermissionsAsync();
    if (status !== 'granted') return;
    const location = await Location.getCurrentPositionAsync({});
    setLocation(location);
  })();
}, []);""",
                platforms=("ios", "android", "web"),
                dependencies={"expo-location": "^16.1.0"},
            ),
        ),
    }
)

CONFIG_STEPS = MappingProxyType(
    {
        "camera": (
            "Add the camera plugin to the app config:",
            '  "expo": { "plugins": ["expo-camera"] }',
        ),
        "location": (
            "Add the location plugin with a permission message to the app config:",
            '  "expo": { "plugins": [["expo-location", '
            '{ "locationAlwaysAndWhenInUsePermission": "Allow $(PRODUCT_NAME) to use your location." }]] }',
        ),
        "notifications": (
            "Add the notifications plugin to the app config:",
            '  "expo": { "plugins": ["expo-notifications"] }',
        ),
    }
)

ADDITIONAL_NOTES = MappingProxyType(
    {
        "camera": (
            "iOS: a camera usage description is required in Info.plist",
            "Android: request the CAMERA permission at runtime",
            "Web: the camera is only available over HTTPS",
        ),
        "location": (
            "Location permissions are requested at runtime",
            "Background location needs separate configuration",
        ),
        "notifications": (
            "Push notifications require a physical device",
        ),
    }
)

PLATFORM_LIMITATIONS = MappingProxyType(
    {
        "camera": {
            "web": ("Camera access requires HTTPS", "Limited browser compatibility"),
            "ios": ("Privacy usage description required",),
            "android": ("Camera2 API required",),
        },
        "location": {
            "web": ("Reduced accuracy", "No background updates"),
            "ios": ("Location permission required",),
            "android": ("Location permission required",),
        },
    }
)

PLATFORM_NOTES = MappingProxyType(
    {
        "camera": {
            "web": "Uses the WebRTC APIs, subject to browser restrictions",
            "ios": "Backed by AVFoundation",
            "android": "Backed by the Camera2 API",
        },
    }
)

MIN_PLATFORM_VERSIONS = MappingProxyType(
    {
        "camera": {"ios": "10.0", "android": "5.0", "web": "Chrome 53+"},
        "location": {"ios": "9.0", "android": "4.4", "web": "Chrome 50+"},
    }
)
