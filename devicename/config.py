"""Shared configuration constants."""

# Locale used when the requested one has no catalog or lacks a message
DEFAULT_LOCALE = "en"

# Longer user agent headers are truncated before parsing
USER_AGENT_MAX_LENGTH = 500

DEFAULT_PORT = 4402

# Message keys used when composing the display name
KEY_CLIENT_ON_DEVICE = "device_name.client_on_device"
KEY_NAME_FOR_PLATFORM = "device_name.name_for_platform"
KEY_UNKNOWN_DEVICE = "device_name.unknown_device"
