"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SYSTEM_SETTINGS_KEY = "system_settings"
DEFAULT_LOCK_EXEMPT_ROLES = ("ADMIN",)
SESSION_ID_LENGTH = 12
OPEN_LOCK_PREFIX = "edutrack.open:"
OPEN_LOCK_TIMEOUT_SECONDS = 10
