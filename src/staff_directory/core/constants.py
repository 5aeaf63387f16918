"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

DEFAULT_DATA_FILE = "users.json"
DEFAULT_PORT = 3000

# Keys the general update never writes: the id is immutable and credentials
# only change through sign-up.
PROTECTED_UPDATE_KEYS = frozenset({"id", "password_hash", "password"})

# Role values are validated on the role-update path only. Set the
# ENFORCE_ROLE_ON_GENERAL_UPDATE setting to extend the check to general updates.
ENFORCE_ROLE_ON_GENERAL_UPDATE = False
