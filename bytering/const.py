"""Constants for the bytering package."""

BYTES_PER_KIB = 1024
BYTES_PER_MIB = 1024**2
BYTES_PER_GIB = 1024**3

DEFAULT_CAPACITY = 64 * BYTES_PER_KIB  # (64kb)
DEFAULT_SHORT_TRANSFER_LOG_INTERVAL = 1000

# Configuration profiles live under <home>/.bytering/profiles/<name>.yaml
CONFIG_DIR_NAME = ".bytering"
PROFILES_DIR_NAME = "profiles"
PROFILE_SUFFIX = ".yaml"

CAPACITY_ENV_VAR = "BYTERING_CAPACITY"
SHORT_TRANSFER_LOG_INTERVAL_ENV_VAR = "BYTERING_SHORT_TRANSFER_LOG_INTERVAL"
