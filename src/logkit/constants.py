"""
Package-wide constants for logkit.

Default rotation thresholds, file locations and encoder settings used
throughout the logging core and the health monitor.
"""

# File size constants (bytes)
BYTES_PER_KB = 1024
BYTES_PER_MB = 1024 * 1024

# Time constants
SECONDS_IN_DAY = 24 * 60 * 60

# Default log destination
DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE_PATH = "logs/logkit.log"
DEFAULT_LOGGER_NAME = "logkit"

# Default rotation policy
DEFAULT_LOG_MAX_SIZE_MB = 20
DEFAULT_LOG_MAX_AGE_DAYS = 30
DEFAULT_LOG_MAX_BACKUPS = 50
DEFAULT_LOG_COMPRESS = False

# Rotation policy used by new_logger()
QUICKSTART_MAX_SIZE_MB = 10
QUICKSTART_MAX_AGE_DAYS = 7
QUICKSTART_COMPRESS = True

# Encoder settings
MILLIS_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
BACKUP_TIME_FORMAT = "%Y-%m-%dT%H-%M-%S"
COMPRESSED_SUFFIX = ".gz"

# ANSI escape sequences
ANSI_RESET = "\x1b[0m"
ANSI_CYAN = "\x1b[36m"

# Health monitor
DEFAULT_SAMPLE_INTERVAL_SECONDS = 5.0
DEFAULT_METRICS_PORT = 9100
DEFAULT_METRICS_ADDR = "0.0.0.0"

# Exit codes
FATAL_EXIT_CODE = 1
