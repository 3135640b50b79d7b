"""Constants for slash-activity.

This module contains:
- VERSION: Package version
- Storage defaults (database location, timeouts, table layout)
- Logging defaults

For runtime settings, import from:
- slash_activity.config.settings

For type-safe enums, import from:
- slash_activity.models.enums
"""

from slash_activity import __version__

# =============================================================================
# Version
# =============================================================================

VERSION = __version__

# =============================================================================
# Storage
# =============================================================================

DEFAULT_DATA_DIR = ".slash"
DEFAULT_DB_FILENAME = "activity.db"
DEFAULT_DB_PATH = f"{DEFAULT_DATA_DIR}/{DEFAULT_DB_FILENAME}"
IN_MEMORY_DB_PATH = ":memory:"

# Seconds a connection waits on a locked database before giving up
DEFAULT_BUSY_TIMEOUT_SECONDS = 30.0

ACTIVITY_TABLE = "activity"

# Column order used by SELECT statements and row decoding
ACTIVITY_COLUMNS: tuple[str, ...] = (
    "id",
    "creator_id",
    "created_ts",
    "type",
    "level",
    "payload",
)

# Columns that may appear in a filter predicate
FILTERABLE_COLUMNS: frozenset[str] = frozenset({"type", "level"})

# Always-true base predicate for dynamically assembled WHERE clauses
WHERE_BASE_PREDICATE = "1 = 1"

DEFAULT_PAYLOAD = ""

# SQLite VM instructions between cancellation checks
PROGRESS_HANDLER_STEPS = 1000

# =============================================================================
# Logging
# =============================================================================

PACKAGE_LOGGER_NAME = "slash_activity"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_MAX_SIZE_MB = 10
DEFAULT_LOG_BACKUP_COUNT = 3
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_FORMAT_DEBUG = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

# =============================================================================
# CLI
# =============================================================================

OUTPUT_FORMAT_TEXT = "text"
OUTPUT_FORMAT_JSON = "json"
OUTPUT_FORMATS: tuple[str, ...] = (OUTPUT_FORMAT_TEXT, OUTPUT_FORMAT_JSON)
JSON_INDENT = 2
