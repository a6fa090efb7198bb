"""Internal constants shared across the library."""

DEFAULT_ROOT_PATH = "parkingValidation"
DEFAULT_SHEET_NAME = "ValidationsTab"
DEFAULT_SOURCE_TAG = "google-sheets"
USER_AGENT = "parkval/1"

# ------------------------------------------------------------------
# Sheet columns
# ------------------------------------------------------------------

COLUMN_LICENSE_PLATE = "LicensePlate"
COLUMN_STATUS = "Status"
COLUMN_USER_ID = "UserID"
REQUIRED_COLUMNS: tuple[str, ...] = (COLUMN_LICENSE_PLATE, COLUMN_STATUS)

# ------------------------------------------------------------------
# Status vocabulary
# ------------------------------------------------------------------

# Both labels have been used for "permanent" across sheet versions.
DEFAULT_PERMANENT_MARKERS: frozenset[str] = frozenset({"직원차량", "영구"})
DEFAULT_VALID_MARKERS: frozenset[str] = frozenset({"유효"})
INVALID_MARKER = "무효"
