"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_ANNUAL_ALLOWANCE_DAYS = 20
DEFAULT_LIST_LIMIT = 500
AUDIT_LOGGER_NAME = "leave_manager.audit"
