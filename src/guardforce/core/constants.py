"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_GST_RATE = 18.0
DEFAULT_PERSONAL_GST_RATE = 0.0
DEFAULT_ATTENDANCE_POLL_SECONDS = 30
DEFAULT_COMPANY_NAME = "Security Management System"
INVOICE_NUMBER_PREFIX = "INV"
MIN_PASSWORD_LENGTH = 6
