"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

STANDARD_ALLOWANCE = Decimal("4167.00")
PROFESSIONAL_TAX = Decimal("200.00")

BASIC_RATE = Decimal("0.50")
HRA_RATE = Decimal("0.50")
PERFORMANCE_BONUS_RATE = Decimal("0.0833")
LTA_RATE = Decimal("0.0833")
PF_RATE = Decimal("0.12")
MONTHS_PER_YEAR = 12

DEFAULT_PAID_LEAVE_DAYS = 12
DEFAULT_SICK_LEAVE_DAYS = 6
MAX_REASON_LENGTH = 500

DEFAULT_TOKEN_MAX_AGE_SECONDS = 24 * 60 * 60
DEFAULT_PAGE_SIZE = 20
