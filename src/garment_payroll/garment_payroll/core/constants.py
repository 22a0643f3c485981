"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

WORK_DAYS_PER_MONTH = Decimal(26)
WORK_HOURS_PER_DAY = Decimal(8)

PROGRESSIVE_PENALTY_BASE = Decimal(10000)
PROGRESSIVE_PENALTY_STEP = Decimal(2000)
FLAT_PENALTY = Decimal(10000)

# Smallest unit is 500 because of the stepped round-up policy.
CASH_DENOMINATIONS = (100000, 50000, 20000, 10000, 5000, 2000, 1000, 500)
CASH_ROUNDING_UNIT = 1000
CASH_HALF_UNIT = 500

DEFAULT_RECALC_BATCH_SIZE = 5

# Piece-rate workers are booked under this company and paid on a separate track.
PIECE_RATE_COMPANY = "BORONGAN"
