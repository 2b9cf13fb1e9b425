"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import date

ENTITLEMENT_DAYS = 30

# Cycles starting before this date are outside the system's scope.
DEFAULT_FLOOR_DATE = date(2025, 1, 1)

# Safety valve for cycle generation, not a business rule.
DEFAULT_MAX_CYCLE_ITERATIONS = 50

LEGACY_LEAVE_DAYS = 30

SCHEDULES_TABLE = "vacation_schedules"
