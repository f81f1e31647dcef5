"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_LUNCH_BREAK_HOURS = 0.5
SICK_DAY_HOURS = 7.5

AUDIT_LOG_LIMIT = 150

# First half of a pay period ends on this day of the month.
FIRST_HALF_LAST_DAY = 15

# Roster used when no persisted state exists yet.
SEED_ROSTER = (
    ("emp_001", "John Doe"),
    ("emp_002", "Jane Smith"),
    ("emp_003", "Michael Lee"),
)
