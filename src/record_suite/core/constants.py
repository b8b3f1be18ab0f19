"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_LOAN_PERIOD_DAYS = 14
MIN_PASSWORD_LENGTH = 6
MIN_STUDENT_AGE = 5
MAX_STUDENT_AGE = 100
