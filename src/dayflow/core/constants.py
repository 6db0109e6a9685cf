"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_REMARK_DENYLIST = ("fuck", "f*ck", "fck")
REMARK_MASK = "***"

MIN_PAYROLL_YEAR = 1900
MAX_PAYROLL_YEAR = 9999

PRIVILEGED_PROFILE_FIELDS = ("job_title", "department", "hire_date", "employment_type", "salary")
SELF_PROFILE_FIELDS = ("first_name", "last_name", "phone", "address", "profile_picture")
