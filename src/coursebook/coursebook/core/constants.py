"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_CHECKPOINT_WEIGHT = 0.6
DEFAULT_DAILY_WEIGHT = 0.4

# Fields copied from each candidate during a bulk import.
IMPORT_ATTRIBUTES = (
    "first_name",
    "last_name",
    "phone",
    "website",
    "github",
    "codecademy",
    "zipcode",
)
IMPORT_REQUIRED_FIELDS = ("username", "first_name", "last_name")

CREATE_ATTRIBUTES = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "website",
    "github",
    "is_admin",
    "is_instructor",
    "is_student",
    "codecademy",
    "zipcode",
    "credits",
)

PROFILE_ATTRIBUTES = (
    "first_name",
    "last_name",
    "username",
    "phone",
    "website",
    "github",
    "rocketchat",
    "codecademy",
    "zipcode",
)

ADMIN_ATTRIBUTES = ("is_admin", "is_instructor", "is_student", "price", "credits")

# Used by the profile completeness meter.
PROFILE_COMPLETENESS_ATTRIBUTES = (
    "first_name",
    "last_name",
    "username",
    "phone",
    "github",
    "rocketchat",
    "website",
    "codecademy",
    "zipcode",
)
