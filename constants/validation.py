"""
Validation Constants

Contains whitelist values for validating user input and the
availability state table used by the scheduling services.
"""

# Availability responses a family can give for one dinner
UNSET = 'unset'
AVAILABLE = 'available'
DECLINED = 'declined'

# Responses that are stored (UNSET is represented by the absence of a row)
STORED_RESPONSES = {AVAILABLE, DECLINED}

# One tap moves a family to the next response in the cycle
NEXT_RESPONSE = {
    UNSET: AVAILABLE,
    AVAILABLE: DECLINED,
    DECLINED: UNSET,
}

# Valid values for how a logged meal was sourced
VALID_MEAL_SOURCES = {'cooked', 'ordered'}

# Meal log rating bounds (inclusive)
MIN_RATING = 1
MAX_RATING = 5

# Valid difficulty levels for meal ideas
VALID_DIFFICULTIES = {'Easy', 'Medium', 'Involved'}

# Maximum field lengths for security
MAX_LENGTHS = {
    'family_id': 20,
    'what': 200,
    'recipe': 500,
    'notes': 5000,
    'suggestion_field': 500,
}

# Key of the single rotation config record
CONFIG_KEY = 'app'
