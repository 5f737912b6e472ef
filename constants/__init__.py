"""
Constants Package

Seed data, curated meal ideas and validation whitelists.
"""

from .validation import (
    UNSET, AVAILABLE, DECLINED, STORED_RESPONSES, NEXT_RESPONSE,
    VALID_MEAL_SOURCES, MIN_RATING, MAX_RATING, VALID_DIFFICULTIES,
    MAX_LENGTHS, CONFIG_KEY,
)
from .families import FAMILIES, HOST_ROTATION, INITIAL_LAST_HOST_INDEX
from .meals import CURATED_MEALS, MEAL_FILTERS
