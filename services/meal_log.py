"""
Meal Log Service

Validation and replacement of the post-dinner meal log.
"""

from constants import VALID_MEAL_SOURCES, MIN_RATING, MAX_RATING, MAX_LENGTHS
from utils.sanitizer import sanitize_line, sanitize_multiline

from .errors import ValidationError


def _parse_rating(value):
    # bool is an int subclass; True must not count as a 1-star rating
    if isinstance(value, bool):
        raise ValidationError("Rating must be a whole number")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value.strip())
    raise ValidationError("Rating must be a whole number")


def validate_meal_log(log):
    """
    Check and normalize a meal log submitted by a family.

    Args:
        log: dict with what, how, rating and optional recipe and notes

    Returns:
        Cleaned dict with exactly the stored fields (no saved_at)

    Raises:
        ValidationError: Empty 'what', unknown 'how' or rating outside 1..5
    """
    if not isinstance(log, dict):
        raise ValidationError("Meal log must be an object")

    what = sanitize_line(log.get('what'), MAX_LENGTHS['what'])
    if not what.strip():
        raise ValidationError("Tell us what you ate")

    how = log.get('how')
    if how not in VALID_MEAL_SOURCES:
        raise ValidationError(f"Invalid value for how: {how!r}")

    rating = _parse_rating(log.get('rating'))
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")

    return {
        'what': what,
        'recipe': sanitize_line(log.get('recipe'), MAX_LENGTHS['recipe']),
        'notes': sanitize_multiline(log.get('notes'), MAX_LENGTHS['notes']),
        'rating': rating,
        'how': how,
    }


def save_meal_log(occurrence, log, now):
    """
    Replace the dinner's meal log and stamp it with the save time.

    Works on confirmed and unconfirmed dinners alike. The previous log,
    if any, is discarded rather than merged.
    """
    cleaned = validate_meal_log(log)
    cleaned['saved_at'] = now

    updated = dict(occurrence)
    updated['meal_log'] = cleaned
    return updated
