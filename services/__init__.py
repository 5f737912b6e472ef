"""
Services Package

Scheduling logic for the Sunday dinner: availability, confirmation,
meal logs, ranking, live sync and meal suggestions.
"""

from .errors import (
    SundayTableError,
    ValidationError,
    TransientStoreError,
    ConflictError,
    ExternalServiceError,
)

from .calendar import (
    date_key,
    parse_date_key,
    utc_today,
    upcoming_sundays,
    month_name,
)

from .availability import (
    empty_occurrence,
    response_for,
    available_ids,
    declined_ids,
    toggle_availability,
)

from .confirmation import (
    next_host,
    confirm_occurrence,
)

from .meal_log import (
    validate_meal_log,
    save_meal_log,
)

from .ranking import (
    availability_score,
    rank_upcoming,
    best_upcoming,
    family_summaries,
    confirmed_history,
    history_stats,
)

from .sync import (
    SyncHub,
    DinnerBoard,
    StreamListener,
)

from .suggestions import (
    suggest_meals,
    parse_suggestions,
    curated_meals,
    FALLBACK_NOTICE,
)

__all__ = [
    # Errors
    'SundayTableError',
    'ValidationError',
    'TransientStoreError',
    'ConflictError',
    'ExternalServiceError',
    # Calendar
    'date_key',
    'parse_date_key',
    'utc_today',
    'upcoming_sundays',
    'month_name',
    # Availability
    'empty_occurrence',
    'response_for',
    'available_ids',
    'declined_ids',
    'toggle_availability',
    # Confirmation
    'next_host',
    'confirm_occurrence',
    # Meal log
    'validate_meal_log',
    'save_meal_log',
    # Ranking
    'availability_score',
    'rank_upcoming',
    'best_upcoming',
    'family_summaries',
    'confirmed_history',
    'history_stats',
    # Sync
    'SyncHub',
    'DinnerBoard',
    'StreamListener',
    # Suggestions
    'suggest_meals',
    'parse_suggestions',
    'curated_meals',
    'FALLBACK_NOTICE',
]
