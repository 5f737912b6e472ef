"""
Ranking Service

Scores upcoming dinners by availability and builds the family and
history summaries.
"""

from .availability import available_ids
from .calendar import date_key
from .confirmation import next_host
from .errors import ValidationError


def availability_score(occurrence, family_count):
    """Fraction of families available for a dinner (0.0 when nobody has answered)."""
    if occurrence is None:
        return 0.0
    return len(available_ids(occurrence)) / max(family_count, 1)


def rank_upcoming(occurrences, family_count, window):
    """
    Rank the unconfirmed dinners in the window by availability.

    Args:
        occurrences: dict of date key -> occurrence snapshot (sparse)
        family_count: Number of configured families
        window: Iterable of dates or date keys to consider

    Returns:
        List of {'date', 'score'} sorted by score descending, then date
        ascending. Confirmed dinners are left out; dates with no stored
        dinner are included with a score of 0.
    """
    ranked = []
    for day in window:
        key = day if isinstance(day, str) else date_key(day)
        occurrence = occurrences.get(key)
        if occurrence is not None and occurrence['confirmed']:
            continue
        ranked.append({'date': key, 'score': availability_score(occurrence, family_count)})

    # Keys are YYYY-MM-DD so string order is date order
    ranked.sort(key=lambda entry: (-entry['score'], entry['date']))
    return ranked


def best_upcoming(ranked):
    """Top-ranked dinner that at least one family can attend, or None."""
    if ranked and ranked[0]['score'] > 0:
        return ranked[0]
    return None


def family_summaries(rotation, occurrences):
    """
    Per-family hosting summary in display order.

    Each entry carries the family's fields plus hosted (number of confirmed
    dinners hosted), rotation_position (-1 if not in the rotation) and
    up_next.
    """
    hosted = {}
    for occurrence in occurrences.values():
        if occurrence['confirmed'] and occurrence['host_id']:
            hosted[occurrence['host_id']] = hosted.get(occurrence['host_id'], 0) + 1

    try:
        _, up_next = next_host(rotation)
    except ValidationError:
        up_next = None

    summaries = []
    for family in rotation['families']:
        fid = family['id']
        summary = dict(family)
        summary['hosted'] = hosted.get(fid, 0)
        summary['rotation_position'] = rotation['host_rotation'].index(fid) if fid in rotation['host_rotation'] else -1
        summary['up_next'] = fid == up_next
        summaries.append(summary)
    return summaries


def confirmed_history(occurrences):
    """Confirmed dinners, newest first, each with its attendee ids."""
    history = [o for o in occurrences.values() if o['confirmed']]
    history.sort(key=lambda o: o['date'], reverse=True)
    return [dict(o, attendees=list(o['available'])) for o in history]


def history_stats(history):
    """Totals shown under the history: dinners, meals logged and average families."""
    dinners = len(history)
    meals_logged = sum(1 for o in history if o['meal_log'] and o['meal_log'].get('what'))
    if dinners:
        avg_families = round(sum(len(o['available']) for o in history) / dinners, 1)
    else:
        avg_families = 0
    return {
        'dinners': dinners,
        'meals_logged': meals_logged,
        'avg_families': avg_families,
    }
