"""Tests for availability ranking and the family/history summaries."""

import pytest

from services.availability import empty_occurrence, toggle_availability
from services.ranking import (
    availability_score, rank_upcoming, best_upcoming,
    family_summaries, confirmed_history, history_stats,
)

FAMILY_IDS = ['f1', 'f2', 'f3']
WINDOW = ['2026-11-01', '2026-11-08', '2026-11-15', '2026-11-22']


def _dinner(key, available=(), confirmed=False, host_id=None, meal_log=None):
    occ = empty_occurrence(key)
    for family_id in available:
        occ = toggle_availability(occ, family_id, FAMILY_IDS)
    occ['confirmed'] = confirmed
    occ['host_id'] = host_id
    occ['meal_log'] = meal_log
    return occ


def test_score_is_fraction_of_families_available():
    occ = _dinner('2026-11-01', available=['f1', 'f2'])
    assert availability_score(occ, 3) == pytest.approx(0.6666, abs=1e-3)
    ranked = rank_upcoming({'2026-11-01': occ}, 3, ['2026-11-01'])
    assert ranked[0]['score'] == pytest.approx(2 / 3)


def test_zero_families_does_not_divide_by_zero():
    assert availability_score(_dinner('2026-11-01'), 0) == 0.0


def test_confirmed_dinners_are_excluded():
    dinners = {
        '2026-11-01': _dinner('2026-11-01', available=FAMILY_IDS, confirmed=True, host_id='f1'),
        '2026-11-08': _dinner('2026-11-08', available=['f1']),
    }
    ranked = rank_upcoming(dinners, 3, WINDOW)
    dates = [entry['date'] for entry in ranked]
    assert '2026-11-01' not in dates
    assert dates[0] == '2026-11-08'


def test_ties_are_broken_by_earlier_date():
    dinners = {
        '2026-11-22': _dinner('2026-11-22', available=['f1']),
        '2026-11-08': _dinner('2026-11-08', available=['f2']),
    }
    ranked = rank_upcoming(dinners, 3, WINDOW)
    assert [e['date'] for e in ranked] == ['2026-11-08', '2026-11-22', '2026-11-01', '2026-11-15']


def test_window_accepts_dates():
    from datetime import date
    ranked = rank_upcoming({}, 3, [date(2026, 11, 8), date(2026, 11, 1)])
    assert [e['date'] for e in ranked] == ['2026-11-01', '2026-11-08']


def test_best_upcoming_needs_someone_available():
    assert best_upcoming(rank_upcoming({}, 3, WINDOW)) is None
    dinners = {'2026-11-15': _dinner('2026-11-15', available=['f3'])}
    assert best_upcoming(rank_upcoming(dinners, 3, WINDOW))['date'] == '2026-11-15'


def test_family_summaries_count_hosting_and_next_host(rotation):
    rotation['last_host_index'] = 0
    dinners = {
        '2026-11-01': _dinner('2026-11-01', confirmed=True, host_id='f1'),
        '2026-11-08': _dinner('2026-11-08', available=['f2']),
    }
    summaries = {s['id']: s for s in family_summaries(rotation, dinners)}
    assert summaries['f1']['hosted'] == 1
    assert summaries['f2']['hosted'] == 0
    assert summaries['f2']['up_next'] is True
    assert summaries['f1']['up_next'] is False
    assert summaries['f3']['rotation_position'] == 2


def test_family_summaries_with_empty_rotation(rotation):
    rotation['host_rotation'] = []
    summaries = family_summaries(rotation, {})
    assert all(not s['up_next'] for s in summaries)
    assert all(s['rotation_position'] == -1 for s in summaries)


def test_history_is_newest_first_with_stats():
    dinners = {
        '2026-11-01': _dinner('2026-11-01', available=['f1', 'f2'], confirmed=True, host_id='f1',
                              meal_log={'what': 'Tacos'}),
        '2026-11-08': _dinner('2026-11-08', available=['f1'], confirmed=True, host_id='f2'),
        '2026-11-15': _dinner('2026-11-15', available=['f3']),
    }
    history = confirmed_history(dinners)
    assert [d['date'] for d in history] == ['2026-11-08', '2026-11-01']
    assert history[1]['attendees'] == ['f1', 'f2']
    assert history_stats(history) == {'dinners': 2, 'meals_logged': 1, 'avg_families': 1.5}


def test_history_stats_when_empty():
    assert history_stats([]) == {'dinners': 0, 'meals_logged': 0, 'avg_families': 0}
