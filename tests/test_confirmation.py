"""Tests for confirmation and host rotation."""

import pytest

from services.availability import empty_occurrence
from services.confirmation import confirm_occurrence, next_host
from services.errors import ValidationError


def test_rotation_scenario_wraps_to_first_family(rotation):
    expected = [('2026-11-01', 'f1', 0), ('2026-11-08', 'f2', 1),
                ('2026-11-15', 'f3', 2), ('2026-11-22', 'f1', 0)]
    for key, host, index in expected:
        occ, rotation = confirm_occurrence(empty_occurrence(key), rotation)
        assert occ['confirmed'] is True
        assert occ['host_id'] == host
        assert rotation['last_host_index'] == index


def test_index_advances_by_one_modulo_length(rotation):
    for start in range(-1, 3):
        rotation['last_host_index'] = start
        _, advanced = confirm_occurrence(empty_occurrence('2026-11-01'), rotation)
        new_index = (start + 1) % 3
        assert advanced['last_host_index'] == new_index


def test_host_comes_from_rotation_not_family_order(rotation):
    rotation['host_rotation'] = ['f3', 'f1', 'f2']
    occ, advanced = confirm_occurrence(empty_occurrence('2026-11-01'), rotation)
    assert occ['host_id'] == 'f3'
    assert advanced['host_rotation'][advanced['last_host_index']] == 'f3'


def test_confirmation_ignores_availability(rotation):
    occ, advanced = confirm_occurrence(empty_occurrence('2026-11-01'), rotation)
    assert occ['available'] == []
    assert advanced['last_host_index'] == 0


def test_second_confirmation_is_rejected(rotation):
    occ, advanced = confirm_occurrence(empty_occurrence('2026-11-01'), rotation)
    with pytest.raises(ValidationError):
        confirm_occurrence(occ, advanced)
    assert occ['host_id'] == 'f1'
    assert advanced['last_host_index'] == 0


def test_empty_rotation_is_rejected(rotation):
    rotation['host_rotation'] = []
    with pytest.raises(ValidationError):
        confirm_occurrence(empty_occurrence('2026-11-01'), rotation)


def test_inputs_are_not_modified(rotation):
    occ = empty_occurrence('2026-11-01')
    confirm_occurrence(occ, rotation)
    assert occ['confirmed'] is False
    assert rotation['last_host_index'] == -1


def test_next_host(rotation):
    assert next_host(rotation) == (0, 'f1')
    rotation['last_host_index'] = 2
    assert next_host(rotation) == (0, 'f1')
