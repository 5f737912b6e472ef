"""
Availability Service

Pure state transitions for a family's answer to one dinner. Each family
cycles unset -> available -> declined -> unset. Nothing here touches the
database; the store runs these functions on a freshly locked snapshot.
"""

from constants import UNSET, AVAILABLE, DECLINED, NEXT_RESPONSE

from .errors import ValidationError


def empty_occurrence(key):
    """Default snapshot for a dinner nobody has interacted with yet."""
    return {
        'date': key,
        'responses': {},
        'available': [],
        'declined': [],
        'confirmed': False,
        'host_id': None,
        'meal_log': None,
        'updated_at': None,
        'version': 0,
    }


def response_for(occurrence, family_id):
    return occurrence['responses'].get(family_id, UNSET)


def ids_with_response(responses, state, family_ids=None):
    """Family ids holding the given response, in family display order when known."""
    matching = [fid for fid, value in responses.items() if value == state]
    if family_ids is None:
        return sorted(matching)
    order = {fid: i for i, fid in enumerate(family_ids)}
    return sorted(matching, key=lambda fid: (order.get(fid, len(order)), fid))


def available_ids(occurrence, family_ids=None):
    return ids_with_response(occurrence['responses'], AVAILABLE, family_ids)


def declined_ids(occurrence, family_ids=None):
    return ids_with_response(occurrence['responses'], DECLINED, family_ids)


def with_responses(occurrence, responses, family_ids=None):
    """Copy of the snapshot with new responses and rebuilt available/declined lists."""
    updated = dict(occurrence)
    updated['responses'] = responses
    updated['available'] = ids_with_response(responses, AVAILABLE, family_ids)
    updated['declined'] = ids_with_response(responses, DECLINED, family_ids)
    return updated


def toggle_availability(occurrence, family_id, family_ids):
    """
    Advance one family's answer to the next state in the cycle.

    Args:
        occurrence: Current dinner snapshot
        family_id: Family tapping its bubble
        family_ids: Ids of all configured families, in display order

    Returns:
        New snapshot; the input is left untouched.

    Raises:
        ValidationError: Unknown family or dinner already confirmed
    """
    if family_id not in family_ids:
        raise ValidationError(f"Unknown family: {family_id!r}")
    if occurrence['confirmed']:
        raise ValidationError(f"Dinner {occurrence['date']} is confirmed; availability is frozen")

    responses = dict(occurrence['responses'])
    new_state = NEXT_RESPONSE[response_for(occurrence, family_id)]
    if new_state == UNSET:
        responses.pop(family_id, None)
    else:
        responses[family_id] = new_state

    return with_responses(occurrence, responses, family_ids)
