"""
Confirmation Service

Locks in a dinner and picks its host from the rotation.
"""

from .errors import ValidationError


def next_host(rotation):
    """Return (index, family_id) of the family whose turn it is to host."""
    host_rotation = rotation['host_rotation']
    if not host_rotation:
        raise ValidationError("Host rotation is empty")
    index = (rotation['last_host_index'] + 1) % len(host_rotation)
    return index, host_rotation[index]


def confirm_occurrence(occurrence, rotation):
    """
    Confirm a dinner and advance the host rotation by one.

    Confirmation does not look at availability; deciding when a dinner has
    enough families is left to the caller. Both returned snapshots must be
    persisted together.

    Returns:
        (occurrence', rotation') as new dicts

    Raises:
        ValidationError: Already confirmed, or the rotation is empty
    """
    if occurrence['confirmed']:
        raise ValidationError(f"Dinner {occurrence['date']} is already confirmed")

    index, host_id = next_host(rotation)

    confirmed = dict(occurrence)
    confirmed['confirmed'] = True
    confirmed['host_id'] = host_id

    advanced = dict(rotation)
    advanced['last_host_index'] = index

    return confirmed, advanced
