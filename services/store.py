"""
Store Service

Database access for the rotation config and dinners. Every mutation is a
single transaction that locks and re-reads the current row, runs the pure
availability/confirmation/meal-log function on that fresh snapshot, writes
only what changed and commits. Committed snapshots are then published to
the sync hub.

Must be called inside a Flask app context.
"""

from contextlib import contextmanager
from datetime import datetime, timezone

from flask import current_app
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.orm import joinedload
from sqlalchemy.orm.exc import StaleDataError

from constants import (
    UNSET, STORED_RESPONSES, CONFIG_KEY, FAMILIES, HOST_ROTATION, INITIAL_LAST_HOST_INDEX,
)
from models import db, Family, RotationConfig, Dinner, DinnerResponse, MealLog

from . import availability, confirmation, meal_log
from .calendar import parse_date_key
from .errors import ValidationError, TransientStoreError, ConflictError
from .sync import SyncHub, DinnerBoard, make_event, CONFIG_CHANNEL, DINNER_CHANNEL

SYNC_EXTENSION = 'sunday_table_sync'


def _utcnow():
    return datetime.now(timezone.utc)


def _iso(value):
    """ISO string for a stored timestamp. SQLite drops tzinfo, so naive values are UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def get_hub():
    """The sync hub attached to the current app."""
    hub = current_app.extensions.get(SYNC_EXTENSION)
    if hub is None:
        hub = current_app.extensions[SYNC_EXTENSION] = SyncHub()
    return hub


# ============================================
# SNAPSHOTS
# ============================================

def _family_snapshot(family):
    return {'id': family.id, 'name': family.name, 'emoji': family.emoji, 'color': family.color}


def _load_families():
    return [_family_snapshot(f) for f in Family.query.order_by(Family.position, Family.id).all()]


def _rotation_snapshot(row, families):
    known = {f['id'] for f in families}
    missing = [fid for fid in row.host_rotation if fid not in known]
    if missing:
        current_app.logger.error('Host rotation references unknown families: %s', ', '.join(missing))
    return {
        'families': families,
        'host_rotation': list(row.host_rotation),
        'last_host_index': row.last_host_index,
        'created_at': _iso(row.created_at),
        'version': row.version,
    }


def _meal_log_snapshot(log):
    if log is None:
        return None
    return {
        'what': log.what,
        'recipe': log.recipe or '',
        'notes': log.notes or '',
        'rating': log.rating,
        'how': log.how,
        'saved_at': _iso(log.saved_at),
    }


def _dinner_snapshot(dinner, family_ids=None):
    snapshot = {
        'date': dinner.date_key,
        'confirmed': bool(dinner.confirmed),
        'host_id': dinner.host_id,
        'meal_log': _meal_log_snapshot(dinner.meal_log),
        'updated_at': _iso(dinner.updated_at),
        'version': dinner.version,
    }
    responses = {r.family_id: r.state for r in dinner.responses}
    return availability.with_responses(snapshot, responses, family_ids)


# ============================================
# READS
# ============================================

@contextmanager
def _reading(what):
    try:
        yield
    except (OperationalError, DBAPIError) as exc:
        db.session.rollback()
        current_app.logger.error('Database read failed while loading %s: %s', what, exc, exc_info=True)
        raise TransientStoreError(f"Could not load {what}: database unavailable") from exc


def ensure_config(families=None, host_rotation=None):
    """
    Seed the families and rotation config on first run.

    Returns True if this call created the config, False if it already existed.
    """
    families = FAMILIES if families is None else families
    host_rotation = HOST_ROTATION if host_rotation is None else host_rotation

    with _reading('rotation config'):
        if db.session.get(RotationConfig, CONFIG_KEY) is not None:
            return False

    known = {f['id'] for f in families}
    unknown = [fid for fid in host_rotation if fid not in known]
    if unknown:
        raise ValidationError(f"Host rotation references unknown families: {', '.join(unknown)}")

    try:
        for position, family in enumerate(families):
            if db.session.get(Family, family['id']) is None:
                db.session.add(Family(
                    id=family['id'],
                    name=family['name'],
                    emoji=family.get('emoji', ''),
                    color=family.get('color', ''),
                    position=position,
                ))
        db.session.add(RotationConfig(
            key=CONFIG_KEY,
            host_rotation=list(host_rotation),
            last_host_index=INITIAL_LAST_HOST_INDEX,
            created_at=_utcnow(),
        ))
        db.session.commit()
    except IntegrityError:
        # Another process seeded first
        db.session.rollback()
        current_app.logger.info('Rotation config was seeded concurrently; keeping existing record')
        return False
    except (OperationalError, DBAPIError) as exc:
        db.session.rollback()
        current_app.logger.error('Seeding rotation config failed: %s', exc, exc_info=True)
        raise TransientStoreError("Could not seed rotation config: database unavailable",
                                  maybe_applied=True) from exc

    current_app.logger.info('Seeded rotation config with %d families', len(families))
    return True


def get_config():
    """Current rotation config snapshot, seeding it first if needed."""
    ensure_config()
    with _reading('rotation config'):
        row = db.session.get(RotationConfig, CONFIG_KEY, populate_existing=True)
        return _rotation_snapshot(row, _load_families())


def get_family_ids():
    with _reading('families'):
        return [f.id for f in Family.query.order_by(Family.position, Family.id).all()]


def get_dinner(key):
    """Snapshot of one dinner; an empty default if nobody has touched it yet."""
    parse_date_key(key)
    family_ids = get_family_ids()
    with _reading(f'dinner {key}'):
        dinner = db.session.get(Dinner, key, populate_existing=True)
        if dinner is None:
            return availability.empty_occurrence(key)
        return _dinner_snapshot(dinner, family_ids)


def list_dinners():
    """All stored dinners as a dict of date key -> snapshot."""
    family_ids = get_family_ids()
    with _reading('dinners'):
        dinners = (Dinner.query
                   .options(joinedload(Dinner.responses), joinedload(Dinner.meal_log))
                   .populate_existing()
                   .order_by(Dinner.date_key)
                   .all())
        return {d.date_key: _dinner_snapshot(d, family_ids) for d in dinners}


# ============================================
# MUTATIONS
# ============================================

def _lock_dinner(key):
    return (Dinner.query
            .filter_by(date_key=key)
            .with_for_update()
            .populate_existing()
            .first())


def _lock_config():
    return (RotationConfig.query
            .filter_by(key=CONFIG_KEY)
            .with_for_update()
            .populate_existing()
            .first())


def _new_dinner(key):
    # A concurrent creator makes the flush raise IntegrityError, which retries
    dinner = Dinner(date_key=key, confirmed=False, updated_at=_utcnow())
    db.session.add(dinner)
    return dinner


def _run_mutation(action, key, work):
    """
    Run work() in a transaction, re-running it after lost version races.

    work() does the locked read, the pure transition and the writes, and
    returns whatever the caller needs after commit.
    """
    retries = current_app.config.get('STORE_CONFLICT_RETRIES', 3)
    for attempt in range(1, retries + 2):
        committing = False
        db.session.expire_all()
        try:
            result = work()
            db.session.flush()
            committing = True
            db.session.commit()
            return result
        except ValidationError:
            db.session.rollback()
            raise
        except (StaleDataError, IntegrityError) as exc:
            # Nothing was written; the next attempt reads the winner's state
            db.session.rollback()
            current_app.logger.warning('Concurrent update during %s %s (attempt %d/%d): %s',
                                       action, key, attempt, retries + 1, exc)
        except (OperationalError, DBAPIError) as exc:
            db.session.rollback()
            current_app.logger.error('Database error during %s %s (committing=%s): %s',
                                     action, key, committing, exc, exc_info=True)
            raise TransientStoreError(f"Could not {action} {key}: database unavailable",
                                      maybe_applied=committing) from exc

    current_app.logger.error('Giving up on %s %s after %d conflicting attempts', action, key, retries + 1)
    raise ConflictError(f"Could not {action} {key}: too many concurrent updates, try again")


def _apply_response(dinner, family_id, state):
    existing = next((r for r in dinner.responses if r.family_id == family_id), None)
    if state == UNSET:
        if existing is not None:
            dinner.responses.remove(existing)
        return
    if state not in STORED_RESPONSES:
        raise ValidationError(f"Unknown availability state: {state!r}")
    if existing is not None:
        existing.state = state
    else:
        dinner.responses.append(DinnerResponse(family_id=family_id, state=state))


@contextmanager
def _after_commit(action, key):
    """
    Guard the read-back and publish that follow a commit.

    The write is already durable here, so a failure must not be reported
    as "not applied".
    """
    try:
        yield
    except (TransientStoreError, OperationalError, DBAPIError) as exc:
        db.session.rollback()
        current_app.logger.error('Committed %s %s but could not read it back: %s',
                                 action, key, exc, exc_info=True)
        raise TransientStoreError(f"Saved {key} but could not read it back: database unavailable",
                                  maybe_applied=True) from exc


def _committed_dinner(key):
    dinner = db.session.get(Dinner, key, populate_existing=True)
    return _dinner_snapshot(dinner, get_family_ids())


def _publish_dinner(action, key):
    with _after_commit(action, key):
        snapshot = _committed_dinner(key)
        get_hub().publish(DINNER_CHANNEL, key, snapshot)
    return snapshot


def _publish_confirmation(key):
    """Publish the advanced rotation and the confirmed dinner as one batch, rotation first."""
    with _after_commit('confirm', key):
        dinner = _committed_dinner(key)
        rotation = get_config()
        get_hub().publish_all([
            make_event(CONFIG_CHANNEL, CONFIG_KEY, rotation),
            make_event(DINNER_CHANNEL, key, dinner),
        ])
    return dinner, rotation


def toggle_availability(key, family_id):
    """
    Move one family to the next availability state for a dinner.

    Only that family's answer row is written, against the state read inside
    the transaction, so concurrent taps by other families are never lost.
    Retrying continues the cycle rather than being a no-op.

    Returns:
        The committed dinner snapshot
    """
    parse_date_key(key)
    ensure_config()

    def work():
        family_ids = [f.id for f in Family.query.order_by(Family.position, Family.id).all()]
        dinner = _lock_dinner(key)
        before = (_dinner_snapshot(dinner, family_ids) if dinner is not None
                  else availability.empty_occurrence(key))
        after = availability.toggle_availability(before, family_id, family_ids)
        if dinner is None:
            dinner = _new_dinner(key)
        state = availability.response_for(after, family_id)
        _apply_response(dinner, family_id, state)
        # Touching the row bumps its version so racing writers conflict
        dinner.updated_at = _utcnow()
        return state

    action = 'toggle availability on'
    state = _run_mutation(action, key, work)
    current_app.logger.info('Family %s is now %s for %s', family_id, state, key)
    return _publish_dinner(action, key)


def confirm_dinner(key):
    """
    Confirm a dinner and assign the next host in the rotation.

    The rotation row is locked first since it is the serialization point
    for confirmations; the dinner and rotation changes commit together.

    After a TransientStoreError with maybe_applied=True, re-read the dinner
    before retrying.

    Returns:
        (dinner snapshot, rotation config snapshot) as committed
    """
    parse_date_key(key)
    ensure_config()

    def work():
        rotation_row = _lock_config()
        families = _load_families()
        family_ids = [f['id'] for f in families]
        dinner = _lock_dinner(key)
        before = (_dinner_snapshot(dinner, family_ids) if dinner is not None
                  else availability.empty_occurrence(key))
        confirmed, advanced = confirmation.confirm_occurrence(before, _rotation_snapshot(rotation_row, families))
        if dinner is None:
            dinner = _new_dinner(key)
        dinner.confirmed = True
        dinner.host_id = confirmed['host_id']
        dinner.updated_at = _utcnow()
        rotation_row.last_host_index = advanced['last_host_index']
        return confirmed['host_id'], advanced['last_host_index']

    host_id, index = _run_mutation('confirm', key, work)
    current_app.logger.info('Confirmed %s; host %s (rotation index %d)', key, host_id, index)
    return _publish_confirmation(key)


def save_meal_log(key, log):
    """
    Replace the meal log for a dinner, creating the dinner if needed.

    Returns:
        The committed dinner snapshot
    """
    parse_date_key(key)
    # Reject bad input before opening a transaction
    meal_log.validate_meal_log(log)

    def work():
        dinner = _lock_dinner(key)
        before = (_dinner_snapshot(dinner) if dinner is not None
                  else availability.empty_occurrence(key))
        now = _utcnow()
        after = meal_log.save_meal_log(before, log, now)
        if dinner is None:
            dinner = _new_dinner(key)
        fields = after['meal_log']
        if dinner.meal_log is None:
            dinner.meal_log = MealLog(**fields)
        else:
            for name, value in fields.items():
                setattr(dinner.meal_log, name, value)
        dinner.updated_at = now
        return fields['what']

    action = 'save meal log for'
    what = _run_mutation(action, key, work)
    current_app.logger.info('Saved meal log for %s: %s', key, what)
    return _publish_dinner(action, key)


# ============================================
# SUBSCRIPTIONS
# ============================================

def _initial_events():
    events = [make_event(CONFIG_CHANNEL, CONFIG_KEY, get_config())]
    for key, snapshot in list_dinners().items():
        events.append(make_event(DINNER_CHANNEL, key, snapshot))
    return events


def subscribe(callback):
    """
    Subscribe to config and dinner changes.

    callback receives the current config and every stored dinner first,
    then each committed change. Returns an unsubscribe function.
    """
    return get_hub().subscribe(callback, _initial_events)


@contextmanager
def open_board():
    """A DinnerBoard filled from the current state, subscribed for the duration of the block."""
    board = DinnerBoard()
    unsubscribe = subscribe(board)
    try:
        yield board
    finally:
        unsubscribe()
