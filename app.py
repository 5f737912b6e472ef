import json

import click
from flask import Flask, Blueprint, Response, current_app, jsonify, request, stream_with_context
from flask.cli import with_appcontext
from flask_migrate import Migrate

from config import get_config
from constants import MEAL_FILTERS, MAX_LENGTHS
from models import db
from services import store
from services.availability import empty_occurrence
from services.calendar import upcoming_sundays, utc_today, month_name
from services.errors import ValidationError, TransientStoreError
from services.suggestions import suggest_meals, curated_meals, FALLBACK_NOTICE
from services.sync import SyncHub, StreamListener

api = Blueprint('api', __name__)


def _request_json():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Expected a JSON object body')
    return data


def _window():
    return upcoming_sundays(utc_today(), current_app.config['WINDOW_MONTHS'])


# ============================================
# ROUTES - HOME
# ============================================

@api.route('/')
def index():
    return jsonify({
        'service': 'sunday-table',
        'endpoints': {
            'schedule': '/api/schedule',
            'families': '/api/families',
            'history': '/api/history',
            'meals': '/api/meals',
            'stream': '/api/stream',
        },
    })


# ============================================
# ROUTES - CONFIG & DINNERS
# ============================================

@api.route('/api/config')
def config_view():
    return jsonify(store.get_config())


@api.route('/api/dinners')
def dinners_list():
    return jsonify(store.list_dinners())


@api.route('/api/dinners/<date_key>')
def dinner_view(date_key):
    return jsonify(store.get_dinner(date_key))


@api.route('/api/dinners/<date_key>/toggle', methods=['POST'])
def dinner_toggle(date_key):
    family_id = _request_json().get('family_id')
    if not isinstance(family_id, str) or not family_id:
        raise ValidationError('family_id is required')
    if len(family_id) > MAX_LENGTHS['family_id']:
        raise ValidationError('family_id is too long')
    return jsonify(store.toggle_availability(date_key, family_id))


@api.route('/api/dinners/<date_key>/confirm', methods=['POST'])
def dinner_confirm(date_key):
    dinner, rotation = store.confirm_dinner(date_key)
    return jsonify({'dinner': dinner, 'config': rotation})


@api.route('/api/dinners/<date_key>/log', methods=['POST'])
def dinner_log(date_key):
    return jsonify(store.save_meal_log(date_key, _request_json()))


# ============================================
# ROUTES - MEAL IDEAS
# ============================================

@api.route('/api/dinners/<date_key>/suggestions')
def dinner_suggestions(date_key):
    """AI meal ideas for a dinner, with the curated list as fallback."""
    month = month_name(date_key)
    dinner = store.get_dinner(date_key)
    families = {f['id']: f for f in store.get_config()['families']}
    host = families.get(dinner['host_id'])

    cfg = current_app.config
    ideas = suggest_meals(
        host['name'] if host else None,
        month,
        api_key=cfg['ANTHROPIC_API_KEY'],
        api_url=cfg['SUGGESTION_API_URL'],
        model=cfg['SUGGESTION_MODEL'],
        timeout=cfg['SUGGESTION_TIMEOUT'],
        max_tokens=cfg['SUGGESTION_MAX_TOKENS'],
    )
    return jsonify({
        'date': date_key,
        'host_id': dinner['host_id'],
        'suggestions': ideas,
        'notice': None if ideas else FALLBACK_NOTICE,
        'curated': curated_meals(request.args.get('filter', 'all')),
    })


@api.route('/api/meals')
def meals_list():
    tag = request.args.get('tag', 'all')
    return jsonify({'filters': MEAL_FILTERS, 'meals': curated_meals(tag)})


# ============================================
# ROUTES - SCHEDULE, FAMILIES, HISTORY
# ============================================

@api.route('/api/schedule')
def schedule():
    window = _window()
    with store.open_board() as board:
        ranked = board.ranking(window)
        best = board.best(window)
        family_count = board.family_count
        sundays = []
        for day in window:
            key = day.isoformat()
            dinner = board.dinners.get(key) or empty_occurrence(key)
            sundays.append({
                'date': key,
                'dinner': dinner,
                'available_count': len(dinner['available']),
                'family_count': family_count,
                'is_best': best is not None and best['date'] == key,
            })
    return jsonify({'sundays': sundays, 'ranking': ranked, 'best': best})


@api.route('/api/families')
def families_view():
    with store.open_board() as board:
        return jsonify({'families': board.families()})


@api.route('/api/history')
def history_view():
    with store.open_board() as board:
        history, stats = board.history()
    return jsonify({'dinners': history, 'stats': stats})


# ============================================
# ROUTES - LIVE UPDATES
# ============================================

@api.route('/api/stream')
def stream():
    """Server-Sent Events: current state first, then every committed change."""
    listener = StreamListener()
    unsubscribe = store.subscribe(listener)
    heartbeat = current_app.config['SYNC_HEARTBEAT_SECONDS']

    def generate():
        try:
            while not listener.overflowed:
                event = listener.get(timeout=heartbeat)
                if event is None:
                    yield ': heartbeat\n\n'
                    continue
                yield f"event: {event['channel']}\ndata: {json.dumps(event)}\n\n"
        finally:
            unsubscribe()

    return Response(stream_with_context(generate()), mimetype='text/event-stream',
                    headers={'Cache-Control': 'no-cache'})


# ============================================
# ERROR HANDLERS
# ============================================

@api.app_errorhandler(ValidationError)
def handle_validation_error(error):
    return jsonify(error.to_dict()), 400


@api.app_errorhandler(TransientStoreError)
def handle_store_error(error):
    return jsonify(error.to_dict()), 503


# ============================================
# INITIALIZE DATABASE
# ============================================

def init_db():
    """Create tables and seed the families and host rotation."""
    db.create_all()
    return store.ensure_config()


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create tables and seed the rotation config."""
    created = init_db()
    click.echo('Seeded rotation config.' if created else 'Rotation config already present.')


def create_app(config_name=None, overrides=None):
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))
    if overrides:
        app.config.update(overrides)

    db.init_app(app)
    Migrate(app, db)
    app.extensions[store.SYNC_EXTENSION] = SyncHub()

    app.register_blueprint(api)
    app.cli.add_command(init_db_command)
    return app


app = create_app()


if __name__ == '__main__':
    with app.app_context():
        init_db()
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=True, host='0.0.0.0', port=5000, use_reloader=False, threaded=True)
