"""Test configuration and fixtures."""

import pytest

from app import create_app
from models import db as _db
from services import store as _store


@pytest.fixture
def app():
    """Create application for testing with a seeded in-memory database."""
    app = create_app('testing')

    with app.app_context():
        _db.create_all()
        _store.ensure_config()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    """Test client for making requests."""
    return app.test_client()


@pytest.fixture
def store(app):
    """Store module bound to the test app context."""
    return _store


@pytest.fixture
def events(store):
    """Every sync event delivered after the initial snapshot."""
    received = []
    unsubscribe = store.subscribe(received.append)
    received.clear()
    yield received
    unsubscribe()


@pytest.fixture
def rotation():
    """Three families in display order with the default rotation."""
    return {
        'families': [
            {'id': 'f1', 'name': 'One', 'emoji': '', 'color': ''},
            {'id': 'f2', 'name': 'Two', 'emoji': '', 'color': ''},
            {'id': 'f3', 'name': 'Three', 'emoji': '', 'color': ''},
        ],
        'host_rotation': ['f1', 'f2', 'f3'],
        'last_host_index': -1,
        'version': 1,
    }
