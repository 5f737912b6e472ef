"""Tests for the sync hub and its consumers."""

from services.sync import (
    SyncHub, DinnerBoard, StreamListener, make_event, CONFIG_CHANNEL, DINNER_CHANNEL,
)


def _dinner(key, version, available=()):
    return {
        'date': key, 'responses': {f: 'available' for f in available},
        'available': list(available), 'declined': [], 'confirmed': False,
        'host_id': None, 'meal_log': None, 'version': version,
    }


def test_subscriber_gets_initial_state_then_changes():
    hub = SyncHub()
    received = []
    hub.subscribe(received.append, lambda: [make_event(DINNER_CHANNEL, '2026-11-01', _dinner('2026-11-01', 1))])
    hub.publish(DINNER_CHANNEL, '2026-11-01', _dinner('2026-11-01', 2, ['f1']))
    assert [e['snapshot']['version'] for e in received] == [1, 2]


def test_older_snapshots_are_dropped_per_key():
    hub = SyncHub()
    received = []
    hub.subscribe(received.append)
    hub.publish(DINNER_CHANNEL, '2026-11-01', _dinner('2026-11-01', 3))
    hub.publish(DINNER_CHANNEL, '2026-11-01', _dinner('2026-11-01', 2))
    hub.publish(DINNER_CHANNEL, '2026-11-08', _dinner('2026-11-08', 1))
    assert [(e['key'], e['snapshot']['version']) for e in received] == [('2026-11-01', 3), ('2026-11-08', 1)]


def test_unsubscribe_stops_delivery():
    hub = SyncHub()
    received = []
    unsubscribe = hub.subscribe(received.append)
    unsubscribe()
    hub.publish(DINNER_CHANNEL, '2026-11-01', _dinner('2026-11-01', 1))
    assert received == []
    assert hub.subscriber_count == 0
    unsubscribe()


def test_failing_subscriber_does_not_block_others():
    hub = SyncHub()
    received = []

    def broken(event):
        raise RuntimeError('boom')

    hub.subscribe(broken)
    hub.subscribe(received.append)
    hub.publish(DINNER_CHANNEL, '2026-11-01', _dinner('2026-11-01', 1))
    assert len(received) == 1


def test_board_derives_ranking_from_events(rotation):
    hub = SyncHub()
    board = DinnerBoard()
    hub.subscribe(board)
    hub.publish(CONFIG_CHANNEL, 'app', rotation)
    hub.publish(DINNER_CHANNEL, '2026-11-08', _dinner('2026-11-08', 1, ['f1', 'f2']))
    assert board.family_count == 3
    assert board.best(['2026-11-01', '2026-11-08'])['date'] == '2026-11-08'
    assert [f['id'] for f in board.families()] == ['f1', 'f2', 'f3']
    history, stats = board.history()
    assert history == []
    assert stats['dinners'] == 0


def test_empty_board():
    board = DinnerBoard()
    assert board.family_count == 0
    assert board.families() == []
    assert board.ranking(['2026-11-01']) == [{'date': '2026-11-01', 'score': 0.0}]


def test_stream_listener_buffers_and_overflows():
    listener = StreamListener(maxsize=1)
    listener(make_event(DINNER_CHANNEL, '2026-11-01', _dinner('2026-11-01', 1)))
    assert listener.overflowed is False
    listener(make_event(DINNER_CHANNEL, '2026-11-01', _dinner('2026-11-01', 2)))
    assert listener.overflowed is True
    assert listener.get(timeout=0.01)['snapshot']['version'] == 1
    assert listener.get(timeout=0.01) is None


def test_batch_is_delivered_in_order(rotation):
    hub = SyncHub()
    received = []
    hub.subscribe(received.append)
    advanced = dict(rotation, last_host_index=0, version=2)
    hub.publish_all([
        make_event(CONFIG_CHANNEL, 'app', advanced),
        make_event(DINNER_CHANNEL, '2026-11-01', dict(_dinner('2026-11-01', 2), confirmed=True, host_id='f1')),
    ])
    assert [e['channel'] for e in received] == [CONFIG_CHANNEL, DINNER_CHANNEL]
