"""
Sync Service

Pushes committed config and dinner snapshots to subscribers.

Every event is a dict {'channel', 'key', 'snapshot'} where channel is
'config' or 'dinner'. Subscribers get the current state first and then
change notifications. Per key, a subscriber only ever sees snapshots with
increasing version numbers, so a late publish of an older commit is
dropped instead of overwriting newer state.
"""

import logging
import queue
import threading

from .ranking import (
    rank_upcoming, best_upcoming, family_summaries,
    confirmed_history, history_stats,
)

logger = logging.getLogger(__name__)

CONFIG_CHANNEL = 'config'
DINNER_CHANNEL = 'dinner'


def make_event(channel, key, snapshot):
    return {'channel': channel, 'key': key, 'snapshot': snapshot}


class _Subscription:
    def __init__(self, callback):
        self.callback = callback
        self.versions = {}

    def deliver(self, event):
        ident = (event['channel'], event['key'])
        version = event['snapshot'].get('version', 0)
        if version <= self.versions.get(ident, 0):
            return False
        self.versions[ident] = version
        try:
            self.callback(event)
        except Exception:
            # The change is already committed; log and keep delivering
            logger.exception("Sync subscriber %r failed on %s %s", self.callback, event['channel'], event['key'])
        return True


class SyncHub:
    """
    In-process notification channel between the store and its consumers.

    One hub is attached to each app (app.extensions, see store.get_hub) and
    only sees commits made by that process. With several WSGI worker
    processes, a stream client is only told about writes handled by its
    own worker; other workers' commits show up on its next reconnect.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._subscriptions = []

    def subscribe(self, callback, load_initial=None):
        """
        Register a callback and send it the initial snapshot.

        Args:
            callback: Called with each event dict
            load_initial: Optional callable returning the list of events
                that make up the current state

        Returns:
            A function that removes the subscription
        """
        subscription = _Subscription(callback)
        with self._lock:
            # Loading under the lock keeps publishes from slipping in between
            # the initial state and registration
            if load_initial is not None:
                for event in load_initial():
                    subscription.deliver(event)
            self._subscriptions.append(subscription)

        def unsubscribe():
            with self._lock:
                if subscription in self._subscriptions:
                    self._subscriptions.remove(subscription)

        return unsubscribe

    def publish(self, channel, key, snapshot):
        """Deliver a committed snapshot to every subscriber."""
        self.publish_all([make_event(channel, key, snapshot)])

    def publish_all(self, events):
        """
        Deliver snapshots committed in one transaction as a batch.

        Each subscriber receives the events in the given order with no
        other publish in between.
        """
        with self._lock:
            subscriptions = list(self._subscriptions)
            for event in events:
                delivered = sum(1 for s in subscriptions if s.deliver(event))
                logger.debug("Published %s %s v%s to %d/%d subscribers", event['channel'], event['key'],
                             event['snapshot'].get('version'), delivered, len(subscriptions))

    @property
    def subscriber_count(self):
        with self._lock:
            return len(self._subscriptions)


class DinnerBoard:
    """
    Consumer that keeps the latest config and dinners in memory.

    Pass it to SyncHub.subscribe; the ranking and summary views are
    derived from whatever it has received so far.
    """

    def __init__(self):
        self.config = None
        self.dinners = {}

    def __call__(self, event):
        if event['channel'] == CONFIG_CHANNEL:
            self.config = event['snapshot']
        elif event['channel'] == DINNER_CHANNEL:
            self.dinners[event['key']] = event['snapshot']

    @property
    def family_count(self):
        return len(self.config['families']) if self.config else 0

    def ranking(self, window):
        return rank_upcoming(self.dinners, self.family_count, window)

    def best(self, window):
        return best_upcoming(self.ranking(window))

    def families(self):
        if self.config is None:
            return []
        return family_summaries(self.config, self.dinners)

    def history(self):
        history = confirmed_history(self.dinners)
        return history, history_stats(history)


class StreamListener:
    """
    Consumer that buffers events for a streaming HTTP response.

    The buffer is bounded. If a slow client lets it fill up, the listener
    is marked overflowed so the stream can close and the client can
    reconnect for a fresh initial snapshot.
    """

    def __init__(self, maxsize=256):
        self._queue = queue.Queue(maxsize=maxsize)
        self.overflowed = False

    def __call__(self, event):
        try:
            self._queue.put_nowait(event)
        except queue.Full:
            self.overflowed = True
            logger.warning("Stream listener overflowed; dropping %s %s", event['channel'], event['key'])

    def get(self, timeout):
        """Next event, or None if nothing arrived within timeout seconds."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None
