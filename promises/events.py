class Transition(object):
    """Phases reported through the ``state_changed`` hook."""
    initialized = 'INITIALIZED'
    resolved_before_callbacks = 'RESOLVED_BEFORE_CALLBACKS'
    resolved_after_callbacks = 'RESOLVED_AFTER_CALLBACKS'
    failed_before_callbacks = 'FAILED_BEFORE_CALLBACKS'
    failed_after_callbacks = 'FAILED_AFTER_CALLBACKS'


class Subscription(object):
    """Handle returned by ``EventHook.subscribe``.

    Unsubscribing is idempotent. Subscriptions can also be used as context
    managers to keep a subscriber attached only for the duration of a block.
    """

    def __init__(self, hook, fun):
        self._hook = hook
        self._fun = fun

    @property
    def active(self):
        return self._hook is not None

    def unsubscribe(self):
        """Detaches subscriber from the hook.

        Returns:
            True if subscriber was still attached.
        """
        hook, self._hook = self._hook, None
        if hook is None:
            return False
        return hook.unsubscribe(self._fun) > 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.unsubscribe()


class EventHook(object):
    """Ordered list of subscribers invoked synchronously."""

    def __init__(self, name=None):
        self.name = name
        self._subscribers = []

    def subscribe(self, fun):
        assert callable(fun), "EventHook.subscribe expects callable"
        self._subscribers.append(fun)
        return Subscription(self, fun)

    def unsubscribe(self, fun):
        """Remove all instances of a subscriber.

        Returns the number of subscribers removed.
        """
        filtered = [f for f in self._subscribers if f != fun]
        removed_count = len(self._subscribers) - len(filtered)
        if removed_count:
            self._subscribers[:] = filtered
        return removed_count

    def fire(self, *args):
        # snapshot: subscribers may detach themselves while being notified
        for fun in self._subscribers[:]:
            fun(*args)

    def clear(self):
        self._subscribers[:] = []

    def __len__(self):
        return len(self._subscribers)

    def __bool__(self):
        return bool(self._subscribers)

    def __repr__(self):
        return '{}<{}, {} subscriber(s)>'.format(
            self.__class__.__name__, self.name, len(self._subscribers))


# Process-wide diagnostic hooks.
# state_changed subscribers are called with (future, transition),
# uncaught_exception subscribers with (future, exception).
state_changed = EventHook('state_changed')
uncaught_exception = EventHook('uncaught_exception')
