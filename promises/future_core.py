from .exceptions import InvalidStateError, AlreadySettledError
from .events import Transition
from . import events
import logging

logger = logging.getLogger(__name__)


class FutureState(object):
    pending = 'PENDING'
    resolved = 'RESOLVED'
    failed = 'FAILED'


_TRANSITIONS = {
    FutureState.resolved: (Transition.resolved_before_callbacks,
                           Transition.resolved_after_callbacks),
    FutureState.failed: (Transition.failed_before_callbacks,
                         Transition.failed_after_callbacks),
}


class FutureCore(object):
    """Encapsulates Future state and settlement.

    A future starts pending and is settled exactly once, either resolved with
    a value or failed with an exception. Settling a future twice is a usage
    error and raises ``AlreadySettledError``.
    """

    _state = FutureState.pending
    _value = None
    _error = None

    def __init__(self, name=None):
        self.name = name
        events.state_changed.fire(self, Transition.initialized)

    @property
    def state(self):
        return self._state

    @property
    def value(self):
        """Value the future was resolved with.

        Raises:
            InvalidStateError: if the future is not resolved.
        """
        if self._state != FutureState.resolved:
            raise InvalidStateError('Value is not ready.')
        return self._value

    @property
    def error(self):
        """Exception the future failed with, or None."""
        return self._error

    def is_pending(self):
        return self._state == FutureState.pending

    def is_resolved(self):
        return self._state == FutureState.resolved

    def is_failed(self):
        return self._state == FutureState.failed

    def is_settled(self):
        return self._state != FutureState.pending

    def resolve(self, value=None):
        """Mark the future resolved and run its handlers.

        Raises:
            AlreadySettledError: if the future was already resolved or failed.
        """
        self._ensure_pending('resolve')
        self._set_result(FutureState.resolved, value, None)

    def try_resolve(self, value=None):
        """Attempts to mark the future resolved.

        Returns False if the future was already settled.
        """
        if self._state != FutureState.pending:
            return False
        self._set_result(FutureState.resolved, value, None)
        return True

    def fail(self, exception):
        """Mark the future failed and run matching catch handlers.

        Raises:
            AlreadySettledError: if the future was already resolved or failed.
        """
        assert isinstance(exception, Exception), "Future.fail expects Exception instance"
        self._ensure_pending('fail')
        self._set_result(FutureState.failed, None, exception)

    def try_fail(self, exception):
        """Attempts to mark the future failed.

        Returns False if the future was already settled.
        """
        assert isinstance(exception, Exception), "Future.try_fail expects Exception instance"
        if self._state != FutureState.pending:
            return False
        self._set_result(FutureState.failed, None, exception)
        return True

    def complete(self, fun, *args, **kwargs):
        """Settles the future from the outcome of calling ``fun``.

        The future is resolved with the returned value, or failed with the
        exception ``fun`` raises.
        """
        try:
            value = fun(*args, **kwargs)
        except Exception as ex:
            self.fail(ex)
        else:
            self.resolve(value)

    def try_complete(self, fun, *args, **kwargs):
        if self._state != FutureState.pending:
            return False
        self.complete(fun, *args, **kwargs)
        return True

    def _ensure_pending(self, action):
        if self._state == FutureState.resolved:
            raise AlreadySettledError(
                "Can't {} {!r}; future has already resolved".format(action, self))
        if self._state == FutureState.failed:
            raise AlreadySettledError(
                "Can't {} {!r}; future has already failed".format(action, self))

    def _set_result(self, state, value, error):
        self._state = state
        self._value = value
        self._error = error
        logger.debug('%r settled', self)

        before, after = _TRANSITIONS[state]
        events.state_changed.fire(self, before)
        self._on_result_set()
        events.state_changed.fire(self, after)

    #virtual
    def _on_result_set(self):
        pass

    #virtual
    def _pending_callbacks(self):
        return 0

    def __repr__(self):
        res = self.__class__.__name__
        if self.name is not None:
            res += '({!r})'.format(self.name)
        if self._state == FutureState.resolved:
            res += '<result={!r}>'.format(self._value)
        elif self._state == FutureState.failed:
            res += '<exception={!r}>'.format(self._error)
        else:
            size = self._pending_callbacks()
            if size:
                res += '<{}, {} callback(s)>'.format(self._state, size)
            else:
                res += '<{}>'.format(self._state)
        return res
