from .future_core import FutureCore, FutureState
from .exceptions import ProgressStateError
from .events import EventHook, Subscription
from .config import Default
from . import events
import logging

logger = logging.getLogger(__name__)


class FutureCallbacks(FutureCore):
    """Implements Future handler registration and dispatch.

    Handlers run synchronously on the thread that settles the future, in
    registration order: resolve or catch handlers first, then finally
    handlers. All handler lists are released once the future settles, so
    closures registered on a settled future are never retained.
    """

    def __init__(self, name=None):
        self._resolve_clb = []
        # (exception type, callback, is done() sentinel)
        self._catch_clb = []
        self._finally_clb = []
        self._progress_clb = []
        self._cancel_requested = EventHook('cancel_requested')
        self._progress = 0.0
        self._failure_handled = False
        FutureCore.__init__(self, name)

    def then(self, fun_res):
        """Add a callback to be run with the value when the future resolves.

        If the future is already resolved the callback runs immediately. If
        it has failed the callback is never run.

        Returns:
            This future, to allow further registrations.
        """
        assert callable(fun_res), "Future.then expects callable"
        if self._state == FutureState.resolved:
            fun_res(self._value)
        elif self._state == FutureState.pending:
            self._resolve_clb.append(fun_res)
        return self

    def catch(self, fun_ex, exc_type=Exception):
        """Add a callback to be run when the future fails with an exception
        that is an instance of ``exc_type``.

        Every matching catch handler runs, not just the first one. If the
        future has already failed with a matching exception the callback
        runs immediately.

        Args:
            fun_ex: function that accepts the exception.
            exc_type: exception class or tuple of classes to handle.

        Returns:
            This future, to allow further registrations.
        """
        assert callable(fun_ex), "Future.catch expects callable"
        if self._state == FutureState.pending:
            self._catch_clb.append((exc_type, fun_ex, False))
        elif self._state == FutureState.failed:
            if isinstance(self._error, exc_type):
                self._failure_handled = True
                fun_ex(self._error)
        return self

    def finally_(self, fun):
        """Add a callback with no arguments to be run once the future
        settles either way, after resolve and catch handlers.

        Returns:
            This future, to allow further registrations.
        """
        assert callable(fun), "Future.finally_ expects callable"
        if self._state == FutureState.pending:
            self._finally_clb.append(fun)
        else:
            fun()
        return self

    def done(self, fun_res=None):
        """Marks the future as terminally observed.

        If the future fails and no other catch handler matches the
        exception, the failure is passed to ``uncaught_exception`` hook
        subscribers, or re-raised from the ``fail()`` call when there are
        none.

        Args:
            fun_res: optional callback registered with ``then()`` first.
        """
        if fun_res is not None:
            self.then(fun_res)

        if self._state == FutureState.pending:
            self._catch_clb.append((Exception, self._report_unobserved, True))
        elif self._state == FutureState.failed:
            self._report_unobserved(self._error)

    def progress(self, fun):
        """Add a callback to be run with each progress update.

        Returns:
            This future, to allow further registrations.
        """
        assert callable(fun), "Future.progress expects callable"
        if self._state == FutureState.pending:
            self._progress_clb.append(fun)
        return self

    def set_progress(self, value):
        """Stores progress value and notifies progress handlers.

        Raises:
            ProgressStateError: if the future is already settled.
            ValueError: if value is outside of [0, 1] and
            ``Default.VALIDATE_PROGRESS`` is set.
        """
        if self._state != FutureState.pending:
            raise ProgressStateError(
                "Failed to set progress, invalid future state {}".format(self._state))
        if Default.VALIDATE_PROGRESS and not 0.0 <= value <= 1.0:
            raise ValueError("Progress must be within [0, 1], got {!r}".format(value))

        self._progress = value
        for fun in list(self._progress_clb):
            # a handler may settle the future
            if self._state != FutureState.pending:
                break
            fun(value)

    def get_progress(self):
        return self._progress

    def on_cancel_requested(self, fun):
        """Add an observer called with this future when cancellation is
        requested.

        Returns:
            Subscription that detaches the observer. Observers registered on
            a settled future are never called.
        """
        if self._state != FutureState.pending:
            return Subscription(None, fun)
        return self._cancel_requested.subscribe(fun)

    def request_cancel(self):
        """Notifies cancellation observers if the future is still pending.

        Cancellation is advisory: the future stays pending until its owner
        resolves or fails it.
        """
        if self._state == FutureState.pending:
            logger.debug('Cancellation requested for %r', self)
            self._cancel_requested.fire(self)

    #override
    def _on_result_set(self):
        try:
            if self._state == FutureState.resolved:
                for clb in self._resolve_clb:
                    clb(self._value)
            else:
                self._dispatch_failure(self._error)

            for clb in self._finally_clb:
                clb()
        finally:
            self._clear_handlers()

    def _dispatch_failure(self, exception):
        handlers = [(clb, sentinel) for exc_type, clb, sentinel in self._catch_clb
                    if isinstance(exception, exc_type)]

        if any(not sentinel for _, sentinel in handlers):
            self._failure_handled = True

        for clb, _ in handlers:
            clb(exception)

    def _report_unobserved(self, exception):
        if self._failure_handled:
            return
        self._failure_handled = True

        if events.uncaught_exception:
            logger.debug('Routing unobserved failure of %r to uncaught exception hook', self)
            events.uncaught_exception.fire(self, exception)
        else:
            logger.debug('Re-raising unobserved failure of %r', self)
            raise exception

    def _clear_handlers(self):
        self._resolve_clb = []
        self._catch_clb = []
        self._finally_clb = []
        self._progress_clb = []
        self._cancel_requested.clear()

    def _pending_callbacks(self):
        return (len(self._resolve_clb) + len(self._catch_clb) +
                len(self._finally_clb) + len(self._progress_clb))
