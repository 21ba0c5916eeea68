from .exceptions import CancelledError


class Cancellable(object):
    """Flag latched once cancellation was requested.

    Lets the owner of some work poll for cancellation from its own loop
    instead of reacting to the request inside a callback.
    """

    def __init__(self, initial=False):
        self._cancelled = initial

    @classmethod
    def from_future(cls, future):
        """Returns flag latched by ``future.request_cancel()``."""
        c = cls()
        future.on_cancel_requested(lambda _: c.cancel())
        return c

    @property
    def is_cancelled(self):
        return self._cancelled

    def cancel(self):
        self._cancelled = True

    def raise_if_cancelled(self):
        if self._cancelled:
            raise CancelledError("Cancellation was requested")
