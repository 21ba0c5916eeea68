from .future import Future
from .cancellable import Cancellable


class Promise(object):
    """Promise is the write side of a future: an object the owner of some
    work resolves with a value or fails with an exception.
    """

    def __init__(self, name=None):
        """Initializes new Promise instance.

        Args:
            name: optional diagnostic name of associated future.
        """
        self._future = Future(name=name)
        self._cancellable = Cancellable.from_future(self._future)

    def resolve(self, value=None):
        """Resolves associated future with provided value.

        Raises:
            AlreadySettledError: If future was already settled.
        """
        self._future.resolve(value)

    def try_resolve(self, value=None):
        """Resolves associated future with provided value.

        Returns:
            True if future value was set and False if it was already set before.
        """
        return self._future.try_resolve(value)

    def fail(self, exception):
        """Fails associated future with provided exception.

        Raises:
            AlreadySettledError: If future was already settled.
        """
        self._future.fail(exception)

    def try_fail(self, exception):
        """Fails associated future with provided exception.

        Returns:
            True if future was failed and False if it was already settled before.
        """
        return self._future.try_fail(exception)

    def complete(self, fun, *vargs, **kwargs):
        """Executes provided function and resolves future with its result, or
        fails it if function raises.

        Raises:
            AlreadySettledError: If future was already settled.
        """
        self._future.complete(fun, *vargs, **kwargs)

    def try_complete(self, fun, *vargs, **kwargs):
        """Executes provided function to settle future if it is still pending.

        Returns:
            True if function was executed and False if future was already settled.
        """
        return self._future.try_complete(fun, *vargs, **kwargs)

    def set_progress(self, value):
        self._future.set_progress(value)

    @property
    def is_completed(self):
        """Returns True if the future is resolved or failed."""
        return self._future.is_settled()

    @property
    def is_cancel_requested(self):
        """Returns True if cancellation of the future was requested by client."""
        return self._cancellable.is_cancelled

    @property
    def future(self):
        """Returns associated future instance."""
        return self._future
