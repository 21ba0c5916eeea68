class Error(Exception):
    """Base class for all future-related exceptions."""
    pass


class CancelledError(Error):
    """The operation owning the future honored a cancellation request."""
    pass


class InvalidStateError(Error):
    """The operation is not allowed in this state."""
    pass


class AlreadySettledError(InvalidStateError):
    """Future was resolved or failed more than once."""
    pass


class ProgressStateError(InvalidStateError):
    """Progress was reported for a future that is no longer pending."""
    pass
