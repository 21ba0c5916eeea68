import traceback
import logging

from . import events

logger = logging.getLogger(__package__)


def log_error_handler(future, tb):
    logger.error('Unobserved failure of %r:\n%s', future, ''.join(tb))


class Default(object):
    # Called by on_uncaught_exception with the future and formatted traceback
    UNCAUGHT_EXCEPTION_CALLBACK = staticmethod(log_error_handler)

    # Reject progress values outside of [0, 1]
    VALIDATE_PROGRESS = True

    @staticmethod
    def on_uncaught_exception(future, exc):
        tb = traceback.format_exception(exc.__class__, exc,
                                        exc.__traceback__)
        Default.UNCAUGHT_EXCEPTION_CALLBACK(future, tb)


def log_uncaught_exceptions():
    """Routes failures reported by ``Future.done()`` to the logger instead
    of raising them.

    Returns:
        Subscription that detaches the logging handler.
    """
    return events.uncaught_exception.subscribe(Default.on_uncaught_exception)
