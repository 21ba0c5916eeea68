"""Single-threaded futures with continuations, typed catch handlers,
progress reporting and cooperative cancellation."""

from .exceptions import (Error, CancelledError, InvalidStateError,
                         AlreadySettledError, ProgressStateError)
from .events import (EventHook, Subscription, Transition,
                     state_changed, uncaught_exception)
from .config import Default, log_uncaught_exceptions
from .future_core import FutureCore, FutureState
from .future import Future
from .promise import Promise
from .cancellable import Cancellable
