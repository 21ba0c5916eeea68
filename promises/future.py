from .future_callbacks import FutureCallbacks
from .future_extensions import FutureExtensions


class Future(FutureExtensions, FutureCallbacks):
    """Future settled synchronously by the owner of the work it represents."""
