#  ___              _         _ _
# | _ \__ _ ______ | |__  ___| | |_
# |  _/ _` (_-<_-< | '_ \/ _ \ |  _|
# |_| \__,_/__/__/ |_.__/\___/_|\__|
#
# Passbolt Commander
#

import threading
import time
from typing import Optional

from .error import OperationCancelledError, DeadlineExceededError


class OperationContext:
    """Deadline and cancellation signal shared by all remote calls of one operation.

    A context is created per command invocation. Any thread may call cancel();
    the operation notices it before its next remote call.
    """

    def __init__(self, timeout=None):    # type: (Optional[float]) -> None
        self.deadline = time.monotonic() + timeout if timeout else None    # type: Optional[float]
        self._cancelled = threading.Event()

    def cancel(self):
        self._cancelled.set()

    @property
    def cancelled(self):    # type: () -> bool
        return self._cancelled.is_set()

    def remaining(self):    # type: () -> Optional[float]
        if self.deadline is None:
            return None
        return max(self.deadline - time.monotonic(), 0.0)

    def check(self):
        if self._cancelled.is_set():
            raise OperationCancelledError()
        if self.deadline is not None and time.monotonic() >= self.deadline:
            raise DeadlineExceededError()

    def request_timeout(self, default=None):    # type: (Optional[float]) -> Optional[float]
        """Timeout for the next HTTP request: the configured one, capped by the deadline"""
        remaining = self.remaining()
        if remaining is None:
            return default
        if default is None:
            return remaining
        return min(default, remaining)
