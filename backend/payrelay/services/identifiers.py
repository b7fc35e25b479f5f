"""
Transaction Identifier Service — MSH-<epoch millis> references for the gateway.
"""
import threading
import time
from typing import Callable, Optional


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class TransactionIdGenerator:
    """Issues ``prefix + epoch_millis`` identifiers, monotonic within the process.

    Two calls landing on the same millisecond would otherwise produce the same
    value, so a call that does not see the clock move past the last issued
    value takes ``last + 1`` instead. Uniqueness across processes still relies
    on the ``payments.transaction_id`` unique constraint.
    """

    def __init__(self, prefix: str = "MSH-", clock: Optional[Callable[[], int]] = None):
        self.prefix = prefix
        self._clock = clock or _epoch_millis
        self._last = 0
        self._lock = threading.Lock()

    def generate(self) -> str:
        with self._lock:
            millis = max(self._clock(), self._last + 1)
            self._last = millis
        return f"{self.prefix}{millis}"
