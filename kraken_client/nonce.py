"""Per-client nonce allocation."""
import threading
import time
from typing import Callable, Optional


def _now_microseconds() -> int:
    return time.time_ns() // 1000


class NonceCounter:
    """Issue strictly increasing nonces derived from wall-clock time.

    Each value is ``max(now_in_microseconds, last + 1)``, so the first nonce
    is time-derived and later ones keep increasing even when calls land in
    the same microsecond or the clock steps backwards. Allocation is guarded
    by a lock and is safe to share across threads and asyncio tasks.
    """

    def __init__(self, clock: Callable[[], int] = _now_microseconds):
        self._clock = clock
        self._lock = threading.Lock()
        self._last: Optional[int] = None

    @property
    def last(self) -> Optional[int]:
        """The last nonce issued, or ``None`` if none has been issued."""
        return self._last

    def next(self) -> int:
        with self._lock:
            candidate = self._clock()
            if self._last is not None and candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return candidate
