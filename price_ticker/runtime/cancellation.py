"""Process-lifetime cancellation flag shared by all concurrent actors."""

import threading
from typing import Optional


class CancellationToken:
    """
    Monotone stop flag with a wakeup for sleeping waiters.

    The flag only ever goes from False to True. Writes are plain attribute
    assignments, which are atomic in CPython, so readers never see a torn
    value and need no lock.
    """

    def __init__(self) -> None:
        self._requested = False
        self._wakeup = threading.Event()

    def request(self) -> None:
        """Request cancellation and wake any waiter. Idempotent, thread-safe."""
        self._requested = True
        self._wakeup.set()

    def request_from_signal(self) -> None:
        """
        Request cancellation from inside a signal handler.

        Only the flag is written: Event.set() takes a lock the interrupted
        main thread may already hold. Waiters notice within one tick.
        """
        self._requested = True

    def is_requested(self) -> bool:
        return self._requested

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until a request() wakeup or until timeout seconds elapsed.

        Returns:
            The flag value after waiting
        """
        if self._requested:
            return True
        self._wakeup.wait(timeout)
        return self._requested

    def __repr__(self) -> str:
        return f"CancellationToken(requested={self._requested})"
