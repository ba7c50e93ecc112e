"""Per-call cancellation and deadline signal."""

import threading
import time
from typing import Callable

from .models import TransportError


class RequestContext:
    """
    Cancellation handle and optional deadline for one or more calls.

    A context may be shared between threads: ``cancel()`` can be called from
    any thread while a call using the context is in flight, and the call
    gives up on the exchange at once.
    """

    def __init__(self, timeout: float | None = None):
        """
        Args:
            timeout: Seconds from now after which calls give up
        """
        self.deadline = time.monotonic() + timeout if timeout is not None else None
        self._cancelled = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: list[Callable[[], None]] = []

    def cancel(self) -> None:
        """Cancel every call using this context and run the cancel callbacks."""
        with self._lock:
            if self._cancelled.is_set():
                return
            self._cancelled.set()
            callbacks = list(self._callbacks)
            self._callbacks.clear()

        for callback in callbacks:
            callback()

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """
        Register a callback to run when the context is cancelled.

        Runs the callback right away if the context is already cancelled.

        Returns:
            A function that unregisters the callback
        """
        with self._lock:
            if not self._cancelled.is_set():
                self._callbacks.append(callback)
                return lambda: self._remove_callback(callback)

        callback()
        return lambda: None

    def _remove_callback(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None without one."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def check(self) -> None:
        """
        Raises:
            TransportError: If the context was cancelled or its deadline passed
        """
        if self.cancelled:
            raise TransportError("Request cancelled")
        if self.expired:
            raise TransportError("Request deadline exceeded")
