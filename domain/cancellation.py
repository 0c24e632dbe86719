"""Cancellation and deadline signal threaded through ingestion and queries."""
from __future__ import annotations

import threading
import time

from domain.errors import OperationCancelledError


class CancellationToken:
    """Thread-safe cancellation flag with an optional deadline.

    A token is shared between the caller and the operation. The caller may call
    :meth:`cancel` at any time; the operation checks the token at its blocking
    boundaries (embedding calls, scanned records, batch items).
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    @classmethod
    def with_timeout(cls, seconds: float) -> "CancellationToken":
        return cls(timeout=seconds)

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or ``None`` without a deadline."""
        if self._deadline is None:
            return None
        return max(self._deadline - time.monotonic(), 0.0)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelledError("Operation was cancelled.")
        if self._deadline is not None and time.monotonic() >= self._deadline:
            raise OperationCancelledError("Operation deadline exceeded.")


def check(token: CancellationToken | None) -> None:
    if token is not None:
        token.raise_if_cancelled()


def remaining(token: CancellationToken | None) -> float | None:
    return token.remaining() if token is not None else None


__all__ = ["CancellationToken", "check", "remaining"]
