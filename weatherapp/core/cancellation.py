from __future__ import annotations

import threading

from .errors import OperationCancelled


class CancellationToken:
    """Flag shared between the screen and its in-flight operations."""

    def __init__(self) -> None:
        self._event = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelled("screen torn down")


__all__ = ["CancellationToken"]
