"""Cancellable timer handles for delayed resolution."""

import logging
import threading
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    """Handle for a scheduled callback."""

    def start(self) -> None: ...

    def cancel(self) -> None: ...


# (delay_seconds, callback) -> handle
TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


class ResolutionTimer:
    """One-shot callback after a delay, backed by threading.Timer."""

    def __init__(self, delay: float, callback: Callable[[], None]):
        """Initialize timer.

        Args:
            delay: Seconds to wait (must be positive)
            callback: Called once on expiry unless cancelled
        """
        if delay <= 0:
            raise ValueError(f"delay must be positive, got {delay}")
        self.delay = delay
        self._callback = callback
        self._timer: threading.Timer | None = None
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def start(self) -> None:
        """Start counting down."""
        if self._timer is not None:
            raise RuntimeError("Timer already started")
        self._timer = threading.Timer(self.delay, self._fire)
        self._timer.daemon = True
        self._timer.start()

    def cancel(self) -> None:
        """Stop the timer; the callback will not run."""
        self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()

    def _fire(self) -> None:
        if self._cancelled:
            return
        try:
            self._callback()
        except Exception:
            logger.exception("Resolution callback failed")
