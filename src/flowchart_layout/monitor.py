"""
Cooperative cancellation and progress reporting.

A TaskMonitor is owned by the host and shared with one layout computation.
Long loops call check_cancelled(), which raises LayoutCancelledError once
cancel() has been requested.
"""

from __future__ import annotations

from .validation import LayoutCancelledError


class TaskMonitor:
    """
    Cancellation signal with progress bookkeeping.

    Example:
        monitor = TaskMonitor()
        layout = ControlFlowLayout(vertices=..., edges=..., monitor=monitor)
        # from a UI callback:
        monitor.cancel()
    """

    def __init__(self) -> None:
        self._cancelled: bool = False
        self._progress: int = 0
        self._maximum: int = 0
        self._message: str = ""

    @property
    def is_cancelled(self) -> bool:
        """True once cancel() has been called."""
        return self._cancelled

    @property
    def progress(self) -> int:
        """Units of work completed since the last initialize()."""
        return self._progress

    @property
    def maximum(self) -> int:
        """Total units of work announced by initialize()."""
        return self._maximum

    @property
    def message(self) -> str:
        """Description of the current phase."""
        return self._message

    def cancel(self) -> None:
        """Request cancellation of the running computation."""
        self._cancelled = True

    def clear_cancelled(self) -> None:
        """Reset the cancellation flag so the monitor can be reused."""
        self._cancelled = False

    def check_cancelled(self) -> None:
        """
        Abort if cancellation was requested.

        Raises:
            LayoutCancelledError: If cancel() has been called
        """
        if self._cancelled:
            raise LayoutCancelledError(
                f"layout cancelled during {self._message}" if self._message else "layout cancelled"
            )

    def initialize(self, maximum: int) -> None:
        """Start a new unit of work with the given size."""
        self._maximum = max(0, int(maximum))
        self._progress = 0

    def increment_progress(self, amount: int = 1) -> None:
        self._progress = min(self._maximum, self._progress + amount)

    def set_message(self, message: str) -> None:
        self._message = message


__all__ = ["TaskMonitor"]
