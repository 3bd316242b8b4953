"""Frame-paced scheduling of the game tick."""

from __future__ import annotations

import logging
from typing import Callable, Optional

logger = logging.getLogger("rocket.scheduler")


class FrameScheduler:
    """Holds at most one recurring callback, run once per display frame.

    The render loop calls :meth:`run_pending` every frame. Nothing happens
    unless a callback has been scheduled, and cancelling takes effect before
    the next frame.
    """

    def __init__(self) -> None:
        self._callback: Optional[Callable[[], None]] = None
        self.frames_run = 0

    @property
    def scheduled(self) -> bool:
        return self._callback is not None

    def schedule(self, callback: Callable[[], None]) -> None:
        if self._callback is not None:
            logger.debug("Replacing scheduled tick callback")
        self._callback = callback

    def cancel(self) -> None:
        if self._callback is not None:
            logger.debug("Tick cancelled after %d frames", self.frames_run)
        self._callback = None

    def run_pending(self) -> bool:
        """Run the scheduled callback once. Returns ``True`` if it ran."""

        callback = self._callback
        if callback is None:
            return False
        callback()
        self.frames_run += 1
        return True


__all__ = ["FrameScheduler"]
