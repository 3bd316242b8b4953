"""Turn a stream of hand heights into discrete thrust events.

Heights are normalized image coordinates, so *smaller* values are higher up.
A thrust fires when the hand has risen far enough, or fast enough, within a
short window, and not more often than the cooldown allows.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Optional, Tuple


class RiseDetector:
    """Detect quick upward hand motions.

    Parameters
    ----------
    history_length:
        Maximum number of samples kept for the decision.
    rise_threshold:
        Minimum upward travel (normalized units) between any kept sample and
        the newest one.
    velocity_threshold:
        Minimum upward speed (normalized units / second) between two
        consecutive samples. Catches short flicks.
    analysis_window:
        Samples older than this many seconds, relative to the newest one, are
        ignored.
    cooldown_s:
        Minimum time between two thrusts.
    """

    def __init__(
        self,
        *,
        history_length: int = 6,
        rise_threshold: float = 0.03,
        velocity_threshold: float = 0.75,
        analysis_window: float = 0.6,
        cooldown_s: float = 0.25,
    ) -> None:
        if history_length < 2:
            raise ValueError("history_length must be at least 2")
        self.rise_threshold = rise_threshold
        self.velocity_threshold = velocity_threshold
        self.analysis_window = analysis_window
        self.cooldown_s = cooldown_s
        self._samples: Deque[Tuple[float, float]] = deque(maxlen=history_length)
        self._last_thrust: Optional[float] = None

    def __len__(self) -> int:
        return len(self._samples)

    def clear(self) -> None:
        """Forget the history, e.g. when the hand leaves the frame."""

        self._samples.clear()

    def add_sample(self, height: float, timestamp: float) -> bool:
        """Record a sample and return ``True`` if it completes a thrust."""

        self._samples.append((timestamp, height))
        while len(self._samples) > 1 and timestamp - self._samples[0][0] > self.analysis_window:
            self._samples.popleft()
        if len(self._samples) < 2:
            return False

        if not self._rising(height):
            return False
        if self._last_thrust is not None and timestamp - self._last_thrust < self.cooldown_s:
            return False
        self._last_thrust = timestamp
        return True

    def _rising(self, newest: float) -> bool:
        samples = list(self._samples)
        max_rise = max(height - newest for _, height in samples[:-1])
        if max_rise > self.rise_threshold:
            return True

        for (t0, h0), (t1, h1) in zip(samples, samples[1:]):
            dt = t1 - t0
            if dt > 0 and (h0 - h1) / dt > self.velocity_threshold:
                return True
        return False


__all__ = ["RiseDetector"]
