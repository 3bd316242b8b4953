"""Webcam input source: fire the rocket's thruster with a raised hand.

Frames are read and run through MediaPipe Hands on a daemon thread. The
average height of a few palm landmarks feeds a :class:`gesture.RiseDetector`;
the main loop collects detected thrusts with :meth:`HandThrustDetector.poll_thrust`.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Optional

import cv2

try:  # Newer MediaPipe releases expose solutions at the top level.
    from mediapipe import solutions as mp_solutions
except ImportError:  # pragma: no cover - depends on mediapipe installation layout.
    from mediapipe.python import solutions as mp_solutions  # type: ignore[attr-defined]

from gesture import RiseDetector

logger = logging.getLogger("rocket.hand_control")

mp_hands = mp_solutions.hands
HandLandmark = mp_hands.HandLandmark

PALM_LANDMARKS = (
    HandLandmark.WRIST,
    HandLandmark.INDEX_FINGER_MCP,
    HandLandmark.MIDDLE_FINGER_MCP,
    HandLandmark.RING_FINGER_MCP,
    HandLandmark.PINKY_MCP,
)
DEBUG_WINDOW = "Rocket Hand Debug"


def palm_height(landmarks: Any) -> float:
    """Mean normalized ``y`` of the palm landmarks; robust to a hidden wrist."""

    return sum(landmarks[mark.value].y for mark in PALM_LANDMARKS) / len(PALM_LANDMARKS)


class HandThrustDetector:
    """Background webcam reader producing thrust events.

    Raises ``RuntimeError`` if the camera cannot be opened.
    """

    def __init__(
        self,
        *,
        camera_index: int = 0,
        detector: Optional[RiseDetector] = None,
        debug: bool = False,
    ) -> None:
        self.camera_index = camera_index
        self.detector = detector if detector is not None else RiseDetector()
        self.debug = debug

        self._capture = cv2.VideoCapture(camera_index)
        if not self._capture.isOpened():
            raise RuntimeError(f"Unable to open webcam {camera_index}")
        self._capture.set(cv2.CAP_PROP_FRAME_WIDTH, 640)
        self._capture.set(cv2.CAP_PROP_FRAME_HEIGHT, 480)
        self._capture.set(cv2.CAP_PROP_FPS, 30)

        self._hands = mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=1,
            model_complexity=0,
            min_detection_confidence=0.2,
            min_tracking_confidence=0.2,
        )

        self._lock = threading.Lock()
        self._pending = False
        self._running = True
        self._closed = False
        self._thread = threading.Thread(target=self._read_loop, name="hand-control", daemon=True)
        self._thread.start()
        logger.info("Hand control started on camera %d", camera_index)

    def _read_loop(self) -> None:
        while self._running:
            ok, frame = self._capture.read()
            if not ok:
                time.sleep(0.05)
                continue

            result = self._hands.process(cv2.cvtColor(frame, cv2.COLOR_BGR2RGB))
            if result.multi_hand_landmarks:
                hand = result.multi_hand_landmarks[0]
                if self.detector.add_sample(palm_height(hand.landmark), time.time()):
                    with self._lock:
                        self._pending = True
                if self.debug:
                    mp_solutions.drawing_utils.draw_landmarks(
                        frame, hand, mp_hands.HAND_CONNECTIONS
                    )
            else:
                self.detector.clear()

            if self.debug:
                cv2.imshow(DEBUG_WINDOW, frame)
                if cv2.waitKey(1) & 0xFF == 27:
                    self.debug = False
                    cv2.destroyWindow(DEBUG_WINDOW)

        self._release()

    def poll_thrust(self) -> bool:
        """Return ``True`` once per thrust detected since the last call."""

        with self._lock:
            detected, self._pending = self._pending, False
        return detected

    def stop(self) -> None:
        self._running = False
        self._thread.join(timeout=1.0)
        if self._thread.is_alive():
            # The reader releases the camera itself once its current frame is done.
            logger.warning("Hand control reader still busy; leaving cleanup to it")
            return
        self._release()

    def __enter__(self) -> "HandThrustDetector":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def _release(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._capture.release()
        self._hands.close()
        if self.debug:
            cv2.destroyAllWindows()
        logger.info("Hand control stopped")


__all__ = ["HandThrustDetector", "palm_height"]
