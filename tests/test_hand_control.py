import sys
import types
from types import SimpleNamespace

import pytest

from engine import JUMP_FORCE, Phase


class FakeDetector:
    def __init__(self, debug=False):
        self.debug = debug
        self.pending = [True]
        self.stopped = False

    def poll_thrust(self):
        return self.pending.pop() if self.pending else False

    def stop(self):
        self.stopped = True


class BrokenDetector:
    def __init__(self, debug=False):
        raise RuntimeError("Unable to open webcam 0")


@pytest.fixture
def fake_hand_module(monkeypatch):
    module = types.ModuleType("hand_control")
    monkeypatch.setitem(sys.modules, "hand_control", module)
    return module


def test_hand_thrust_fires_rocket(fake_hand_module):
    from game import RocketGame

    fake_hand_module.HandThrustDetector = FakeDetector
    game = RocketGame(enable_hand_control=True, seed=1)
    detector = game.detector
    try:
        game.session.start()
        game.process_input()
        assert game.state.bird.velocity == JUMP_FORCE
    finally:
        game._shutdown()
    assert detector.stopped


def test_hand_control_failure_falls_back_to_keyboard(fake_hand_module, caplog):
    from game import RocketGame

    fake_hand_module.HandThrustDetector = BrokenDetector
    with caplog.at_level("WARNING"):
        game = RocketGame(enable_hand_control=True)
    try:
        assert game.detector is None
        assert game.state.phase is Phase.IDLE
    finally:
        game._shutdown()
    assert "Hand control disabled" in caplog.text


def test_palm_height_averages_landmarks():
    pytest.importorskip("cv2")
    pytest.importorskip("mediapipe")
    from hand_control import PALM_LANDMARKS, palm_height

    landmarks = [SimpleNamespace(y=0.0) for _ in range(21)]
    for i, mark in enumerate(PALM_LANDMARKS):
        landmarks[mark.value] = SimpleNamespace(y=0.1 * (i + 1))

    assert palm_height(landmarks) == pytest.approx(0.3)


class FakeThread:
    def __init__(self, alive):
        self.alive = alive

    def join(self, timeout=None):
        pass

    def is_alive(self):
        return self.alive


class FakeResource:
    def __init__(self):
        self.released = 0

    def release(self):
        self.released += 1

    close = release


def stoppable_detector(alive):
    pytest.importorskip("cv2")
    pytest.importorskip("mediapipe")
    from hand_control import HandThrustDetector

    detector = object.__new__(HandThrustDetector)
    detector.debug = False
    detector._running = True
    detector._closed = False
    detector._thread = FakeThread(alive)
    detector._capture = FakeResource()
    detector._hands = FakeResource()
    return detector


def test_stop_leaves_cleanup_to_busy_reader():
    detector = stoppable_detector(alive=True)

    detector.stop()

    assert detector._running is False
    assert detector._capture.released == 0
    assert detector._hands.released == 0


def test_stop_releases_once_reader_exited():
    detector = stoppable_detector(alive=False)

    detector.stop()
    detector.stop()

    assert detector._capture.released == 1
    assert detector._hands.released == 1
