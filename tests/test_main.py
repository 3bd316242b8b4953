import io
import logging

import pytest

from logger import HumanFormatter, setup_logging
from main import parse_args


def test_defaults():
    args = parse_args([])

    assert args.hand is False
    assert args.seed is None
    assert args.fps == 60
    assert args.log_level == "info"


def test_options():
    args = parse_args(["--hand", "--debug-hand", "--seed", "7", "--fps", "30", "--log-level", "debug"])

    assert args.hand and args.debug_hand
    assert args.seed == 7
    assert args.fps == 30
    assert args.log_level == "debug"


def test_rejects_non_positive_fps():
    with pytest.raises(SystemExit):
        parse_args(["--fps", "0"])


@pytest.fixture
def restore_rocket_logger():
    yield
    root = logging.getLogger("rocket")
    root.handlers.clear()
    root.propagate = True
    root.setLevel(logging.NOTSET)


def test_setup_logging_writes_compact_lines(restore_rocket_logger):
    stream = io.StringIO()
    root = setup_logging("debug", stream=stream)

    logging.getLogger("rocket.session").info("Phase %s -> %s", "idle", "playing")

    assert root.level == logging.DEBUG
    line = stream.getvalue().strip()
    assert line.endswith("[I] session: Phase idle -> playing")
    assert "\033[" not in line


def test_formatter_colors_when_asked():
    record = logging.LogRecord("rocket.game", logging.WARNING, __file__, 1, "careful", None, None)

    assert HumanFormatter(color=True).format(record).startswith(HumanFormatter.COLORS["WARNING"])
