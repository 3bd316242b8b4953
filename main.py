"""Entry point for Flappy Space Rocket."""

from __future__ import annotations

import argparse
from typing import List, Optional

from game import FPS, RocketGame
from logger import setup_logging

LOG_LEVELS = ("debug", "info", "warning", "error")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Steer a rocket through space, one thrust at a time.")
    parser.add_argument(
        "--hand",
        action="store_true",
        help="Also fire the thruster by raising your hand in front of the webcam.",
    )
    parser.add_argument(
        "--debug-hand",
        action="store_true",
        help="Show a debug window with the MediaPipe hand landmarks.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed the obstacle gaps and the starfield for a reproducible run.",
    )
    parser.add_argument("--fps", type=int, default=FPS, help="Frame rate (default: %(default)s).")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="info")
    args = parser.parse_args(argv)
    if args.fps <= 0:
        parser.error("--fps must be positive")
    return args


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging(args.log_level)
    game = RocketGame(
        enable_hand_control=args.hand,
        debug_hand=args.debug_hand,
        seed=args.seed,
        fps=args.fps,
    )
    game.run()


if __name__ == "__main__":
    main()
