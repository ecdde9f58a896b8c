from __future__ import annotations

import argparse
import logging
from typing import Optional

from gomoku.ai.config import AI_LEVELS, DEFAULT_LEVEL
from gomoku.app.controller_pvc import PvCController, PvCConfig
from gomoku.app.controller_pvp import PvPController, PvPConfig
from gomoku.core.board import Player


def setup_logging(level: str, log_file: Optional[str]) -> None:
    """
    Log to a file when given; otherwise only warnings reach stderr so the
    redrawn board is not interleaved with engine chatter.
    """
    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    if log_file:
        logging.basicConfig(filename=log_file, level=level.upper(), format=fmt)
    else:
        logging.basicConfig(level=logging.WARNING, format=fmt)


def run_pvc(lvl: int, color: str, size: int, tick: float) -> None:
    cfg = PvCConfig(
        lvl=lvl,
        board_size=size,
        tick_sec=tick,
        human_color=Player.BLACK if color == "black" else Player.WHITE,
    )
    ctrl = PvCController(config=cfg)
    ctrl.run()


def run_pvp(size: int, tick: float) -> None:
    ctrl = PvPController(config=PvPConfig(board_size=size, tick_sec=tick))
    ctrl.run()


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Five-in-a-row in the terminal.")
    ap.add_argument("--size", type=int, default=15, help="Board size (default: 15)")
    ap.add_argument("--tick", type=float, default=0.2, help="Input polling interval in seconds")
    ap.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Log level used with --log-file",
    )
    ap.add_argument("--log-file", default=None, help="Write logs to this file")
    sub = ap.add_subparsers(dest="mode", required=True)

    ap_pvc = sub.add_parser("pvc", help="Play against the computer")
    ap_pvc.add_argument(
        "--lvl",
        type=int,
        default=DEFAULT_LEVEL,
        choices=sorted(AI_LEVELS),
        help=(
            f"Computer strength (default: {DEFAULT_LEVEL}, full search). "
            "Levels 1-4 cap the candidate list and 3-4 also stop after a few seconds"
        ),
    )
    ap_pvc.add_argument(
        "--color",
        default="black",
        choices=["black", "white"],
        help="Your stone color (black moves first)",
    )

    sub.add_parser("pvp", help="Two players on one terminal")

    return ap


def main():
    args = build_parser().parse_args()
    setup_logging(args.log_level, args.log_file)

    if args.mode == "pvc":
        run_pvc(args.lvl, args.color, args.size, args.tick)
    else:
        run_pvp(args.size, args.tick)


if __name__ == "__main__":
    main()
