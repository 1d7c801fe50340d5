#!/usr/bin/env python3
"""
Bit Canvas - Command-line Entry Point

Small tools around the canvas engine:
- pattern: print the encoded form of a test pattern
- inspect: decode an encoded canvas and list its marked cells
- replay:  run a YAML event script through a paint session
"""

import argparse
import logging
import sys
from typing import List, Optional

import numpy as np

from .address_mapper import TEST_PATTERNS, AddressMapper
from .bit_canvas import BitCanvas
from .codec import decode, encode
from .config import AppConfig, default_config, load_from_toml
from .paint_session import PaintSession
from .replay import load_script, replay
from .validation import CanvasError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def non_negative_int(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bitcanvas", description="Bit-packed pixel canvas tools"
    )
    parser.add_argument("--config", help="Path to configuration file")
    parser.add_argument("--side", type=int, help="Override grid side length")
    parser.add_argument("--log-level", help="Override logging level")

    sub = parser.add_subparsers(dest="command", required=True)

    p_pattern = sub.add_parser("pattern", help="Print an encoded test pattern")
    p_pattern.add_argument("name", choices=TEST_PATTERNS)

    p_inspect = sub.add_parser("inspect", help="Decode and list marked cells")
    p_inspect.add_argument("text", help="Encoded canvas (base64)")
    p_inspect.add_argument(
        "--limit", type=non_negative_int, default=20, help="Maximum coordinates to list"
    )

    p_replay = sub.add_parser("replay", help="Replay a YAML event script")
    p_replay.add_argument("script", help="Path to event script")
    return parser


def resolve_config(args: argparse.Namespace) -> AppConfig:
    return load_from_toml(args.config) if args.config else default_config()


def cmd_pattern(args: argparse.Namespace, side: int) -> int:
    print(encode(AddressMapper(side).create_test_pattern(args.name)))
    return 0


def cmd_inspect(args: argparse.Namespace, side: int) -> int:
    canvas = BitCanvas(side)
    canvas.load_buffer(decode(args.text, side))

    ys, xs = np.nonzero(canvas.to_array())
    print(f"{side}x{side} canvas, {len(xs)} cells marked")
    for x, y in list(zip(xs.tolist(), ys.tolist()))[: args.limit]:
        print(f"  ({x},{y})")
    if len(xs) > args.limit:
        print(f"  ... {len(xs) - args.limit} more")
    return 0


def cmd_replay(args: argparse.Namespace, side: int, cfg: AppConfig) -> int:
    script = load_script(args.script)
    session = PaintSession(BitCanvas(side), mode=cfg.session.draw_mode)
    print(replay(session, script))
    logger.info(f"Replay finished: {session.get_stats()['stats']}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = resolve_config(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    level = (args.log_level or cfg.logging.level).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)

    side = args.side if args.side is not None else cfg.canvas.side

    try:
        if args.command == "pattern":
            return cmd_pattern(args, side)
        if args.command == "inspect":
            return cmd_inspect(args, side)
        return cmd_replay(args, side, cfg)
    except CanvasError as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
