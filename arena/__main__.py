"""
Play the arena shooter in an arcade window

Usage:
    python -m arena
    python -m arena --seed 7 --width 1024 --height 768
"""

import argparse

from .config import GameConfig
from .session import Session


def main(argv=None):
    parser = argparse.ArgumentParser(description="Top-down arena shooter")
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Play area width in pixels (default: 800)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Play area height in pixels (default: 600)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for enemy spawns",
    )
    parser.add_argument(
        "--verbose",
        type=int,
        default=1,
        help="0 = silent, 1 = session messages (default: 1)",
    )

    args = parser.parse_args(argv)

    overrides = {}
    if args.width is not None:
        overrides["width"] = args.width
    if args.height is not None:
        overrides["height"] = args.height

    try:
        config = GameConfig.from_dict(overrides)
    except ValueError as exc:
        parser.error(str(exc))

    session = Session(config, seed=args.seed, verbose=args.verbose)

    # Imported here so the rest of the package works without a display
    from .window import play
    play(session)


if __name__ == "__main__":
    main()
