"""
Command line entry point: reads valve descriptions from a file or stdin
and prints the maximum pressure released.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from valveflow.config import EngineConfig
from valveflow.core.errors import ValveflowError
from valveflow.engine.pressure_engine import PressureEngine

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """
    Options left unset fall back to ``VALVEFLOW_*`` environment variables,
    then to the EngineConfig defaults.
    """
    parser = argparse.ArgumentParser(
        prog="valveflow",
        description="Find the maximum pressure releasable from a valve network.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        help="File of valve descriptions (default: stdin).",
    )
    parser.add_argument("--start", help="Start valve id.")
    parser.add_argument("--time-budget", type=int, help="Time units available.")
    parser.add_argument(
        "--strategy",
        choices=("dijkstra", "dfs"),
        help="Shortest-path strategy for the distance matrix.",
    )
    parser.add_argument(
        "--memoize",
        action="store_true",
        default=None,
        help="Cache search sub-results.",
    )
    parser.add_argument(
        "--show-path",
        action="store_true",
        help="Also print the valve opening order.",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level.")
    return parser


def resolve_config(args: argparse.Namespace) -> EngineConfig:
    """Merge command line options over the environment configuration."""
    values = EngineConfig.from_env().model_dump()
    for name in ("start", "time_budget", "strategy", "memoize"):
        value = getattr(args, name)
        if value is not None:
            values[name] = value
    return EngineConfig(**values)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.getLevelName(args.log_level.upper())
    if not isinstance(level, int):
        logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
        logger.error("Unknown log level %r", args.log_level)
        return 1
    logging.basicConfig(level=level, format=LOG_FORMAT)

    try:
        config = resolve_config(args)
        if args.input is None:
            lines = sys.stdin.read().splitlines()
        else:
            lines = args.input.read_text(encoding="utf-8").splitlines()
        result = PressureEngine(config).run(lines)
    except ValveflowError as exc:
        logger.error("%s", exc.log_message())
        return 1
    except (OSError, ValueError) as exc:
        # pydantic's ValidationError is a ValueError.
        logger.error("%s", exc)
        return 1

    print(result["pressure"])
    if args.show_path:
        print(" -> ".join(f"{vid}@{remaining}" for vid, remaining in result["path"]))
    return 0


if __name__ == "__main__":
    sys.exit(main())
