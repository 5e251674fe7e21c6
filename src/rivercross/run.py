"""CLI runner for the missionaries-and-cannibals breadth-first search."""
from __future__ import annotations

import argparse
import sys
import time
from typing import List, Optional

from .config import SearchConfig, load_config
from .engine import SearchEngine, SearchStatus
from .errors import ConfigurationError
from .logger import RunLogger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Solve missionaries and cannibals with breadth-first search.")
    parser.add_argument("--cannibals", help="Cannibals starting on the left bank (default: 3)")
    parser.add_argument("--missionaries", help="Missionaries starting on the left bank (default: 3)")
    parser.add_argument("--max-iterations", help="Maximum number of expansions (default: 30)")
    parser.add_argument("--delay", help="Seconds to wait between iterations (default: 0)")
    parser.add_argument("--config", help="JSON file with cannibals/missionaries/max_iterations/delay")
    parser.add_argument("--log-json", help="Write every node event and the result to this JSON file")
    parser.add_argument("--verbose", action="store_true", help="Print every node event as it happens")
    return parser


def resolve_config(args: argparse.Namespace) -> SearchConfig:
    """File values first, then any flag given on the command line."""
    cfg = load_config(args.config) if args.config else SearchConfig()
    return SearchConfig.parse(
        args.cannibals if args.cannibals is not None else cfg.cannibals,
        args.missionaries if args.missionaries is not None else cfg.missionaries,
        args.max_iterations if args.max_iterations is not None else cfg.max_iterations,
        args.delay if args.delay is not None else cfg.delay,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = resolve_config(args)
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    logger = RunLogger(echo=args.verbose)
    engine = SearchEngine(sink=logger)
    root = engine.start(cfg)

    print(f"Initial state: {root.state}")
    print(f"Iteration cap: {cfg.max_iterations}")
    print()

    while engine.status == SearchStatus.RUNNING:
        current = engine.step()
        logger.snapshot(engine, note=f"expanded {current.nid}")
        print(f"Iteration {engine.iteration:03d}  node {current.nid:>3}  {current.state}"
              f"  open={len(engine.open_list)} closed={len(engine.closed_list)}")
        if cfg.delay > 0 and engine.status == SearchStatus.RUNNING:
            time.sleep(cfg.delay)

    result = engine.result()
    assert result is not None
    print()
    print(f"Status: {result.status.name}")
    print(f"Iterations: {result.iterations}")
    print(f"Nodes created: {result.nodes_created}")
    if result.solved:
        print(f"Crossings: {result.crossings}")
        for i, state in enumerate(result.path):
            print(f"  {i:2d}. {state}")
    else:
        print("No solution found within the iteration cap.")

    if args.log_json:
        logger.to_json(args.log_json, result=result.to_dict())
        print(f"Wrote {len(logger.events)} events to {args.log_json}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
