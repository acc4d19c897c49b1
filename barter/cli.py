"""
Barter CLI - Command-line interface for the simulator.

Usage:
    barter run [--rules FILE] [--config FILE]   Simulate a batch of games
    barter strategies                           List registered strategies
    barter serve [--host H] [--port P]          Serve the HTTP API
"""

import argparse
import json
import logging
import sys

from .errors import BarterError


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Barter - Bartering Economy Board Game Simulator",
        prog="barter",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Run command
    run_parser = subparsers.add_parser("run", help="Simulate a batch of games")
    run_parser.add_argument("--rules", help="Path to GameRules JSON file")
    run_parser.add_argument("--config", help="Path to SimConfig JSON file")
    run_parser.add_argument("--runs", type=int, help="Override num_runs")
    run_parser.add_argument("--workers", type=int, default=1, help="Worker processes")
    run_parser.add_argument(
        "--quiet", action="store_true",
        help="No per-round state dump or pacing",
    )
    run_parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    run_parser.add_argument(
        "--results", action="store_true",
        help="Include every game result in the JSON report",
    )

    # Strategies command
    subparsers.add_parser("strategies", help="List registered strategies")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Serve the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "run":
            cmd_run(args)
        elif args.command == "strategies":
            cmd_strategies(args)
        elif args.command == "serve":
            cmd_serve(args)
        else:
            parser.print_help()
            sys.exit(1)
    except BarterError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cmd_run(args):
    """Simulate a batch of games and print the summary."""
    from .config import load_rules, load_sim_config
    from .simulation import run_simulation

    rules = load_rules(args.rules)
    config = load_sim_config(args.config)
    if args.runs is not None:
        config = config.model_copy(update={"num_runs": max(args.runs, 0)})

    report = run_simulation(
        rules,
        config,
        visualize=not args.quiet,
        workers=max(args.workers, 1),
    )

    if args.json:
        print(json.dumps(report.to_dict(include_results=args.results), indent=2))
        return

    print(f"Runs: {report.num_runs}")
    print("Wins by player:")
    for player_id, wins in sorted(report.wins_by_player.items()):
        print(f"  Player {player_id}: {wins}")

    stats = report.turn_stats
    if stats.count:
        print(
            f"Turns: min {stats.min:g}, max {stats.max:g}, "
            f"mean {stats.mean:.2f}, var {stats.var:.2f}"
        )
    for player_id, score in enumerate(report.score_stats):
        if score.count:
            print(f"  Player {player_id} score: mean {score.mean:.2f}, var {score.var:.2f}")


def cmd_strategies(args):
    """List registered strategies."""
    from .config import DEFAULT_PLAYER_TYPE
    from .strategies import default_registry

    for name in default_registry().names():
        marker = " (default)" if name == DEFAULT_PLAYER_TYPE else ""
        print(f"{name}{marker}")


def cmd_serve(args):
    """Serve the HTTP API with uvicorn."""
    import uvicorn
    from .api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
