"""
Main entry point for playing a mini-game session in the terminal.

Usage:
    python -m src.main config.yaml
    python -m src.main config.yaml --output results/session.json --verbose
"""

import argparse
import asyncio
import logging
import sys
from functools import partial
from pathlib import Path

import yaml

from .api import HttpGameService, ProgressReporter
from .engine import SessionConfig, SessionStatus, create_session
from .engine.console import ConsoleDriver


def load_config(config_path: str) -> SessionConfig:
    """Load session configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    return SessionConfig(**(data or {}))


async def play(config: SessionConfig):
    """Build the session for `config` and drive it from stdin."""
    service = HttpGameService(config.game_type, config=config.api, from_module=config.from_module)

    on_complete = None
    reporter = None
    if config.from_module and config.module_item_id:
        reporter = ProgressReporter(config=config.api)
        on_complete = partial(reporter.report, config.module_item_id)

    session = create_session(
        config.game_type,
        service,
        config.activity_id,
        from_module=config.from_module,
        on_complete=on_complete,
    )

    try:
        return await ConsoleDriver(session).run()
    finally:
        service.close()
        if reporter is not None:
            reporter.session.close()


def main():
    parser = argparse.ArgumentParser(
        description="Play a word-search, hangman or complete-the-phrase activity",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  game_type: hanging
  activity_id: 64f1c2
  from_module: false
  api:
    base_url: http://localhost:3020
    timeout: 10
    token: <jwt>
        """
    )
    parser.add_argument(
        "config",
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--output", "-o",
        help="Path to save the session outcome JSON"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log requests and state changes to stderr"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    try:
        session = asyncio.run(play(config))
    except KeyboardInterrupt:
        print("\nSession interrupted by user")
        return 1

    outcome = session.outcome()

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(outcome.model_dump_json(by_alias=True, indent=2))
        if args.verbose:
            print(f"Outcome saved to: {output_path}")

    # Print summary
    print()
    print("=== Session Summary ===")
    print(f"Game: {config.game_type}")
    print(f"Status: {session.status.value}")
    print(f"Items validated: {len(session.results)}/{session.total_items}")
    if session.aggregate is not None:
        print(f"Score: {session.aggregate.total_score}")
        print(f"Percentage: {session.aggregate.percentage}%")

    return 0 if session.status != SessionStatus.ERROR else 1


if __name__ == "__main__":
    sys.exit(main())
