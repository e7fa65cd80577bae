"""Command-line interface for stepshell."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from colorama import init as colorama_init

from .config.manager import ConfigError, ConfigManager
from .constants import DEFAULT_QUERY
from .core.application import create_application
from .utils.logging import logger
from . import __version__


def positive_int(value: str) -> int:
    """argparse type for strictly positive integers."""
    try:
        parsed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: '{value}'")
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {parsed}")
    return parsed


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        description="stepshell: LLM agent that thinks, acts on your machine, observes and answers.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  stepshell "create a folder demo with an index.html"
  stepshell --max-steps 10 "what is in this directory?"
  stepshell --init-config      # write ~/.config/stepshell/config.yaml
  stepshell                    # run the built-in ToDo app demo query

Credentials:
  STEPSHELL_API_KEY and STEPSHELL_BASE_URL are read from the environment
  or from a .env file in the current directory.
        """
    )

    parser.add_argument(
        'query',
        nargs='*',
        help="Request for the agent. If empty, a demo query is used."
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'stepshell {__version__}'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help="Enable debug logging output"
    )

    parser.add_argument(
        '--config-dir',
        type=str,
        help="Custom configuration directory path"
    )

    parser.add_argument(
        '--init-config',
        action='store_true',
        help="Write a configuration template and exit"
    )

    parser.add_argument(
        '--config-summary',
        action='store_true',
        help="Show configuration summary and exit"
    )

    parser.add_argument(
        '--max-steps',
        type=positive_int,
        help="Override the maximum number of model turns"
    )

    return parser


def main(args: Optional[List[str]] = None) -> None:
    """Main entry point for the CLI."""
    colorama_init()

    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if parsed_args.init_config:
        manager = ConfigManager(Path(parsed_args.config_dir) if parsed_args.config_dir else None)
        written = manager.write_template()
        if written:
            logger.system(f"Configuration template written to {manager.config_file}")
        sys.exit(0 if written else 1)

    try:
        app = create_application(
            config_dir=parsed_args.config_dir,
            debug=parsed_args.debug,
            max_steps=parsed_args.max_steps,
            check_credentials=not parsed_args.config_summary,
        )
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to initialize stepshell: {e}")
        sys.exit(1)

    if parsed_args.config_summary:
        app.print_config_summary()
        return

    query = " ".join(parsed_args.query) if parsed_args.query else DEFAULT_QUERY

    try:
        outcome = app.run_single_task(query)
    except KeyboardInterrupt:
        logger.system("Shutting down gracefully...")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Fatal Error: {e}")
        sys.exit(1)

    if not outcome.success:
        logger.system(f"Run aborted: {outcome.status.value}")
    sys.exit(0 if outcome.success else 1)


if __name__ == "__main__":
    main()
