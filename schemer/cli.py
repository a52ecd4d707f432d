"""
CLI -- Command interface

    schemer import SCHEME --target PREFS [--include-booleans]
    schemer check SCHEME [--seed PREFS]
    schemer colors [--target PREFS]
    schemer config [--set KEY=VALUE] [--user]

Handlers return exit codes: 0 success, 1 import refused or aborted,
2 file could not be read.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .config import ConfigManager
from .core.registry import PreferenceCatalog
from .presentation.symbols import get_symbols
from .commands.base import EXIT_FAILED
from .commands.import_cmd import ImportCommand
from .commands.check import CheckCommand
from .commands.colors import ColorsCommand
from .commands.config_cmd import ConfigCommand
from . import __version__


LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class SchemerCLI:
    """Command-line interface for scheme import."""

    def __init__(self, project_dir: Path, catalog: Optional[PreferenceCatalog] = None):
        self.project_dir = Path(project_dir)
        self.config_manager = ConfigManager(self.project_dir)
        self.config = self.config_manager.load()
        self.catalog = catalog or PreferenceCatalog.default()

        # Initialize symbols based on config
        self.symbols = get_symbols(self.config.display.symbols)

        # Initialize command handlers
        self._import_cmd = ImportCommand(self)
        self._check_cmd = CheckCommand(self)
        self._colors_cmd = ColorsCommand(self)
        self._config_cmd = ConfigCommand(self)


def configure_logging(verbosity: int) -> None:
    """
    Route core logging to stderr.

    Warnings are already part of command output, so the default level only
    lets errors through; -v shows progress, -vv every write.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.ERROR
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schemer",
        description="Schemer -- Colour scheme import for editor preferences",
        epilog="Colours the scheme leaves out are derived from the ones it sets."
    )

    parser.add_argument(
        '--project', '-p',
        default=os.environ.get("SCHEMER_PROJECT_PATH", "."),
        help='Project directory holding .schemer/config.yaml (default: current)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Log progress (-v) or every write (-vv) to stderr'
    )

    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'schemer {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Register all commands from command modules (self-registration pattern)
    from .commands import register_all
    register_all(subparsers)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the schemer CLI.

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_FAILED

    configure_logging(args.verbose)

    from .commands import dispatch
    cli = SchemerCLI(Path(args.project))

    try:
        return dispatch(args.command, cli, args)
    except KeyError as e:
        print(f"Error: {e}", file=sys.stderr)
        parser.print_help()
        return EXIT_FAILED


if __name__ == '__main__':
    sys.exit(main())
