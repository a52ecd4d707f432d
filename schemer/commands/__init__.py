"""
Commands -- One module per CLI subcommand

A command module provides:
- register_parser(subparsers): adds its argparse subparser
- handle(cli, args) -> int: runs the command, returns the exit code
- COMMAND_NAME (optional): subcommand name when it differs from the module

New subcommands only need a module and an entry in COMMAND_MODULES.
"""

import importlib
from types import ModuleType
from typing import Any, Callable, Dict, List

from .base import BaseCommand, EXIT_OK, EXIT_FAILED, EXIT_UNREADABLE

# Listed in help order
COMMAND_MODULES = [
    'import_cmd',
    'check',
    'colors',
    'config_cmd',
]

Handler = Callable[[Any, Any], int]

_handlers: Dict[str, Handler] = {}


def command_name(module: ModuleType) -> str:
    """'import_cmd' -> 'import' unless the module sets COMMAND_NAME."""
    short = module.__name__.rsplit('.', 1)[-1]
    return getattr(module, 'COMMAND_NAME', None) or short.replace('_cmd', '')


def register_all(subparsers) -> None:
    """Import every command module and wire it into argparse and dispatch."""
    _handlers.clear()
    for module_name in COMMAND_MODULES:
        module = importlib.import_module(f'.{module_name}', __package__)
        module.register_parser(subparsers)
        _handlers[command_name(module)] = module.handle


def dispatch(command: str, cli: Any, args: Any) -> int:
    """
    Run a registered command.

    Raises:
        KeyError: Unknown command
    """
    try:
        handler = _handlers[command]
    except KeyError:
        raise KeyError(f"Unknown command: {command}. Available: {', '.join(_handlers)}") from None
    return handler(cli, args)


def get_registered_commands() -> List[str]:
    return list(_handlers)


__all__ = [
    'BaseCommand', 'register_all', 'dispatch', 'get_registered_commands',
    'EXIT_OK', 'EXIT_FAILED', 'EXIT_UNREADABLE',
]
