"""
ConfigCommand -- Configuration display and updates
"""

from ..commands.base import BaseCommand, EXIT_OK, EXIT_FAILED
from ..presentation.symbols import safe_print


class ConfigCommand(BaseCommand):
    """Command for configuration management."""

    def show_config(self) -> int:
        """Show current configuration."""
        template = self.template()
        template.header("SCHEMER CONFIG", "Current Configuration")
        template.section("SETTINGS", self.config_manager.display())
        safe_print(template.render())
        return EXIT_OK

    def set_config(self, key: str, value: str, scope: str = "project") -> int:
        """Set a configuration value."""
        symbols = self.symbols
        error = self.config_manager.set(key, value, scope)

        template = self.template()

        if error:
            template.header("SCHEMER CONFIG", "Error")
            template.section("ERROR", error)
            template.footer(f"{symbols.check_fail} Configuration unchanged")
            safe_print(template.render())
            return EXIT_FAILED

        template.header("SCHEMER CONFIG", "Configuration Updated")
        template.section("SETTING", f"Set {key} = {value}")
        if scope == "project":
            template.section("SAVED TO", str(self.config_manager.project_config_path))
        else:
            template.section("SAVED TO", str(self.config_manager.user_config_path))
        template.footer(f"{symbols.check_pass} Configuration saved")
        safe_print(template.render())
        return EXIT_OK


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAME = 'config'


def register_parser(subparsers):
    """Register config command parser."""
    p = subparsers.add_parser('config', help='View or set configuration')
    p.add_argument('--set', metavar='KEY=VALUE',
                   help='Set config value (e.g., import.include_booleans=true)')
    p.add_argument('--user', action='store_true',
                   help='Apply to user config instead of project')
    return p


def handle(cli, args):
    """Handle config command dispatch."""
    if args.set:
        if '=' not in args.set:
            safe_print("Error: Use format KEY=VALUE (e.g., display.symbols=ascii)")
            return EXIT_FAILED
        key, value = args.set.split('=', 1)
        scope = "user" if args.user else "project"
        return cli._config_cmd.set_config(key, value, scope)
    return cli._config_cmd.show_config()
