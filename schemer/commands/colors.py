"""
ColorsCommand -- Show which preferences a scheme can set

Lists the colour registry in resolution order with each fallback, plus the
integer and boolean preferences. Optionally shows the current values held
by a preference file.
"""

from pathlib import Path
from typing import Dict, List, Optional

from ..commands.base import BaseCommand, EXIT_OK, EXIT_UNREADABLE
from ..presentation.symbols import safe_print
from ..preferences.store import open_store


class ColorsCommand(BaseCommand):
    """Command for listing the preference registry."""

    def list_colors(self, target: Optional[str] = None) -> int:
        """
        Print the registry.

        Args:
            target: Optional preference file; adds a column with its values

        Returns:
            Exit code
        """
        template = self.template()
        catalog = self.catalog

        store = None
        if target:
            try:
                store = open_store(Path(target).expanduser())
            except (OSError, ValueError) as e:
                safe_print(f"Error: Could not load preference file {target}: {e}")
                return EXIT_UNREADABLE

        columns = ["#", "Name", "Fallback"]
        keys = ["index", "name", "fallback"]
        if store is not None:
            columns.append("Current")
            keys.append("current")

        rows: List[Dict[str, str]] = []
        for index, (name, fallback) in enumerate(catalog.colors, start=1):
            row = {"index": str(index), "name": name, "fallback": fallback.describe()}
            if store is not None:
                row["current"] = template.format_swatch(store.get_color_preference(name))
            rows.append(row)

        template.header("SCHEMER COLORS", f"{len(rows)} colours in resolution order")
        template.section("COLOURS", template.format_table(rows, columns, keys))
        template.section("INTEGERS", template.format_list(list(catalog.integers)))
        template.section(
            "BOOLEANS (with --include-booleans)",
            template.format_list(list(catalog.boolean_names(include_booleans=True)))
        )
        template.footer(
            f"{len(rows)} colours | {len(catalog.integers)} integers | "
            f"{len(catalog.boolean_names(include_booleans=True))} booleans"
        )
        safe_print(template.render())
        return EXIT_OK


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

def register_parser(subparsers):
    """Register colors command parser."""
    p = subparsers.add_parser('colors', help='List importable preferences and fallbacks')
    p.add_argument('--target', '-t', metavar='PATH',
                   help='Show current values from this preference file')
    return p


def handle(cli, args):
    """Handle colors command dispatch."""
    return cli._colors_cmd.list_colors(target=args.target)
