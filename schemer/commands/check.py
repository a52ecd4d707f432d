"""
CheckCommand -- Dry-run a scheme without touching any preference file

Runs the full import (both phases) against a throwaway in-memory store,
optionally seeded from an existing preference file so fallbacks see the
same values a real import would.
"""

from pathlib import Path
from typing import Optional

from ..commands.base import BaseCommand, EXIT_OK, EXIT_FAILED, EXIT_UNREADABLE
from ..commands.import_cmd import add_boolean_flags, render_error, render_result, summarize
from ..core.errors import SchemerError, SchemeFileError
from ..core.importer import SchemeImporter
from ..presentation.symbols import safe_print
from ..preferences.store import InMemoryPreferenceStore, open_store


class CheckCommand(BaseCommand):
    """Command for validating a scheme file."""

    def _scratch_store(self, seed: Optional[str]) -> InMemoryPreferenceStore:
        if not seed:
            return InMemoryPreferenceStore()
        return InMemoryPreferenceStore(dict(open_store(Path(seed).expanduser()).items()))

    def check(self, scheme: str, seed: Optional[str] = None,
              include_booleans: Optional[bool] = None) -> int:
        """
        Validate scheme and report what an import would do.

        Args:
            scheme: Path to the colour scheme file
            seed: Optional preference file whose values seed the scratch store
            include_booleans: Override the configured boolean option

        Returns:
            Exit code (EXIT_OK when an import would succeed)
        """
        symbols = self.symbols
        template = self.template()

        if include_booleans is None:
            include_booleans = self.config.imports.include_booleans

        try:
            store = self._scratch_store(seed)
        except (OSError, ValueError) as e:
            error = SchemeFileError(f"Could not load preference file ({e})", seed)
            safe_print(render_error(template, "SCHEMER CHECK", error))
            return EXIT_UNREADABLE

        importer = SchemeImporter(store, catalog=self.catalog, include_booleans=include_booleans)

        try:
            result = importer.import_file(scheme)
        except SchemeFileError as e:
            safe_print(render_error(template, "SCHEMER CHECK", e))
            return EXIT_UNREADABLE
        except SchemerError as e:
            safe_print(render_error(template, "SCHEMER CHECK", e))
            return EXIT_FAILED

        template.header("SCHEMER CHECK", Path(scheme).name)
        render_result(template, result, full=True)
        template.section("STATUS", "Dry run: no preference file was written.")
        template.footer(f"{symbols.check_pass} {summarize(result, template)}")
        safe_print(template.render())
        return EXIT_OK


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

def register_parser(subparsers):
    """Register check command parser."""
    p = subparsers.add_parser('check', help='Validate a colour scheme (dry run)')
    p.add_argument('scheme', help='Colour scheme file (name=value lines)')
    p.add_argument('--seed', metavar='PATH',
                   help='Preference file whose values fallbacks may read')
    add_boolean_flags(p)
    return p


def handle(cli, args):
    """Handle check command dispatch."""
    return cli._check_cmd.check(
        args.scheme,
        seed=args.seed,
        include_booleans=args.include_booleans
    )
