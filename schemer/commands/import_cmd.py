"""
ImportCommand -- Apply a colour scheme file to a preference file

Handles:
- Resolving target store and boolean option (flags > config)
- Running the import and saving the store
- Mapping errors to exit codes

Writes made before a mid-run failure (NoColorsFound, BadFallbackShape) are
saved too: the store reflects exactly what was applied.
"""

from pathlib import Path
from typing import List, Optional

from ..commands.base import BaseCommand, EXIT_OK, EXIT_FAILED, EXIT_UNREADABLE
from ..core.errors import SchemerError, SchemeFileError, PreconditionError
from ..core.importer import ImportResult, SchemeImporter
from ..presentation.symbols import safe_print
from ..presentation.template import OutputTemplate
from ..preferences.store import open_store


def summarize(result: ImportResult, template: OutputTemplate) -> str:
    """One-line footer summary of an import result."""
    summary = template.format_counts({
        "set": len(result.colors_set),
        "derived": len(result.colors_derived),
        "booleans": len(result.booleans_set),
        "integers": len(result.integers_set),
    })
    if result.warnings:
        summary += f" | {template.symbols.check_warn} {len(result.warnings)} warning(s)"
    return summary


def render_result(template: OutputTemplate, result: ImportResult, full: bool = False) -> None:
    """Add the standard result sections to a template."""
    symbols = template.symbols

    mode = "WITH" if result.include_booleans else "WITHOUT"
    template.section("SOURCE", f"Imported color scheme {mode} boolean options from\n{result.source}")

    if full:
        lines: List[str] = []
        lines.extend(f"{symbols.direct} {name}" for name in result.colors_set)
        lines.extend(f"{symbols.derived} {name}" for name in result.colors_derived)
        lines.extend(f"{symbols.skipped} {name}" for name in result.colors_skipped)
        template.section("COLOURS", "\n".join(lines))

        other = result.booleans_set + result.integers_set
        if other:
            template.section("OPTIONS", template.format_list(other))

    if result.warnings:
        template.section("WARNINGS", template.format_list([str(w) for w in result.warnings],
                                                          bullet=symbols.check_warn))


def render_error(template: OutputTemplate, title: str, error: SchemerError) -> str:
    """Render a failed run."""
    symbols = template.symbols
    template.header(title, "Failed")
    template.section("ERROR", str(error))
    if isinstance(error, PreconditionError):
        template.section("STATUS", "Nothing was written.")
    template.footer(f"{symbols.check_fail} {type(error).__name__}")
    return template.render()


class ImportCommand(BaseCommand):
    """Command for importing a scheme into a preference file."""

    def resolve_target(self, target: Optional[str]) -> Optional[Path]:
        target = target or self.config.imports.target
        if not target:
            return None
        return Path(target).expanduser()

    def import_scheme(self, scheme: str, target: Optional[str] = None,
                      include_booleans: Optional[bool] = None, full: bool = False) -> int:
        """
        Import scheme into the target preference file.

        Args:
            scheme: Path to the colour scheme file
            target: Preference file to update (.prf/.txt or .json)
            include_booleans: Override the configured boolean option
            full: List every colour and option in the output

        Returns:
            Exit code
        """
        symbols = self.symbols
        template = self.template()

        target_path = self.resolve_target(target)
        if target_path is None:
            template.header("SCHEMER IMPORT", "No Target")
            template.section("ERROR", "No preference file to import into.")
            template.section("ACTION", "Pass --target PATH or run: schemer config --set import.target=PATH")
            template.footer(f"{symbols.check_fail} Nothing imported")
            safe_print(template.render())
            return EXIT_FAILED

        if include_booleans is None:
            include_booleans = self.config.imports.include_booleans

        try:
            store = open_store(target_path)
        except (OSError, ValueError) as e:
            error = SchemeFileError(f"Could not load preference file ({e})", str(target_path))
            safe_print(render_error(template, "SCHEMER IMPORT", error))
            return EXIT_UNREADABLE

        importer = SchemeImporter(store, catalog=self.catalog, include_booleans=include_booleans)

        try:
            result = importer.import_file(scheme)
        except SchemeFileError as e:
            safe_print(render_error(template, "SCHEMER IMPORT", e))
            return EXIT_UNREADABLE
        except SchemerError as e:
            if store.writes:
                store.save()
                template.section("PARTIAL", f"{store.writes} write(s) saved to {target_path}")
            safe_print(render_error(template, "SCHEMER IMPORT", e))
            return EXIT_FAILED

        saved = store.save()

        template.header("SCHEMER IMPORT", Path(scheme).name)
        render_result(template, result, full=full)
        template.section("SAVED TO", str(saved))
        template.footer(f"{symbols.check_pass} {summarize(result, template)}")
        safe_print(template.render())
        return EXIT_OK


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAME = 'import'


def add_boolean_flags(parser) -> None:
    """--include-booleans / --no-booleans (default: from config)."""
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--include-booleans', '-b', dest='include_booleans',
                       action='store_true', default=None,
                       help='Also import boolean options (checkboxes)')
    group.add_argument('--no-booleans', dest='include_booleans',
                       action='store_false',
                       help='Never import boolean options')


def register_parser(subparsers):
    """Register import command parser."""
    p = subparsers.add_parser('import', help='Apply a colour scheme to a preference file')
    p.add_argument('scheme', help='Colour scheme file (name=value lines)')
    p.add_argument('--target', '-t',
                   help='Preference file to update (default: import.target from config)')
    add_boolean_flags(p)
    p.add_argument('--full', action='store_true',
                   help='List every colour and option that was written')
    return p


def handle(cli, args):
    """Handle import command dispatch."""
    return cli._import_cmd.import_scheme(
        args.scheme,
        target=args.target,
        include_booleans=args.include_booleans,
        full=args.full
    )
