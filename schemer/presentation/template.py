"""
OutputTemplate -- Report layout shared by every command

A report is a title bar, any number of titled blocks and a closing summary:

    ==========================================
    SCHEMER IMPORT - monokai.prf
    ==========================================

    SOURCE
    ------
    Imported color scheme WITHOUT boolean options from
    monokai.prf

    ------------------------------------------
    Summary: [OK] 2 set | 62 derived
    ==========================================

Usage:
    template = OutputTemplate()
    template.header("SCHEMER IMPORT", "monokai.prf")
    template.section("WARNINGS", template.format_list(messages))
    template.footer("2 set | 62 derived")
    safe_print(template.render())
"""

import shutil
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..core.colors import Color
from .symbols import SymbolSet, get_symbols

RULE_HEAVY = "="
RULE_LIGHT = "-"
MIN_WIDTH = 40
MAX_WIDTH = 100


def terminal_width() -> int:
    columns = shutil.get_terminal_size(fallback=(80, 24)).columns
    return max(MIN_WIDTH, min(columns, MAX_WIDTH))


class OutputTemplate:
    """
    Collects report blocks, then renders them in one go.

    Blocks keep insertion order; the header always renders first.
    """

    def __init__(self, symbols: Optional[SymbolSet] = None, width: Optional[int] = None):
        self.symbols = symbols or get_symbols()
        self.width = width or terminal_width()
        self._heading: Optional[str] = None
        self._blocks: List[Tuple[str, str]] = []
        self._summary: Optional[str] = None

    def header(self, title: str, subtitle: Optional[str] = None) -> 'OutputTemplate':
        self._heading = f"{title} - {subtitle}" if subtitle else title
        return self

    def section(self, title: str, content: str) -> 'OutputTemplate':
        self._blocks.append((title, content))
        return self

    def footer(self, summary: Optional[str] = None) -> 'OutputTemplate':
        self._summary = summary
        return self

    def render(self) -> str:
        heavy = RULE_HEAVY * self.width
        out: List[str] = []

        if self._heading:
            out += [heavy, self._heading, heavy, ""]

        for title, content in self._blocks:
            if title:
                out += [title, RULE_LIGHT * len(title)]
            if content:
                out.append(content)
            out.append("")

        out.append(RULE_LIGHT * self.width)
        if self._summary:
            out.append(f"Summary: {self._summary}")
        out.append(heavy)
        return "\n".join(out)

    # -------------------------------------------------------------------------
    # Block content helpers
    # -------------------------------------------------------------------------

    def format_table(self, rows: Sequence[Mapping[str, str]], columns: Sequence[str],
                     keys: Optional[Sequence[str]] = None) -> str:
        """
        Left-aligned columns separated by two spaces, one row per line.

        keys name the row fields shown under each column; by default the
        column header lowercased.
        """
        if not rows:
            return ""
        keys = list(keys or [c.lower() for c in columns])
        cells = [list(columns)] + [[str(row.get(k, "")) for k in keys] for row in rows]
        widths = [max(len(line[i]) for line in cells) for i in range(len(keys))]
        return "\n".join(
            "  ".join(cell.ljust(w) for cell, w in zip(line, widths)).rstrip()
            for line in cells
        )

    def format_list(self, items: Sequence[str], bullet: Optional[str] = None) -> str:
        if not items:
            return ""
        mark = bullet or self.symbols.bullet
        return "\n".join(f"{mark} {item}" for item in items)

    def format_swatch(self, color: Optional[Color]) -> str:
        """Swatch marker plus hex code, or '-' when there is no colour."""
        if color is None:
            return "-"
        return f"{self.symbols.swatch} {color.hex}"

    def format_counts(self, counts: Dict[str, int]) -> str:
        """'2 set | 62 derived', leaving out zero counts."""
        return " | ".join(f"{n} {label}" for label, n in counts.items() if n)
