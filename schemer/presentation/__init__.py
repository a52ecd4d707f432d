"""
Presentation -- Terminal output helpers

- symbols: Unicode/ASCII symbol sets and safe_print()
- template: OutputTemplate builder (header, sections, footer)
"""

from .symbols import SymbolSet, UNICODE, ASCII, get_symbols, safe_print
from .template import OutputTemplate

__all__ = [
    "SymbolSet", "UNICODE", "ASCII", "get_symbols", "safe_print",
    "OutputTemplate",
]
