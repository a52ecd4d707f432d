"""
Symbols -- Markers used in import reports

Two interchangeable sets: Unicode for capable terminals, ASCII otherwise.
Which one is used follows display.symbols ("unicode" | "ascii" | "auto").

safe_print() exists because reports echo preference names and values
straight out of scheme files, which can hold anything.
"""

import os
import sys
from dataclasses import astuple, dataclass
from typing import Dict, Optional, TextIO


@dataclass(frozen=True)
class SymbolSet:
    """Symbols used by command output."""
    # Status markers
    check_pass: str
    check_warn: str
    check_fail: str

    # How a colour got its value
    direct: str
    derived: str
    skipped: str

    bullet: str
    swatch: str


UNICODE = SymbolSet(
    check_pass='✓',
    check_warn='⚠',
    check_fail='✗',
    direct='●',
    derived='◐',
    skipped='○',
    bullet='•',
    swatch='█',
)

ASCII = SymbolSet(
    check_pass='[OK]',
    check_warn='[!]',
    check_fail='[ERR]',
    direct='[*]',
    derived='[~]',
    skipped='[ ]',
    bullet='*',
    swatch='#',
)

# Unicode marker -> ASCII marker, used when the stream rejects a character
_DOWNGRADE: Dict[str, str] = dict(zip(astuple(UNICODE), astuple(ASCII)))

_ON = ('1', 'true', 'yes')


def _flag(name: str) -> bool:
    return os.environ.get(name, '').lower() in _ON


def supports_unicode(stream: Optional[TextIO] = None) -> bool:
    """
    Guess whether stream can show Unicode markers.

    SCHEMER_ASCII_ONLY / SCHEMER_UNICODE force the answer; otherwise the
    stream encoding decides, then the locale. Unknown means ASCII.
    """
    if _flag('SCHEMER_ASCII_ONLY'):
        return False
    if _flag('SCHEMER_UNICODE'):
        return True

    encoding = (getattr(stream or sys.stdout, 'encoding', None) or '').lower()
    if encoding:
        return encoding.replace('-', '').replace('_', '').startswith('utf')

    locale = (os.environ.get('LC_ALL') or os.environ.get('LANG') or '').lower()
    return 'utf-8' in locale or 'utf8' in locale


def get_symbols(preference: Optional[str] = None) -> SymbolSet:
    """Symbol set for a display.symbols value (None or "auto" detects)."""
    if preference == 'unicode':
        return UNICODE
    if preference == 'ascii':
        return ASCII
    return UNICODE if supports_unicode() else ASCII


def downgrade(text: str) -> str:
    """Replace Unicode markers in text with their ASCII counterparts."""
    for fancy, plain in _DOWNGRADE.items():
        text = text.replace(fancy, plain)
    return text


def safe_print(text: str, end: str = '\n', file: Optional[TextIO] = None) -> None:
    """
    Print text, degrading gracefully when the stream cannot encode it.

    First the report markers are swapped for ASCII; anything still
    unencodable (usually from the scheme file itself) becomes '?'.
    """
    file = file or sys.stdout
    try:
        print(text, end=end, file=file)
        return
    except UnicodeEncodeError:
        text = downgrade(text)

    encoding = getattr(file, 'encoding', None) or 'utf-8'
    print(text.encode(encoding, errors='replace').decode(encoding), end=end, file=file)
