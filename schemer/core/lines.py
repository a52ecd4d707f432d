"""
Lines -- Scheme file scanning and line parsing

Two passes over a scheme file:

1. check_preconditions(): one scan over the raw text, run before anything
   is written. The main text and background colours must each be declared
   exactly once, with different values.
2. iter_entries(): lazily turns lines into (name, value) pairs.

The parser is deliberately permissive. A whole preference dump with
hundreds of unrelated keys goes through without a single warning; only
names the registry knows about ever act.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple

from .errors import (
    SchemeFileError,
    MissingColorKey,
    DuplicateColorKey,
    IdenticalTextBackground,
)

TEXT_KEY = "ColorsText"
BACKGROUND_KEY = "ColorsBackground"
COMMENT_CHAR = "#"

# Anchored at line start; the name cannot contain '=' or '#', the value
# runs until the first '#'.
_ENTRY_PATTERN = re.compile(r'^(?P<name>[^=#]+)=(?P<value>[^#]+)')


@dataclass(frozen=True)
class RawEntry:
    """One name=value pair as it appeared in the file."""
    name: str
    value: str
    line_number: int = 0


def _declaration_pattern(key: str) -> 're.Pattern[str]':
    # Key preceded by whitespace or start of text, value token followed by
    # whitespace or end of text. A token running into '#' does not count.
    return re.compile(
        r'(?<!\S)' + re.escape(key) + r'=(?P<value>[^#\s]+)(?!\S)'
    )


_DECLARATIONS = {
    TEXT_KEY: _declaration_pattern(TEXT_KEY),
    BACKGROUND_KEY: _declaration_pattern(BACKGROUND_KEY),
}


def find_declarations(text: str, key: str) -> list:
    """Return every raw value token declared for key in text."""
    pattern = _DECLARATIONS.get(key) or _declaration_pattern(key)
    return [m.group('value') for m in pattern.finditer(text)]


def _single_declaration(text: str, key: str, source: Optional[str]) -> str:
    values = find_declarations(text, key)
    if not values:
        raise MissingColorKey(key, source)
    if len(values) > 1:
        raise DuplicateColorKey(key, len(values), source)
    return values[0]


def check_preconditions(text: str, source: Optional[str] = None) -> Tuple[str, str]:
    """
    Sanity-check a scheme before it is applied.

    Args:
        text: Entire contents of the scheme file
        source: File name used in error messages

    Returns:
        (text_value, background_value) raw tokens

    Raises:
        MissingColorKey: Text or background colour not declared
        DuplicateColorKey: Declared more than once
        IdenticalTextBackground: Both raw values are the same string
    """
    text_value = _single_declaration(text, TEXT_KEY, source)
    background_value = _single_declaration(text, BACKGROUND_KEY, source)

    # Compared as strings: C-1 and c-1 are different here on purpose
    if text_value == background_value:
        raise IdenticalTextBackground(text_value, source)

    return text_value, background_value


def parse_line(line: str, line_number: int = 0) -> Optional[RawEntry]:
    """Parse a single line, or return None when it carries no entry."""
    line = line.rstrip('\r\n')
    if not line or line.startswith(COMMENT_CHAR):
        return None

    match = _ENTRY_PATTERN.match(line)
    if match is None:
        return None

    return RawEntry(
        name=match.group('name'),
        value=match.group('value').strip(),
        line_number=line_number
    )


def iter_entries(lines: Iterable[str]) -> Iterator[RawEntry]:
    """
    Stream name=value entries out of preference file lines.

    Empty lines, comment lines and lines that do not look like
    name=value are skipped silently.

    Args:
        lines: Any iterable of lines (open file, list, str.splitlines())

    Yields:
        RawEntry per matching line, in file order
    """
    for line_number, line in enumerate(lines, start=1):
        entry = parse_line(line, line_number)
        if entry is not None:
            yield entry


def read_scheme(path: Path) -> str:
    """
    Read a scheme file fully.

    Raises:
        SchemeFileError: If the file is missing or unreadable
    """
    path = Path(path)
    try:
        return path.read_text(encoding='utf-8', errors='replace')
    except OSError as e:
        raise SchemeFileError(f"Could not read scheme file ({e.strerror or e})", str(path)) from e
