"""
Values -- Typed decoding of raw preference values

Preference files encode every value with a one-letter type prefix:
    Btrue / Bfalse      boolean (case-insensitive)
    I<decimal>          integer
    C<signed decimal>   packed colour (see colors.py)

Decoding never raises. A malformed value yields a ParseWarning and the
caller skips that entry.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .colors import Color


class Category(Enum):
    """Static preference categories (mutually exclusive)."""
    BOOLEAN = "boolean"
    INTEGER = "integer"
    COLOR = "color"


class WarningKind(Enum):
    """Non-fatal, per-entry problems."""
    BAD_BOOLEAN = "bad_boolean"
    BAD_INTEGER = "bad_integer"
    BAD_COLOR = "bad_color"
    UNRESOLVED_FALLBACK = "unresolved_fallback"


@dataclass(frozen=True)
class ParseWarning:
    """A skipped entry and the reason it was skipped."""
    kind: WarningKind
    name: str
    value: str = ""
    line_number: Optional[int] = None

    @property
    def message(self) -> str:
        if self.kind == WarningKind.BAD_BOOLEAN:
            return f"Bad boolean for {self.name}: {self.value}"
        if self.kind == WarningKind.BAD_INTEGER:
            return f"Bad integer pref for {self.name}: {self.value}"
        if self.kind == WarningKind.BAD_COLOR:
            return f"Bad color for {self.name}: {self.value}"
        return f"Could not resolve fallback for {self.name}: {self.value}"

    def __str__(self) -> str:
        if self.line_number is not None:
            return f"line {self.line_number}: {self.message}"
        return self.message


TypedValue = Union[bool, int, Color]

# ASCII digits only
_DECIMAL = re.compile(r'[+-]?[0-9]+')

# Integer preferences are 32-bit signed on the host side
INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1

_BOOLEANS = {
    "btrue": True,
    "bfalse": False,
}

_WARNING_FOR = {
    Category.BOOLEAN: WarningKind.BAD_BOOLEAN,
    Category.INTEGER: WarningKind.BAD_INTEGER,
    Category.COLOR: WarningKind.BAD_COLOR,
}


@dataclass(frozen=True)
class DecodeResult:
    """Either a typed value or the warning explaining why there is none."""
    value: Optional[TypedValue] = None
    warning: Optional[ParseWarning] = None

    @property
    def ok(self) -> bool:
        return self.warning is None


def _parse_prefixed_int(raw: str, prefix: str) -> Optional[int]:
    """Parse '<prefix><decimal>' with a case-insensitive prefix."""
    if not raw or raw[0].lower() != prefix:
        return None
    digits = raw[1:]
    if not _DECIMAL.fullmatch(digits):
        return None
    return int(digits)


def decode(category: Category, raw: str, name: str = "",
           line_number: Optional[int] = None) -> DecodeResult:
    """
    Decode a raw preference value for the given category.

    Args:
        category: Category the preference name belongs to
        raw: Value string, already stripped of surrounding whitespace
        name: Preference name (only used to label warnings)
        line_number: Source line (only used to label warnings)

    Returns:
        DecodeResult holding a bool, int or Color, or a ParseWarning
    """
    value: Optional[TypedValue] = None

    if category == Category.BOOLEAN:
        value = _BOOLEANS.get(raw.lower())
    elif category == Category.INTEGER:
        number = _parse_prefixed_int(raw, "i")
        if number is not None and INT32_MIN <= number <= INT32_MAX:
            value = number
    elif category == Category.COLOR:
        packed = _parse_prefixed_int(raw, "c")
        if packed is not None:
            value = Color.from_packed(packed)

    if value is None:
        warning = ParseWarning(
            kind=_WARNING_FOR[category],
            name=name,
            value=raw,
            line_number=line_number
        )
        return DecodeResult(warning=warning)

    return DecodeResult(value=value)


def encode(value: TypedValue) -> str:
    """Encode a typed value back to its preference-file form."""
    # bool first: bool is a subclass of int
    if isinstance(value, bool):
        return "Btrue" if value else "Bfalse"
    if isinstance(value, Color):
        return f"C{value.packed}"
    if isinstance(value, int):
        return f"I{value}"
    raise TypeError(f"Cannot encode preference value {value!r}")
