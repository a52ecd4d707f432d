"""
Registry -- Which preferences a scheme may set, and how gaps are filled

Static tables (data, not code): adding a preference means adding a row.

- BOOLEAN_PREFERENCES: recognised when booleans are included
- EXTRA_BOOLEAN_PREFERENCES: checkbox options, also only with booleans
- INTEGER_PREFERENCES: always recognised
- COLOR_PREFERENCES: every colour, in declaration order, with its fallback

Declaration order of COLOR_PREFERENCES is observable: the fallback pass
walks it once, top to bottom, so a fallback should only reference colours
declared above it.

Usage:
    catalog = PreferenceCatalog.default()
    registry = catalog.new_registry()   # fresh is_set flags per import
    catalog.category_of("ColorsText")   # Category.COLOR
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from .errors import RegistryError
from .lines import TEXT_KEY, BACKGROUND_KEY
from .values import Category


# =============================================================================
# Fallback variants
# =============================================================================

@dataclass(frozen=True)
class NoFallback:
    """Leave the colour alone when the scheme does not set it."""

    def describe(self) -> str:
        return "-"


@dataclass(frozen=True)
class Reference:
    """Copy the current value of another colour."""
    name: str

    def describe(self) -> str:
        return f"= {self.name}"


@dataclass(frozen=True)
class Average:
    """Per-channel mean of one or more other colours."""
    names: Tuple[str, ...]

    def describe(self) -> str:
        return f"avg({', '.join(self.names)})"


@dataclass(frozen=True)
class Scaled:
    """Another colour with every channel multiplied by factor."""
    name: str
    factor: float

    def describe(self) -> str:
        return f"{self.name} * {self.factor:g}"


@dataclass(frozen=True)
class Literal:
    """A fixed packed colour value."""
    value: int

    def describe(self) -> str:
        return f"C{self.value}"


FallbackSpec = Union[NoFallback, Reference, Average, Scaled, Literal]

NONE = NoFallback()


def fallback_sources(fallback: FallbackSpec) -> Tuple[str, ...]:
    """Names of the colours a fallback reads from the store."""
    if isinstance(fallback, Reference):
        return (fallback.name,)
    if isinstance(fallback, Average):
        return tuple(fallback.names)
    if isinstance(fallback, Scaled):
        return (fallback.name,)
    return ()


# =============================================================================
# Static tables
# =============================================================================

BOOLEAN_PREFERENCES: Tuple[str, ...] = (
    "ColorsUseSystem",                              # Color: Desktop: use system colors
)

EXTRA_BOOLEAN_PREFERENCES: Tuple[str, ...] = (
    "ColorsUseMLintAutoFixBackground",              # Analyser: autofix highlight
    "Editor.VariableHighlighting.Automatic",        # Var&fn: auto highlight
    "Editor.NonlocalVariableHighlighting",          # Var&fn: with shared scope
    "EditorCodepadHighVisible",                     # Cell display: highlight cells
    "EditorCodeBlockDividers",                      # Cell display: lines between cells
    "Editorhighlight-caret-row-boolean",            # Display: highlight current line
    "EditorRightTextLineVisible",                   # Display: right-hand text limit
)

INTEGER_PREFERENCES: Tuple[str, ...] = (
    "EditorRightTextLimitLineWidth",                # Display: right-hand text limit width
)

_TEXT = TEXT_KEY
_BACKGROUND = BACKGROUND_KEY
_KEYWORDS = "Colors_M_Keywords"
_COMMENTS = "Colors_M_Comments"
_STRINGS = "Colors_M_Strings"
_UNTERMINATED = "Colors_M_UnterminatedStrings"
_SYSTEM = "Colors_M_SystemCommands"
_ERRORS = "Colors_M_Errors"
_WARNINGS = "Colors_M_Warnings"
_LINKS = "Colors_HTML_HTMLLinks"
_NONLOCAL = "Editor.NonlocalVariableHighlighting.TextColor"

COLOR_PREFERENCES: Tuple[Tuple[str, FallbackSpec], ...] = (
    # Desktop
    (_TEXT,                                             NONE),
    (_BACKGROUND,                                       NONE),
    # Syntax
    (_ERRORS,                                           Literal(-65536)),
    (_WARNINGS,                                         Literal(-27648)),
    (_KEYWORDS,                                         Reference(_TEXT)),
    (_COMMENTS,                                         Average((_TEXT, _BACKGROUND))),
    (_STRINGS,                                          Reference(_TEXT)),
    (_UNTERMINATED,                                     Reference(_ERRORS)),
    (_SYSTEM,                                           Reference(_KEYWORDS)),
    # Other
    (_LINKS,                                            Reference(_TEXT)),
    ("Color_CmdWinWarnings",                            Reference(_WARNINGS)),
    ("Color_CmdWinErrors",                              Reference(_ERRORS)),
    # Programming tools
    ("ColorsMLintAutoFixBackground",                    Reference(_BACKGROUND)),
    ("Editor.VariableHighlighting.Color",               Reference(_BACKGROUND)),
    (_NONLOCAL,                                         Reference(_TEXT)),
    ("Editorhighlight-lines",                           Reference(_BACKGROUND)),
    # Editor display
    ("Editorhighlight-caret-row-boolean-color",         Reference(_BACKGROUND)),
    ("EditorRightTextLimitLineColor",                   Reference(_TEXT)),
    # MuPAD
    ("Editor.Language.MuPAD.Color.keyword",             Reference(_KEYWORDS)),
    ("Editor.Language.MuPAD.Color.operator",            Reference(_SYSTEM)),
    ("Editor.Language.MuPAD.Color.block-comment",       Reference(_COMMENTS)),
    ("Editor.Language.MuPAD.Color.option",              Reference(_UNTERMINATED)),
    ("Editor.Language.MuPAD.Color.string",              Reference(_STRINGS)),
    ("Editor.Language.MuPAD.Color.function",            Average((_KEYWORDS, _BACKGROUND))),
    ("Editor.Language.MuPAD.Color.constant",            Reference(_NONLOCAL)),
    # TLC
    ("Editor.Language.TLC.Color.Colors_M_SystemCommands", Reference(_KEYWORDS)),
    ("Editor.Language.TLC.Color.Colors_M_Keywords",     Reference(_SYSTEM)),
    ("Editor.Language.TLC.Color.Colors_M_Comments",     Reference(_COMMENTS)),
    ("Editor.Language.TLC.Color.string-literal",        Reference(_STRINGS)),
    # VRML
    ("Editor.Language.VRML.Color.keyword",              Reference(_KEYWORDS)),
    ("Editor.Language.VRML.Color.node-keyword",         Reference(_LINKS)),
    ("Editor.Language.VRML.Color.field-keyword",        Reference(_NONLOCAL)),
    ("Editor.Language.VRML.Color.data-type-keyword",    Reference(_UNTERMINATED)),
    ("Editor.Language.VRML.Color.terminal-symbol",      Reference(_SYSTEM)),
    ("Editor.Language.VRML.Color.comment",              Reference(_COMMENTS)),
    ("Editor.Language.VRML.Color.string",               Reference(_STRINGS)),
    # C/C++
    ("Editor.Language.C.Color.keywords",                Reference(_KEYWORDS)),
    ("Editor.Language.C.Color.line-comment",            Reference(_COMMENTS)),
    ("Editor.Language.C.Color.string-literal",          Reference(_STRINGS)),
    ("Editor.Language.C.Color.preprocessor",            Reference(_SYSTEM)),
    ("Editor.Language.C.Color.char-literal",            Reference(_UNTERMINATED)),
    ("Editor.Language.C.Color.errors",                  Reference(_ERRORS)),
    # Java
    ("Editor.Language.Java.Color.keywords",             Reference(_KEYWORDS)),
    ("Editor.Language.Java.Color.line-comment",         Reference(_COMMENTS)),
    ("Editor.Language.Java.Color.string-literal",       Reference(_STRINGS)),
    ("Editor.Language.Java.Color.char-literal",         Reference(_UNTERMINATED)),
    # VHDL
    ("Editor.Language.VHDL.Color.Colors_M_Keywords",    Reference(_KEYWORDS)),
    ("Editor.Language.VHDL.Color.operator",             Reference(_SYSTEM)),
    ("Editor.Language.VHDL.Color.Colors_M_Comments",    Reference(_COMMENTS)),
    ("Editor.Language.VHDL.Color.string-literal",       Reference(_STRINGS)),
    # Verilog
    ("Editor.Language.Verilog.Color.Colors_M_Keywords", Reference(_KEYWORDS)),
    ("Editor.Language.Verilog.Color.operator",          Reference(_SYSTEM)),
    ("Editor.Language.Verilog.Color.Colors_M_Comments", Reference(_COMMENTS)),
    ("Editor.Language.Verilog.Color.string-literal",    Reference(_STRINGS)),
    # XML
    ("Editor.Language.XML.Color.error",                 Reference(_ERRORS)),
    ("Editor.Language.XML.Color.tag",                   Reference(_KEYWORDS)),
    ("Editor.Language.XML.Color.attribute",             Reference(_UNTERMINATED)),
    ("Editor.Language.XML.Color.operator",              Reference(_SYSTEM)),
    ("Editor.Language.XML.Color.value",                 Reference(_STRINGS)),
    ("Editor.Language.XML.Color.comment",               Reference(_COMMENTS)),
    ("Editor.Language.XML.Color.doctype",               Reference(_LINKS)),
    ("Editor.Language.XML.Color.ref",                   Reference(_UNTERMINATED)),
    ("Editor.Language.XML.Color.pi-content",            Reference(_LINKS)),
    ("Editor.Language.XML.Color.cdata-section",         Reference(_NONLOCAL)),
)


# =============================================================================
# Per-import registry
# =============================================================================

@dataclass
class ColorEntry:
    """A registered colour and whether this import set it directly."""
    name: str
    fallback: FallbackSpec = NONE
    is_set: bool = False


class ColorRegistry:
    """
    Colour entries for a single import run.

    Iteration follows declaration order. is_set flags start False and
    only the direct pass flips them.
    """

    def __init__(self, colors: Sequence[Tuple[str, FallbackSpec]]):
        self._entries: List[ColorEntry] = []
        self._index: Dict[str, ColorEntry] = {}
        for name, fallback in colors:
            if name in self._index:
                raise RegistryError(f"Colour registered twice: {name}")
            entry = ColorEntry(name=name, fallback=fallback)
            self._entries.append(entry)
            self._index[name] = entry

        for key in (TEXT_KEY, BACKGROUND_KEY):
            if key not in self._index:
                raise RegistryError(f"Colour registry must contain {key}")

    def __iter__(self) -> Iterator[ColorEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: str) -> bool:
        return name in self._index

    def get(self, name: str) -> Optional[ColorEntry]:
        return self._index.get(name)

    def mark_set(self, name: str) -> None:
        """Record that the scheme file set this colour directly."""
        self._index[name].is_set = True

    def reset(self) -> None:
        for entry in self._entries:
            entry.is_set = False

    @property
    def set_count(self) -> int:
        return sum(1 for entry in self._entries if entry.is_set)

    def unset(self) -> List[ColorEntry]:
        """Entries not set directly, in declaration order."""
        return [entry for entry in self._entries if not entry.is_set]


@dataclass(frozen=True)
class PreferenceCatalog:
    """
    Membership tables for every preference category.

    Immutable and shared; each import asks it for a fresh ColorRegistry.
    """
    booleans: Tuple[str, ...] = BOOLEAN_PREFERENCES
    extra_booleans: Tuple[str, ...] = EXTRA_BOOLEAN_PREFERENCES
    integers: Tuple[str, ...] = INTEGER_PREFERENCES
    colors: Tuple[Tuple[str, FallbackSpec], ...] = COLOR_PREFERENCES
    _color_names: frozenset = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        color_names = [name for name, _ in self.colors]
        boolean_names = set(self.booleans) | set(self.extra_booleans)
        tables = (boolean_names, set(self.integers), set(color_names))
        for i, table in enumerate(tables):
            for other in tables[i + 1:]:
                shared = table & other
                if shared:
                    raise RegistryError(
                        f"Preference in more than one category: {', '.join(sorted(shared))}"
                    )
        # Validates uniqueness and the text/background entries up front
        ColorRegistry(self.colors)
        object.__setattr__(self, '_color_names', frozenset(color_names))

    @classmethod
    def default(cls) -> 'PreferenceCatalog':
        return _DEFAULT_CATALOG

    def boolean_names(self, include_booleans: bool) -> Tuple[str, ...]:
        """Boolean names active for a run; none unless booleans are included."""
        if not include_booleans:
            return ()
        return tuple(self.booleans) + tuple(self.extra_booleans)

    def category_of(self, name: str, include_booleans: bool = False) -> Optional[Category]:
        """
        Category of a preference name for one run.

        Returns:
            Category, or None when the name is irrelevant to this run
        """
        if name in self._color_names:
            return Category.COLOR
        if name in self.integers:
            return Category.INTEGER
        if name in self.boolean_names(include_booleans):
            return Category.BOOLEAN
        return None

    def new_registry(self) -> ColorRegistry:
        return ColorRegistry(self.colors)


_DEFAULT_CATALOG = PreferenceCatalog()
