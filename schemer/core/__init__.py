"""
Core -- Preference resolution engine

Leaves first:
- colors: packed RGB encoding
- values: typed decoding of raw preference values
- lines: precondition scan and line parser
- registry: preference tables and colour fallbacks
- importer: direct pass + fallback pass
"""

from .colors import Color
from .errors import (
    SchemerError,
    SchemeFileError,
    PreconditionError,
    MissingColorKey,
    DuplicateColorKey,
    IdenticalTextBackground,
    NoColorsFound,
    BadFallbackShape,
    RegistryError,
)
from .values import Category, WarningKind, ParseWarning, DecodeResult, decode, encode
from .lines import RawEntry, iter_entries, check_preconditions, read_scheme
from .registry import (
    NoFallback,
    Reference,
    Average,
    Scaled,
    Literal,
    ColorEntry,
    ColorRegistry,
    PreferenceCatalog,
)
from .importer import (
    ImportResult,
    DirectApplier,
    FallbackResolver,
    SchemeImporter,
    import_scheme,
)

__all__ = [
    "Color",
    "SchemerError", "SchemeFileError", "PreconditionError",
    "MissingColorKey", "DuplicateColorKey", "IdenticalTextBackground",
    "NoColorsFound", "BadFallbackShape", "RegistryError",
    "Category", "WarningKind", "ParseWarning", "DecodeResult", "decode", "encode",
    "RawEntry", "iter_entries", "check_preconditions", "read_scheme",
    "NoFallback", "Reference", "Average", "Scaled", "Literal",
    "ColorEntry", "ColorRegistry", "PreferenceCatalog",
    "ImportResult", "DirectApplier", "FallbackResolver", "SchemeImporter", "import_scheme",
]
