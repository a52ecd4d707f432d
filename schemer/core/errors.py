"""
Errors -- Fatal outcomes of a scheme import

Every fatal condition has its own exception type so callers can map them
to whatever status representation they use (exit codes, dialogs, ...).

Taxonomy:
- Precondition errors: raised before the store is touched
- NoColorsFound: raised after phase 1 when nothing was applied
- BadFallbackShape: corrupt static registry, aborts phase 2
- RegistryError: registry tables violate their invariants at build time

Per-entry decode problems are NOT errors; see values.ParseWarning.
"""

from typing import Optional


class SchemerError(Exception):
    """Base class for all fatal import errors."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.message = message
        self.source = source
        if source:
            message = f"{message}:\n{source}"
        super().__init__(message)


class SchemeFileError(SchemerError):
    """The scheme file could not be opened or read."""


# =============================================================================
# Precondition errors (nothing written yet)
# =============================================================================

class PreconditionError(SchemerError):
    """The scheme file failed the sanity scan run before any mutation."""


class MissingColorKey(PreconditionError):
    """ColorsText or ColorsBackground is not declared in the file."""

    def __init__(self, key: str, source: Optional[str] = None):
        self.key = key
        label = "Text" if key == "ColorsText" else "Background"
        super().__init__(f"{label} colour not present in colorscheme file", source)


class DuplicateColorKey(PreconditionError):
    """ColorsText or ColorsBackground is declared more than once."""

    def __init__(self, key: str, count: int, source: Optional[str] = None):
        self.key = key
        self.count = count
        label = "Text" if key == "ColorsText" else "Background"
        super().__init__(
            f"{label} colour defined multiple times ({count}) in colorscheme file",
            source
        )


class IdenticalTextBackground(PreconditionError):
    """Main text and background colours share the same raw value."""

    def __init__(self, value: str, source: Optional[str] = None):
        self.value = value
        super().__init__(
            f"Main text and background colours are the same ({value}) in this file",
            source
        )


# =============================================================================
# Run errors
# =============================================================================

class NoColorsFound(SchemerError):
    """Phase 1 finished without setting a single colour."""

    def __init__(self, source: Optional[str] = None):
        super().__init__("Did not find any colour settings in file", source)


class BadFallbackShape(SchemerError):
    """A registered fallback is not one of the known variants."""

    def __init__(self, name: str, fallback: object):
        self.name = name
        self.fallback = fallback
        super().__init__(f"Bad fallback for {name}: {fallback!r}")


class RegistryError(SchemerError):
    """Colour registry tables are inconsistent."""
