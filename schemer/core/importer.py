"""
Importer -- Applies a colour scheme to a preference store

Two sequential phases per import:

  Phase 1 (DirectApplier)
    Every recognised name=value entry is decoded and written to the store.
    Malformed values are skipped with a warning. If no colour at all was
    written the import fails with NoColorsFound.

  Phase 2 (FallbackResolver)
    Every registered colour the file did not set gets a value derived from
    its fallback: a reference, an average, a scaled copy or a literal.

Phase 2 is a single pass in registry order. A fallback reads whatever the
store holds at that moment, which may be a value from this import, one
computed earlier in the same pass, or something left over from before.
There is no dependency ordering and no second pass.

Nothing is rolled back on failure. Writes already made stay made, so every
store setter must be safe to repeat.

Usage:
    store = InMemoryPreferenceStore()
    result = import_scheme("monokai.prf", store, include_booleans=True)
    print(result.colors_set, result.colors_derived)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List, Optional, Union

from .colors import Color
from .errors import BadFallbackShape, NoColorsFound
from .lines import RawEntry, check_preconditions, iter_entries, read_scheme
from .registry import (
    Average,
    ColorEntry,
    ColorRegistry,
    Literal,
    NoFallback,
    PreferenceCatalog,
    Reference,
    Scaled,
)
from .values import Category, ParseWarning, WarningKind, decode

if TYPE_CHECKING:
    from ..preferences.store import PreferenceStore

logger = logging.getLogger(__name__)


class MissingSource(Exception):
    """A fallback source colour has no value in the store."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)


@dataclass
class ImportResult:
    """What an import run did to the store."""
    source: Optional[str] = None
    include_booleans: bool = False
    booleans_set: List[str] = field(default_factory=list)
    integers_set: List[str] = field(default_factory=list)
    colors_set: List[str] = field(default_factory=list)
    colors_derived: List[str] = field(default_factory=list)
    colors_skipped: List[str] = field(default_factory=list)
    warnings: List[ParseWarning] = field(default_factory=list)

    @property
    def total_written(self) -> int:
        return (len(self.booleans_set) + len(self.integers_set)
                + len(self.colors_set) + len(self.colors_derived))

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "include_booleans": self.include_booleans,
            "booleans_set": list(self.booleans_set),
            "integers_set": list(self.integers_set),
            "colors_set": list(self.colors_set),
            "colors_derived": list(self.colors_derived),
            "colors_skipped": list(self.colors_skipped),
            "warnings": [str(w) for w in self.warnings],
        }


# =============================================================================
# Phase 1
# =============================================================================

class DirectApplier:
    """Writes every recognised, well-formed entry straight to the store."""

    def __init__(self, store: 'PreferenceStore', registry: ColorRegistry,
                 catalog: PreferenceCatalog, include_booleans: bool = False):
        self.store = store
        self.registry = registry
        self.catalog = catalog
        self.include_booleans = include_booleans

    def apply(self, entry: RawEntry, result: ImportResult) -> bool:
        """
        Apply one entry.

        Returns:
            True if the store was written
        """
        category = self.catalog.category_of(entry.name, self.include_booleans)
        if category is None:
            # Irrelevant preference; a full preference dump is full of these
            return False

        decoded = decode(category, entry.value, entry.name, entry.line_number)
        if not decoded.ok:
            logger.warning("%s", decoded.warning)
            result.warnings.append(decoded.warning)
            return False

        if category == Category.BOOLEAN:
            self.store.set_boolean_preference(entry.name, decoded.value)
            result.booleans_set.append(entry.name)
            logger.debug("Set bool %s for %s", decoded.value, entry.name)
        elif category == Category.INTEGER:
            self.store.set_integer_preference(entry.name, decoded.value)
            result.integers_set.append(entry.name)
            logger.debug("Set integer %d for %s", decoded.value, entry.name)
        else:
            self.store.set_color_preference(entry.name, decoded.value)
            self.store.notify_color_listeners(entry.name)
            self.registry.mark_set(entry.name)
            result.colors_set.append(entry.name)
            logger.debug("Set color %s for %s", decoded.value, entry.name)

        return True

    def apply_all(self, entries: Iterable[RawEntry], result: ImportResult,
                  source: Optional[str] = None) -> None:
        """
        Apply every entry, then insist that at least one colour was set.

        Raises:
            NoColorsFound: No colour entry made it into the store
        """
        for entry in entries:
            self.apply(entry, result)

        if self.registry.set_count == 0:
            raise NoColorsFound(source)


# =============================================================================
# Phase 2
# =============================================================================

class FallbackResolver:
    """Fills colours the scheme left unset, in one ordered pass."""

    def __init__(self, store: 'PreferenceStore', registry: ColorRegistry):
        self.store = store
        self.registry = registry

    def _current(self, name: str) -> Optional[Color]:
        return self.store.get_color_preference(name)

    def compute(self, entry: ColorEntry) -> Optional[Color]:
        """
        Derive a value for one unset entry from its fallback.

        Returns:
            The colour to write, or None to leave the entry unset

        Raises:
            BadFallbackShape: Fallback is not a known variant
            MissingSource: A source colour has no value in the store
        """
        fallback = entry.fallback

        if isinstance(fallback, NoFallback):
            return None

        if isinstance(fallback, Literal):
            return Color.from_packed(fallback.value)

        if isinstance(fallback, Reference):
            return self._require(fallback.name)

        if isinstance(fallback, Average) and fallback.names:
            return Color.average(self._require(name) for name in fallback.names)

        if isinstance(fallback, Scaled):
            return self._require(fallback.name).scaled(fallback.factor)

        raise BadFallbackShape(entry.name, fallback)

    def _require(self, name: str) -> Color:
        color = self._current(name)
        if color is None:
            raise MissingSource(name)
        return color

    def resolve(self, result: ImportResult) -> None:
        """
        Walk unset colours in registry order and write their fallbacks.

        Raises:
            BadFallbackShape: Aborts the pass; earlier writes remain
        """
        for entry in self.registry:
            if entry.is_set:
                continue

            try:
                color = self.compute(entry)
            except MissingSource as e:
                warning = ParseWarning(
                    kind=WarningKind.UNRESOLVED_FALLBACK,
                    name=entry.name,
                    value=f"{e.name} has no value"
                )
                logger.warning("%s", warning)
                result.warnings.append(warning)
                result.colors_skipped.append(entry.name)
                continue

            if color is None:
                result.colors_skipped.append(entry.name)
                continue

            self.store.set_color_preference(entry.name, color)
            self.store.notify_color_listeners(entry.name)
            result.colors_derived.append(entry.name)
            logger.debug("Derived color %s for %s (%s)",
                         color, entry.name, entry.fallback.describe())


# =============================================================================
# Orchestration
# =============================================================================

class SchemeImporter:
    """
    Runs both phases against a store.

    Stateless between calls: each import builds a fresh ColorRegistry from
    the catalog, so is_set flags never leak from one run into the next.
    """

    def __init__(self, store: 'PreferenceStore',
                 catalog: Optional[PreferenceCatalog] = None,
                 include_booleans: bool = False):
        self.store = store
        self.catalog = catalog or PreferenceCatalog.default()
        self.include_booleans = include_booleans

    def import_text(self, text: str, source: Optional[str] = None) -> ImportResult:
        """
        Import a scheme from its full text.

        Args:
            text: Scheme file contents
            source: Name used in messages (usually the file path)

        Returns:
            ImportResult describing every write and warning

        Raises:
            PreconditionError: Before any write
            NoColorsFound: After phase 1, phase 2 skipped
            BadFallbackShape: During phase 2
        """
        check_preconditions(text, source)

        registry = self.catalog.new_registry()
        result = ImportResult(source=source, include_booleans=self.include_booleans)

        applier = DirectApplier(self.store, registry, self.catalog, self.include_booleans)
        applier.apply_all(iter_entries(text.splitlines()), result, source)

        resolver = FallbackResolver(self.store, registry)
        resolver.resolve(result)

        mode = "WITH" if self.include_booleans else "WITHOUT"
        logger.info("Imported color scheme %s boolean options from %s", mode, source or "<text>")
        return result

    def import_file(self, path: Union[str, Path]) -> ImportResult:
        """
        Import a scheme file.

        Raises:
            SchemeFileError: File could not be read
        """
        text = read_scheme(Path(path))
        return self.import_text(text, source=str(path))


def import_scheme(path: Union[str, Path], store: 'PreferenceStore',
                  include_booleans: bool = False,
                  catalog: Optional[PreferenceCatalog] = None) -> ImportResult:
    """Convenience wrapper: import one scheme file into store."""
    importer = SchemeImporter(store, catalog=catalog, include_booleans=include_booleans)
    return importer.import_file(path)
