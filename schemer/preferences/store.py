"""
PreferenceStore -- The live key/value store a scheme is applied to

The importer only ever talks to the abstract PreferenceStore surface:
typed getters/setters plus a listener notification for colours. Hosts
plug in their own implementation; this module ships three:

- InMemoryPreferenceStore: dictionaries, listeners and a write counter
- PrfPreferenceStore: a name=value preference file (same format as schemes)
- JsonPreferenceStore: a JSON snapshot, serialized with orjson

Contract: every setter is idempotent. Calling it again with the same
arguments leaves the store in the same state, so a caller may safely
repeat a whole import after a transient failure.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Union

import orjson

from ..core.colors import Color
from ..core.lines import COMMENT_CHAR, iter_entries
from ..core.values import Category, TypedValue, decode, encode

ColorValue = Union[Color, int]
ColorListener = Callable[[str, Color], None]


def to_color(value: ColorValue) -> Color:
    """Accept either a Color or a packed integer."""
    if isinstance(value, Color):
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Expected Color or packed int, got {value!r}")
    return Color.from_packed(value)


class PreferenceStore(ABC):
    """Capability surface the importer needs from a host."""

    @abstractmethod
    def set_boolean_preference(self, name: str, value: bool) -> None:
        ...

    @abstractmethod
    def get_boolean_preference(self, name: str) -> Optional[bool]:
        ...

    @abstractmethod
    def set_integer_preference(self, name: str, value: int) -> None:
        ...

    @abstractmethod
    def get_integer_preference(self, name: str) -> Optional[int]:
        ...

    @abstractmethod
    def set_color_preference(self, name: str, value: ColorValue) -> None:
        ...

    @abstractmethod
    def get_color_preference(self, name: str) -> Optional[Color]:
        """Current colour for name, or None if the store has none."""
        ...

    @abstractmethod
    def notify_color_listeners(self, name: str) -> None:
        """Tell anything watching name that its colour changed."""
        ...


class InMemoryPreferenceStore(PreferenceStore):
    """
    Dictionary-backed store.

    Doubles as the reference fake for tests: `writes` counts every setter
    call and `notifications` records every listener notification in order.
    """

    def __init__(self, initial: Optional[Mapping[str, TypedValue]] = None):
        self._booleans: Dict[str, bool] = {}
        self._integers: Dict[str, int] = {}
        self._colors: Dict[str, Color] = {}
        self._listeners: Dict[str, List[ColorListener]] = {}
        self.writes = 0
        self.notifications: List[str] = []

        for name, value in (initial or {}).items():
            self._put(name, value)

    def _put(self, name: str, value: TypedValue) -> None:
        """Seed a value without counting it as a write."""
        if isinstance(value, bool):
            self._booleans[name] = value
        elif isinstance(value, Color):
            self._colors[name] = value
        elif isinstance(value, int):
            self._integers[name] = value
        else:
            raise TypeError(f"Unsupported preference value for {name}: {value!r}")

    # -------------------------------------------------------------------------
    # PreferenceStore surface
    # -------------------------------------------------------------------------

    def set_boolean_preference(self, name: str, value: bool) -> None:
        self.writes += 1
        self._booleans[name] = bool(value)

    def get_boolean_preference(self, name: str) -> Optional[bool]:
        return self._booleans.get(name)

    def set_integer_preference(self, name: str, value: int) -> None:
        self.writes += 1
        self._integers[name] = int(value)

    def get_integer_preference(self, name: str) -> Optional[int]:
        return self._integers.get(name)

    def set_color_preference(self, name: str, value: ColorValue) -> None:
        color = to_color(value)
        self.writes += 1
        self._colors[name] = color

    def get_color_preference(self, name: str) -> Optional[Color]:
        return self._colors.get(name)

    def notify_color_listeners(self, name: str) -> None:
        self.notifications.append(name)
        color = self._colors.get(name)
        if color is None:
            return
        for listener in self._listeners.get(name, []):
            listener(name, color)

    # -------------------------------------------------------------------------
    # Extras
    # -------------------------------------------------------------------------

    def add_color_listener(self, name: str, listener: ColorListener) -> None:
        """Register a callback fired by notify_color_listeners(name)."""
        self._listeners.setdefault(name, []).append(listener)

    def items(self) -> Iterator[Tuple[str, TypedValue]]:
        """All stored preferences: booleans, then integers, then colours."""
        yield from self._booleans.items()
        yield from self._integers.items()
        yield from self._colors.items()

    def __contains__(self, name: str) -> bool:
        return name in self._booleans or name in self._integers or name in self._colors

    def __len__(self) -> int:
        return len(self._booleans) + len(self._integers) + len(self._colors)


# =============================================================================
# File-backed stores
# =============================================================================

_PREFIX_CATEGORY = {
    "b": Category.BOOLEAN,
    "i": Category.INTEGER,
    "c": Category.COLOR,
}


def decode_stored(raw: str) -> Optional[TypedValue]:
    """Decode a stored value by its type prefix; None for unknown types."""
    category = _PREFIX_CATEGORY.get(raw[:1].lower())
    if category is None:
        return None
    decoded = decode(category, raw)
    return decoded.value if decoded.ok else None


class FilePreferenceStore(InMemoryPreferenceStore):
    """In-memory store loaded from and saved back to a file."""

    def __init__(self, path: Union[str, Path]):
        super().__init__()
        self.path = Path(path)
        if self.path.exists():
            self._load()

    @abstractmethod
    def _load(self) -> None:
        ...

    @abstractmethod
    def save(self) -> Path:
        """Write the store back to self.path and return it."""
        ...


class PrfPreferenceStore(FilePreferenceStore):
    """
    Store backed by a name=value preference file.

    Lines the store does not understand (comments, string-typed values,
    anything malformed) are written back untouched. Updated values replace
    their original line, keeping its trailing comment, even when the old
    value could not be decoded. New names are appended at the end.
    """

    def __init__(self, path: Union[str, Path]):
        self._lines: List[str] = []
        self._line_of: Dict[str, int] = {}
        super().__init__(path)

    def _load(self) -> None:
        self._lines = self.path.read_text(encoding='utf-8', errors='replace').splitlines()
        for entry in iter_entries(self._lines):
            # Indexed even when undecodable, so a new value replaces the line
            self._line_of[entry.name] = entry.line_number - 1
            value = decode_stored(entry.value)
            if value is not None:
                self._put(entry.name, value)

    def _replace(self, index: int, line: str) -> str:
        """New line for index, keeping the old line's trailing comment."""
        old = self._lines[index] if index < len(self._lines) else ""
        cut = old.find(COMMENT_CHAR)
        if cut < 0:
            return line
        return line + old[len(old[:cut].rstrip()):]

    def save(self) -> Path:
        lines = list(self._lines)
        for name, value in self.items():
            line = f"{name}={encode(value)}"
            index = self._line_of.get(name)
            if index is None:
                self._line_of[name] = len(lines)
                lines.append(line)
            else:
                lines[index] = self._replace(index, line)
        self._lines = lines

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("\n".join(lines) + "\n", encoding='utf-8')
        return self.path


class JsonPreferenceStore(FilePreferenceStore):
    """
    Store backed by a JSON snapshot:

        {"ColorsText": {"type": "color", "value": -1}, ...}
    """

    def _load(self) -> None:
        """
        Raises:
            ValueError: Not JSON, or not shaped like a snapshot
        """
        data = orjson.loads(self.path.read_bytes() or b"{}")
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {self.path}, got {type(data).__name__}")

        for name, item in data.items():
            if not isinstance(item, dict):
                raise ValueError(f"Bad entry for {name} in {self.path}: {item!r}")
            kind = item.get("type")
            value = item.get("value")
            try:
                if kind == Category.BOOLEAN.value:
                    self._put(name, bool(value))
                elif kind == Category.INTEGER.value:
                    self._put(name, int(value))
                elif kind == Category.COLOR.value:
                    self._put(name, Color.from_packed(int(value)))
            except TypeError as e:
                raise ValueError(f"Bad {kind} value for {name} in {self.path}: {value!r}") from e

    def to_dict(self) -> Dict[str, Dict[str, object]]:
        data: Dict[str, Dict[str, object]] = {}
        for name, value in self.items():
            if isinstance(value, bool):
                data[name] = {"type": Category.BOOLEAN.value, "value": value}
            elif isinstance(value, Color):
                data[name] = {"type": Category.COLOR.value, "value": value.packed}
            else:
                data[name] = {"type": Category.INTEGER.value, "value": value}
        return data

    def save(self) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(orjson.dumps(self.to_dict(), option=orjson.OPT_INDENT_2))
        return self.path


def open_store(path: Union[str, Path]) -> FilePreferenceStore:
    """Open a file-backed store, choosing the format by file suffix."""
    path = Path(path)
    if path.suffix.lower() == ".json":
        return JsonPreferenceStore(path)
    return PrfPreferenceStore(path)
