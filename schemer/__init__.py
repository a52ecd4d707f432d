"""
Schemer -- Colour scheme import for editor preferences

Replaces an editor's whole syntax-highlighting palette in one operation.
Colours the scheme leaves out are derived from the ones it sets.

Usage:
    schemer import monokai.prf --target ~/.matlab/matlab.prf
    schemer check monokai.prf
    schemer colors
    schemer config --set import.include_booleans=true
"""

__version__ = "0.1.0"

from .core import (
    Color,
    SchemerError,
    PreferenceCatalog,
    ImportResult,
    SchemeImporter,
    import_scheme,
)
from .preferences import PreferenceStore, InMemoryPreferenceStore, open_store
from .config import Config, ConfigManager, get_config

__all__ = [
    "__version__",
    "Color", "SchemerError", "PreferenceCatalog",
    "ImportResult", "SchemeImporter", "import_scheme",
    "PreferenceStore", "InMemoryPreferenceStore", "open_store",
    "Config", "ConfigManager", "get_config",
]
