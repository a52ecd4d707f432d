"""
Preferences -- Stores a scheme is applied to

- PreferenceStore: abstract capability surface used by the importer
- InMemoryPreferenceStore: dictionaries (also the test fake)
- PrfPreferenceStore / JsonPreferenceStore: file-backed stores
"""

from .store import (
    PreferenceStore,
    InMemoryPreferenceStore,
    FilePreferenceStore,
    PrfPreferenceStore,
    JsonPreferenceStore,
    open_store,
)

__all__ = [
    "PreferenceStore", "InMemoryPreferenceStore", "FilePreferenceStore",
    "PrfPreferenceStore", "JsonPreferenceStore", "open_store",
]
