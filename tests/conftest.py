"""
Shared pytest fixtures for the Schemer test suite.

Usage in tests:
    def test_something(schemer_factory):
        path = schemer_factory.write_scheme()
        schemer_factory.importer().import_file(path)
"""

import pytest

from schemer.config import ConfigManager
from tests.factories import SchemerTestFactory


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """
    Keep tests away from the real user config and environment.

    Every test gets its own user config location and ASCII output.
    """
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_FILE",
                        tmp_path / "home" / ".schemer" / "config.yaml")
    for var in ("SCHEMER_INCLUDE_BOOLEANS", "SCHEMER_TARGET", "SCHEMER_PROJECT_PATH"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("SCHEMER_ASCII_ONLY", "1")


@pytest.fixture
def schemer_factory(tmp_path):
    """Fresh factory with an empty in-memory store."""
    return SchemerTestFactory(tmp_path)


@pytest.fixture
def store(schemer_factory):
    """The factory's in-memory store."""
    return schemer_factory.store
