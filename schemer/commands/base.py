"""
BaseCommand -- What every command handler can reach

Handlers hold the SchemerCLI instance and read shared state (config,
catalog, symbols) through it rather than building their own.
"""

from typing import TYPE_CHECKING

from ..presentation.template import OutputTemplate

if TYPE_CHECKING:
    from ..cli import SchemerCLI
    from ..config import Config, ConfigManager
    from ..core.registry import PreferenceCatalog
    from ..presentation.symbols import SymbolSet


EXIT_OK = 0
EXIT_FAILED = 1       # Import refused or aborted
EXIT_UNREADABLE = 2   # Scheme or preference file could not be read


class BaseCommand:

    def __init__(self, cli: 'SchemerCLI'):
        self._cli = cli

    @property
    def config(self) -> 'Config':
        return self._cli.config

    @property
    def config_manager(self) -> 'ConfigManager':
        return self._cli.config_manager

    @property
    def catalog(self) -> 'PreferenceCatalog':
        """Preference tables the importer classifies against."""
        return self._cli.catalog

    @property
    def symbols(self) -> 'SymbolSet':
        return self._cli.symbols

    def template(self) -> OutputTemplate:
        """Empty report using the configured symbols."""
        return OutputTemplate(symbols=self.symbols)
