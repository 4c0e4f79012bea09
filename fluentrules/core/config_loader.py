"""
Message catalog loader.

Loads localized message templates from YAML files into a LanguageManager.

File format:
    cultures:
      tr:
        NotEmptyValidator: "'{PropertyName}' boş olmamalıdır."
      en:
        custom_key: "Custom text"
"""

import yaml
from typing import Dict, Optional
from pathlib import Path

from fluentrules.core.base import ConfigurationError
from fluentrules.core.messages import LanguageManager
from shared.utils.logger import setup_logger, log_error

logger = setup_logger(__name__)


class CatalogLoader:
    """
    Loads message catalogs from YAML files.

    Supports:
    - Several cultures per file
    - Reloading after the file changed
    """

    def __init__(self, catalog_path: str):
        """
        Initialize catalog loader.

        Args:
            catalog_path: Path to the YAML catalog
        """
        self.catalog_path = Path(catalog_path)
        self._catalog: Optional[Dict[str, Dict[str, str]]] = None

    def load(self) -> Dict[str, Dict[str, str]]:
        """
        Load catalog from YAML file.

        Returns:
            Mapping of culture to {error code: template}

        Raises:
            ConfigurationError: If the file is missing, unparsable or
                                not shaped like a catalog
        """
        if not self.catalog_path.exists():
            raise ConfigurationError(f"Message catalog not found: {self.catalog_path}")

        try:
            with open(self.catalog_path, 'r', encoding='utf-8') as f:
                raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            log_error(logger, e, f"Failed to parse message catalog {self.catalog_path}")
            raise ConfigurationError(f"Invalid message catalog {self.catalog_path}: {e}") from e

        cultures = raw.get('cultures') if isinstance(raw, dict) else None
        if not isinstance(cultures, dict):
            raise ConfigurationError(
                f"Message catalog {self.catalog_path} must contain a 'cultures' mapping"
            )

        catalog: Dict[str, Dict[str, str]] = {}
        for culture, entries in cultures.items():
            if not isinstance(entries, dict):
                raise ConfigurationError(
                    f"Culture '{culture}' in {self.catalog_path} must map error codes to messages"
                )
            catalog[str(culture)] = {str(code): str(text) for code, text in entries.items()}

        self._catalog = catalog
        logger.info(
            f"Loaded message catalog from: {self.catalog_path} "
            f"({len(catalog)} culture(s))"
        )
        return catalog

    def load_into(self, languages: LanguageManager) -> LanguageManager:
        """
        Load the catalog and register every culture on a LanguageManager.

        Args:
            languages: Target language manager

        Returns:
            The same language manager
        """
        catalog = self._catalog if self._catalog is not None else self.load()
        for culture, entries in catalog.items():
            languages.add_translations(culture, entries)
        return languages

    def reload(self) -> Dict[str, Dict[str, str]]:
        """
        Reload catalog from file.

        Returns:
            Updated catalog
        """
        self._catalog = None
        return self.load()


def load_language_manager(catalog_path: str) -> LanguageManager:
    """
    Convenience function to build a LanguageManager from a YAML file.

    Args:
        catalog_path: Path to catalog file

    Returns:
        Populated LanguageManager
    """
    return CatalogLoader(catalog_path).load_into(LanguageManager())
