"""Loading risk catalogs from JSON files, with atomic hot reload."""
import json
import logging
import threading
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from healthrisk.application.ports import CatalogPort
from healthrisk.domain.catalog import default_catalog
from healthrisk.domain.models import RiskCatalog
from healthrisk.infrastructure.config import Settings


logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Raised when a catalog file is missing, unreadable or invalid."""


def load_catalog(path: Union[str, Path]) -> RiskCatalog:
    """
    Read and validate a catalog file.

    Args:
        path: JSON file in the same layout that dump_catalog writes

    Returns:
        The validated RiskCatalog

    Raises:
        CatalogError: if the file is missing, not JSON, or fails validation
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise CatalogError(f"Risk catalog not found: {path}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Risk catalog is not valid JSON: {path}: {e}") from e

    try:
        catalog = RiskCatalog.model_validate(data)
    except ValidationError as e:
        raise CatalogError(f"Risk catalog failed validation: {path}: {e}") from e

    logger.info(
        "Loaded risk catalog %s from %s (%d symptoms, %d conditions, %d combinations)",
        catalog.version,
        path,
        len(catalog.symptom_weights),
        len(catalog.condition_multipliers),
        len(catalog.combinations),
    )
    return catalog


def dump_catalog(catalog: RiskCatalog, path: Union[str, Path]) -> None:
    path = Path(path)
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(catalog.model_dump_json(indent=2))


class CatalogProvider(CatalogPort):
    """Holds the active catalog snapshot and swaps in new ones on reload."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path else None
        self._lock = threading.Lock()
        self._catalog = load_catalog(self.path) if self.path else default_catalog()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "CatalogProvider":
        settings = settings or Settings()
        return cls(settings.risk_catalog_path)

    def current(self) -> RiskCatalog:
        return self._catalog

    def reload(self) -> bool:
        """
        Re-read the catalog file and swap it in whole.

        Returns:
            True if a new snapshot is active, False if the old one was kept
        """
        if self.path is None:
            logger.info("No catalog file configured; keeping built-in catalog.")
            return False
        with self._lock:
            try:
                catalog = load_catalog(self.path)
            except CatalogError as e:
                logger.exception("Catalog reload failed; keeping version %s: %s", self._catalog.version, e)
                return False
            self._catalog = catalog
        return True
