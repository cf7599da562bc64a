"""Best-effort catalog of Flowise component nodes."""

from .catalog import CatalogEntry, CatalogScanner, CatalogWriter, ScanConfig

__version__ = "0.1.0"

__all__ = ["CatalogEntry", "CatalogScanner", "CatalogWriter", "ScanConfig", "__version__"]
