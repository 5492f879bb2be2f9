"""Fatal pipeline errors, collected for callers that only need to catch them."""

from setloader.config import ConfigurationError
from setloader.services.scryfall_client import CatalogError
from setloader.services.uploader import UploadError

__all__ = ["CatalogError", "ConfigurationError", "UploadError"]
