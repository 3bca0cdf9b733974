"""Service clients for the hotel catalog endpoint."""

from .catalog_client import CatalogClient

__all__ = [
    "CatalogClient",
]
