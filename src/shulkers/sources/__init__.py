"""Catalog adapters for Shulkers.

Each adapter talks to one external plugin catalog and returns raw records
in that catalog's own shape:
- Spigot (Spiget API): resources with ``name``, ``author{id,name}``, ``category``
- Modrinth: projects with ``title``, ``author``, ``categories``, ``versions``

Normalization into :class:`~shulkers.models.CatalogRecord` happens in
:mod:`shulkers.merger`.
"""

from .client import CatalogClient, CatalogError
from .modrinth import ModrinthClient
from .spigot import SpigotClient

__all__ = [
    "CatalogClient",
    "CatalogError",
    "ModrinthClient",
    "SpigotClient",
]
