"""Plugin record models.

Defines the normalized plugin record shared by both catalogs and the
source (provenance) tag attached to it when results are merged.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

UNKNOWN = "Unknown"


class Source(str, Enum):
    """Plugin catalogs."""
    SPIGOT = "Spigot"       # Spiget API (SpigotMC resources)
    MODRINTH = "Modrinth"   # Modrinth projects

    @classmethod
    def from_option(cls, value: str) -> Optional["Source"]:
        """Map a CLI --source value to a catalog.

        Returns None for "all". Raises ValueError for unknown names.
        """
        normalized = (value or "").strip().lower()
        if normalized == "all":
            return None
        for source in cls:
            if source.value.lower() == normalized:
                return source
        raise ValueError(f"Invalid source '{value}'")


SOURCE_OPTIONS = ("all", "spigot", "modrinth")


@dataclass(frozen=True)
class CatalogRecord:
    """Normalized view of a plugin entry from either catalog.

    ``id`` is only unique within its own catalog. ``source`` is assigned
    once when results are merged and cannot change afterwards.
    """
    id: str
    display_name: str
    source: Source
    author: str = UNKNOWN
    latest_version: str = UNKNOWN
    downloads: int = 0
    categories: Tuple[str, ...] = ()
    description: str = ""
    supported_versions: Tuple[str, ...] = ()

    @property
    def name_key(self) -> str:
        """Lower-cased display name used for duplicate detection."""
        return self.display_name.lower()
