"""Spigot catalog adapter (Spiget API)."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from ..models import UNKNOWN
from .client import CatalogClient, CatalogError

logger = logging.getLogger(__name__)

SPIGET_URL = "https://api.spiget.org/v2"


def format_version_name(name: Any) -> Optional[str]:
    """Spiget reports some versions as a bare build number; show those as N.0."""
    if name is None or name == "":
        return None
    text = str(name).strip()
    if text.isdigit():
        return f"{text}.0"
    return text or None


class SpigotClient(CatalogClient):
    """Search and look up SpigotMC resources.

    Returned resources are plain dicts in the Spiget shape, each a copy
    carrying an extra ``version_raw`` key with the latest version name.
    """

    name = "spigot"

    def __init__(self, base_url: str = SPIGET_URL, **kwargs):
        super().__init__(base_url, **kwargs)

    def search(self, query: str, limit: int = 10) -> List[Dict[str, Any]]:
        """Search resources by name, most downloaded first."""

        def fetch() -> List[Dict[str, Any]]:
            try:
                data = self._request(
                    "GET",
                    f"/search/resources/{quote(query, safe='')}",
                    params={"field": "name", "size": limit, "sort": "-downloads"},
                )
            except CatalogError as e:
                if e.not_found:
                    return []
                raise
            return data if isinstance(data, list) else []

        resources = self._cached("search", (query, limit), fetch)
        return self._with_versions(resources)

    def get_resource(self, resource_id: int) -> Optional[Dict[str, Any]]:
        """Get a resource by its numeric ID, or None if it does not exist."""

        def fetch() -> Optional[Dict[str, Any]]:
            try:
                return self._request("GET", f"/resources/{resource_id}")
            except CatalogError as e:
                if e.not_found:
                    return None
                raise

        resource = self._cached("resource", (resource_id,), fetch)
        if not resource:
            return None
        return self._with_versions([resource])[0]

    def latest_version(self, resource_id: Any) -> Optional[str]:
        """Name of the latest version of a resource."""
        data = self._cached(
            "version",
            (resource_id,),
            lambda: self._request("GET", f"/resources/{resource_id}/versions/latest"),
        )
        if not isinstance(data, dict):
            return None
        return format_version_name(data.get("name"))

    def _with_versions(self, resources: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        items = [dict(r) for r in resources]
        versions = self._map_best_effort(lambda r: self.latest_version(r.get("id")), items)
        for item, version in zip(items, versions):
            if version is None:
                logger.debug("No version for Spigot resource %s", item.get("id"))
            item["version_raw"] = version or UNKNOWN
        return items
