"""Modrinth catalog adapter."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from .client import CatalogClient, CatalogError

logger = logging.getLogger(__name__)

MODRINTH_URL = "https://api.modrinth.com/v2"

# Only projects that run on Bukkit-family servers.
SERVER_FACETS = [["categories:paper", "categories:spigot"]]


def clamp_limit(limit: int) -> int:
    """Modrinth accepts between 1 and 100 hits per page."""
    return max(1, min(100, limit))


class ModrinthClient(CatalogClient):
    """Search and look up Modrinth projects.

    Search hits are returned as dict copies in the Modrinth shape with an
    extra ``version_raw`` key holding the latest version number.
    """

    name = "modrinth"

    def __init__(self, base_url: str = MODRINTH_URL, **kwargs):
        super().__init__(base_url, **kwargs)

    def search(self, query: str, limit: int = 10, fetch_versions: bool = True) -> List[Dict[str, Any]]:
        """Search server plugins, most downloaded first.

        Hits only carry the ID of their latest version. With ``fetch_versions``
        each ID is resolved to a version number before returning; a failed
        lookup keeps the ID.
        """
        size = clamp_limit(limit)

        def fetch() -> List[Dict[str, Any]]:
            data = self._request(
                "GET",
                "/search",
                params={
                    "query": query,
                    "limit": size,
                    "index": "downloads",
                    "facets": json.dumps(SERVER_FACETS),
                },
            )
            if not isinstance(data, dict):
                return []
            return data.get("hits") or []

        hits = [dict(hit) for hit in self._cached("search", (query, size), fetch)]
        for hit in hits:
            if not hit.get("version_raw") and hit.get("latest_version"):
                hit["version_raw"] = hit["latest_version"]

        if fetch_versions:
            numbers = self._map_best_effort(lambda h: self.version_number(h.get("latest_version")), hits)
            for hit, number in zip(hits, numbers):
                if number:
                    hit["version_raw"] = number

        return hits

    def get_project(self, project_id: str) -> Optional[Dict[str, Any]]:
        """Get a project by ID or slug, or None if it does not exist."""

        def fetch() -> Optional[Dict[str, Any]]:
            try:
                return self._request("GET", f"/project/{project_id}")
            except CatalogError as e:
                if e.not_found:
                    return None
                raise

        project = self._cached("project", (project_id,), fetch)
        if not project:
            return None

        project = dict(project)
        version_ids = project.get("versions") or []
        if version_ids:
            number = self._map_best_effort(self.version_number, [version_ids[-1]])[0]
            if number:
                project["version_raw"] = number
        return project

    def version_number(self, version_id: Optional[str]) -> Optional[str]:
        """Resolve a version ID to its human-readable version number."""
        if not version_id:
            return None
        data = self._cached("version", (version_id,), lambda: self._request("GET", f"/version/{version_id}"))
        if not isinstance(data, dict):
            return None
        return data.get("version_number")
