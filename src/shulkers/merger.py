"""Merge raw catalog results into tagged plugin records.

The two catalogs describe plugins with different shapes. The normalizers
below resolve every field once, with an explicit fallback, so that nothing
downstream needs to know which shape a record came from.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple

from .models import UNKNOWN, CatalogRecord, Source

RawRecord = Dict[str, Any]


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _downloads(value: Any) -> int:
    try:
        return max(0, int(value or 0))
    except (TypeError, ValueError):
        return 0


def _strings(values: Any) -> Tuple[str, ...]:
    if not isinstance(values, (list, tuple)):
        return ()
    return tuple(str(v) for v in values if v is not None and str(v))


def _spigot_author(author: Any) -> str:
    if not isinstance(author, dict):
        return UNKNOWN
    if author.get("name"):
        return str(author["name"])
    if author.get("id"):
        return f"ID: {author['id']}"
    return UNKNOWN


def normalize_spigot(raw: RawRecord) -> CatalogRecord:
    """Build a record from a Spiget resource."""
    category = raw.get("category")
    category_name = category.get("name") if isinstance(category, dict) else None
    resource_id = raw.get("id")
    return CatalogRecord(
        id=str(resource_id) if resource_id is not None else "",
        display_name=_text(raw.get("name")),
        source=Source.SPIGOT,
        author=_spigot_author(raw.get("author")),
        latest_version=_text(raw.get("version_raw")) or UNKNOWN,
        downloads=_downloads(raw.get("downloads")),
        categories=(str(category_name),) if category_name else (),
        description=_text(raw.get("tag")),
        supported_versions=_strings(raw.get("testedVersions")),
    )


def normalize_modrinth(raw: RawRecord) -> CatalogRecord:
    """Build a record from a Modrinth search hit or project."""
    # Projects list version IDs under "versions" and game versions under
    # "game_versions"; search hits use "versions" for game versions.
    if "game_versions" in raw:
        supported = raw.get("game_versions")
    else:
        supported = raw.get("versions")
    return CatalogRecord(
        id=str(raw.get("project_id") or raw.get("id") or ""),
        display_name=_text(raw.get("title")),
        source=Source.MODRINTH,
        author=_text(raw.get("author")) or UNKNOWN,
        latest_version=_text(raw.get("version_raw")) or _text(raw.get("latest_version")) or UNKNOWN,
        downloads=_downloads(raw.get("downloads")),
        categories=_strings(raw.get("categories")),
        description=_text(raw.get("description")),
        supported_versions=_strings(supported),
    )


NORMALIZERS = {
    Source.SPIGOT: normalize_spigot,
    Source.MODRINTH: normalize_modrinth,
}


def normalize(raw: RawRecord, source: Source) -> CatalogRecord:
    """Normalize a single raw record from ``source``."""
    return NORMALIZERS[source](raw)


def merge(
    spigot_results: Optional[Iterable[RawRecord]],
    modrinth_results: Optional[Iterable[RawRecord]],
) -> List[CatalogRecord]:
    """Combine both catalogs' results into one tagged list.

    Spigot records come first, then Modrinth records, each in the order
    received. No network or cache access happens here.
    """
    merged = [normalize_spigot(raw) for raw in spigot_results or ()]
    merged.extend(normalize_modrinth(raw) for raw in modrinth_results or ())
    return merged
