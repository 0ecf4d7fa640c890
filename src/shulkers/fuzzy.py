"""Approximate name matching for plugin records.

Scores are distances on a 0 (best) to 1 (worst) scale. A record only
qualifies when its name is close to the query. Author and description
matches then refine the score as a weighted geometric mean, with the
plugin name dominating.
"""

from __future__ import annotations

import sys
from typing import Dict, Iterable, List, Optional, Tuple

from thefuzz import fuzz

from .models import UNKNOWN, CatalogRecord, Source

GOOD_MATCH_THRESHOLD = 0.2
FIELD_CUTOFF = 0.3

FIELD_WEIGHTS: Dict[str, float] = {
    "display_name": 3.0,
    "author": 1.0,
    "description": 0.5,
}

# Secondary fields searched per catalog. The Spigot tag line is shown in
# the detail view but never searched.
SECONDARY_FIELDS: Dict[Source, Tuple[str, ...]] = {
    Source.SPIGOT: ("author",),
    Source.MODRINTH: ("author", "description"),
}

_EPSILON = sys.float_info.epsilon


def field_distance(query: str, value: str) -> float:
    """Case-insensitive distance between ``query`` and one field value."""
    needle = query.strip().lower()
    haystack = value.strip().lower()
    if not needle or not haystack:
        return 1.0
    if len(needle) <= len(haystack):
        similarity = fuzz.partial_ratio(needle, haystack)
    else:
        similarity = fuzz.ratio(needle, haystack)
    return 1.0 - similarity / 100.0


def score(query: str, record: CatalogRecord) -> Optional[float]:
    """Weighted distance of ``record`` from ``query``.

    Returns None unless the display name is within FIELD_CUTOFF of the query.
    """
    if not record.display_name:
        return None
    name_distance = field_distance(query, record.display_name)
    if name_distance > FIELD_CUTOFF:
        return None

    matched = [(name_distance, FIELD_WEIGHTS["display_name"])]
    for attr in SECONDARY_FIELDS.get(record.source, ()):
        value = getattr(record, attr)
        if not value or value == UNKNOWN:
            continue
        distance = field_distance(query, value)
        if distance <= FIELD_CUTOFF:
            matched.append((distance, FIELD_WEIGHTS[attr]))

    total_weight = sum(weight for _, weight in matched)
    total = 1.0
    for distance, weight in matched:
        total *= max(distance, _EPSILON) ** (weight / total_weight)
    return total


def rank(
    query: str,
    records: Iterable[CatalogRecord],
    threshold: float = GOOD_MATCH_THRESHOLD,
) -> List[Tuple[CatalogRecord, float]]:
    """Records scoring below ``threshold``, best first.

    Ties keep their input order.
    """
    scored = []
    for index, record in enumerate(records):
        distance = score(query, record)
        if distance is not None and distance < threshold:
            scored.append((distance, index, record))
    scored.sort(key=lambda item: (item[0], item[1]))
    return [(record, distance) for distance, _, record in scored]
