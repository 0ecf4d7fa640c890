"""Turn a merged result list into a single plugin or a choice set.

Decision order for :func:`resolve`:

1. No records: :class:`Empty`.
2. Exactly one record: :class:`SingleMatch`, whatever its name.
3. Some name equals the query (case-insensitive): every record whose name
   contains the query, as a :class:`CandidateSet`. Identical names are
   common across and within catalogs, so an exact hit is never picked
   silently, even when it is the only one.
4. Otherwise fuzzy scoring. A single good match whose name is not
   duplicated anywhere in the list is a :class:`SingleMatch`; several good
   matches are a :class:`CandidateSet`; no good match falls back to the
   whole list.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Sequence, Tuple, Union

from . import fuzzy
from .models import CatalogRecord, Source

# Spigot results are listed before Modrinth results.
PROVENANCE_ORDER: Dict[Source, int] = {
    Source.SPIGOT: 0,
    Source.MODRINTH: 1,
}


class SingleReason(str, Enum):
    """Why a single record was chosen."""
    ONLY_RESULT = "only_result"
    BEST_MATCH = "best_match"


class CandidateReason(str, Enum):
    """Why the user is asked to choose."""
    EXACT_NAME_COLLISION = "exact_name_collision"
    FUZZY_MULTIPLE_GOOD = "fuzzy_multiple_good"
    NO_GOOD_MATCH = "no_good_match"


@dataclass(frozen=True)
class SingleMatch:
    """Exactly one confident record."""
    record: CatalogRecord
    reason: SingleReason = SingleReason.ONLY_RESULT


@dataclass(frozen=True)
class CandidateSet:
    """Several plausible records for the user to choose from."""
    records: Tuple[CatalogRecord, ...]
    reason: CandidateReason
    exact_matches: int = 0


@dataclass(frozen=True)
class Empty:
    """The catalogs returned nothing."""


DisambiguationOutcome = Union[SingleMatch, CandidateSet, Empty]


def name_frequencies(records: Sequence[CatalogRecord]) -> Counter:
    """Count lower-cased display names across the whole list."""
    return Counter(r.name_key for r in records if r.display_name)


def by_provenance(records: Sequence[CatalogRecord]) -> list:
    """Stable sort putting Spigot records before Modrinth records."""
    return sorted(records, key=lambda r: PROVENANCE_ORDER[r.source])


def resolve(
    query: str,
    records: Sequence[CatalogRecord],
    threshold: float = fuzzy.GOOD_MATCH_THRESHOLD,
) -> DisambiguationOutcome:
    """Decide which record(s) ``query`` refers to."""
    records = tuple(records)
    if not records:
        return Empty()

    if len(records) == 1:
        return SingleMatch(records[0], SingleReason.ONLY_RESULT)

    needle = query.strip().lower()
    exact = [r for r in records if r.display_name and r.name_key == needle]
    if exact:
        containing = tuple(r for r in records if r.display_name and needle in r.name_key)
        return CandidateSet(containing, CandidateReason.EXACT_NAME_COLLISION, exact_matches=len(exact))

    kept = by_provenance([record for record, _ in fuzzy.rank(query, records, threshold)])
    frequencies = name_frequencies(records)

    if len(kept) == 1 and frequencies[kept[0].name_key] == 1:
        return SingleMatch(kept[0], SingleReason.BEST_MATCH)
    if kept:
        return CandidateSet(tuple(kept), CandidateReason.FUZZY_MULTIPLE_GOOD)
    return CandidateSet(records, CandidateReason.NO_GOOD_MATCH)
