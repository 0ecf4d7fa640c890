"""
Pytest configuration and shared fixtures.
"""

from typing import Any, Dict

import pytest

from shulkers.models import CatalogRecord, Source


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_record():
    """Factory for CatalogRecord values with sensible defaults."""

    def _make(name: str, source: Source = Source.SPIGOT, **kwargs) -> CatalogRecord:
        record_id = kwargs.pop("id", name.lower() or "blank")
        return CatalogRecord(id=record_id, display_name=name, source=source, **kwargs)

    return _make


@pytest.fixture
def spigot_resource() -> Dict[str, Any]:
    """Spiget search result for EssentialsX."""
    return {
        "id": 9089,
        "name": "EssentialsX",
        "tag": "The essential plugin suite for Minecraft servers.",
        "author": {"id": 26488, "name": "md_5"},
        "downloads": 2500000,
        "category": {"id": 4, "name": "Tools and Utilities"},
        "testedVersions": ["1.19", "1.20"],
        "version": {"id": 512345},
    }


@pytest.fixture
def modrinth_hit() -> Dict[str, Any]:
    """Modrinth search hit for LuckPerms."""
    return {
        "project_id": "Vebnzrzj",
        "slug": "luckperms",
        "title": "LuckPerms",
        "description": "A permissions plugin for Minecraft servers.",
        "author": "Luck",
        "downloads": 1200000,
        "categories": ["management", "utility"],
        "versions": ["1.20.1", "1.20.4"],
        "latest_version": "ver12345",
    }
