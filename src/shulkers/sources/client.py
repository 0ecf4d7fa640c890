"""Shared HTTP client for plugin catalogs.

Both catalog adapters sit on top of :class:`CatalogClient`, which owns the
``requests`` session, converts transport errors into :class:`CatalogError`
and routes calls through the shared TTL cache.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List, Optional, Sequence, TypeVar
from urllib.parse import urljoin

import requests

from .. import __version__
from ..cache import TTLCache

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

USER_AGENT = f"shulkers/{__version__}"
MAX_LOOKUP_WORKERS = 8


class CatalogError(Exception):
    """Error from catalog operations."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status

    @property
    def not_found(self) -> bool:
        return self.status == 404


class CatalogClient:
    """Base client for a plugin catalog REST API.

    Subclasses set ``name`` (used as the cache key namespace and in error
    messages) and implement the catalog-specific endpoints.
    """

    name = "catalog"

    def __init__(self, base_url: str, cache: Optional[TTLCache] = None, timeout_s: float = 15.0):
        self.base_url = base_url
        self.cache = cache if cache is not None else TTLCache()
        self.timeout_s = timeout_s
        self._session = requests.Session()
        self._session.headers["Accept"] = "application/json"
        self._session.headers["User-Agent"] = USER_AGENT

    def _url(self, path: str) -> str:
        """Build full URL for API endpoint."""
        return urljoin(self.base_url.rstrip("/") + "/", path.lstrip("/"))

    def _request(self, method: str, path: str, **kwargs) -> Any:
        """Make an API request and decode the JSON body."""
        label = self.name.capitalize()
        try:
            response = self._session.request(method, self._url(path), timeout=self.timeout_s, **kwargs)
            response.raise_for_status()
            if response.content:
                return response.json()
            return None
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise CatalogError(f"{label} request failed ({status}): {path}", status=status)
        except requests.exceptions.Timeout:
            raise CatalogError(f"{label} request timed out. Try again later.")
        except requests.exceptions.ConnectionError:
            raise CatalogError(f"Cannot connect to {label} at {self.base_url}")
        except requests.exceptions.RequestException as e:
            raise CatalogError(f"{label} request error: {e}")
        except ValueError as e:
            raise CatalogError(f"{label} returned invalid JSON: {e}")

    # --- Cache helpers ---

    def _cache_key(self, operation: str, *parts: Any) -> str:
        return ":".join([self.name, operation, *(str(p) for p in parts)])

    def _cached(self, operation: str, parts: Sequence[Any], compute: Callable[[], T]) -> T:
        return self.cache.get_or_compute(self._cache_key(operation, *parts), compute)

    # --- Secondary lookups ---

    def _map_best_effort(self, func: Callable[[T], R], items: Sequence[T]) -> List[Optional[R]]:
        """Run ``func`` over ``items`` concurrently and join every call.

        Results keep the input order. A call that raises yields None
        instead of failing the whole batch.
        """
        if not items:
            return []

        def guarded(item: T) -> Optional[R]:
            try:
                return func(item)
            except CatalogError as e:
                logger.debug("%s lookup failed: %s", self.name, e)
                return None
            except Exception as e:
                logger.debug("%s lookup returned unusable data: %s", self.name, e, exc_info=True)
                return None

        workers = min(MAX_LOOKUP_WORKERS, len(items))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(guarded, items))
