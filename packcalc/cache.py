"""In-memory cache for packing results."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Sequence

from cachetools import LFUCache

from packcalc.calculator import Packing

logger = logging.getLogger(__name__)

DEFAULT_MAXSIZE = 100 << 20


def cache_key(order_size: int, packs: Iterable[int]) -> str:
    """Build a key that does not depend on the order of the pack sizes."""
    parts = [f"{order_size}:"]
    parts.extend(f":{pack}" for pack in sorted(packs))
    return "".join(parts)


class PackCache:
    """Thread-safe cache of packing results keyed by order size and pack sizes."""

    def __init__(self, maxsize: int = DEFAULT_MAXSIZE) -> None:
        self._store: LFUCache[str, tuple[Packing, ...]] = LFUCache(maxsize=maxsize)
        self._lock = threading.Lock()

    def get(self, order_size: int, *args: int) -> list[Packing] | None:
        """Return the cached packing, or None when absent or the input is invalid."""
        if order_size <= 0 or not args:
            return None

        key = cache_key(order_size, args)
        with self._lock:
            value = self._store.get(key)

        if value is None:
            logger.info("cache miss: orderSize=%d packs=%s", order_size, list(args))
            return None

        logger.info("cache hit: orderSize=%d packs=%s", order_size, list(args))
        return list(value)

    def set(
        self, order_size: int, packs: Sequence[int], result: Iterable[Packing]
    ) -> None:
        """Store a packing result; invalid keys are ignored."""
        if order_size <= 0 or not packs:
            return

        key = cache_key(order_size, packs)
        try:
            with self._lock:
                self._store[key] = tuple(result)
        except ValueError:
            logger.warning(
                "failed to cache the packing: orderSize=%d packs=%s",
                order_size,
                list(packs),
            )