from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Generic, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LookupCache(Generic[T]):
    """Id-keyed list fetched on first use and reused until ``invalidate``."""

    def __init__(self, name: str, loader: Callable[[], Sequence[T]], *, key: Callable[[T], int]):
        self._name = name
        self._loader = loader
        self._key = key
        self._items: Optional[list[T]] = None
        self._lock = threading.Lock()

    def items(self) -> list[T]:
        with self._lock:
            if self._items is None:
                self._items = list(self._loader())
                logger.debug("Loaded %d %s", len(self._items), self._name)
            return list(self._items)

    def by_id(self) -> Dict[int, T]:
        return {self._key(item): item for item in self.items()}

    def get(self, item_id: Optional[int]) -> Optional[T]:
        if item_id is None:
            return None
        return self.by_id().get(int(item_id))

    def invalidate(self) -> None:
        with self._lock:
            self._items = None
