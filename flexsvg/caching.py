import threading
import weakref
from collections import OrderedDict
from typing import Any, Callable, Dict, Generic, Optional, Tuple, TypeVar

from flexsvg.utils.exceptions import ValidationError

V = TypeVar("V")


class LRUCache:
    """Fixed-capacity LRU cache to prevent unbounded memory growth."""

    def __init__(self, max_size: int = 20):
        if not isinstance(max_size, int) or max_size < 1:
            raise ValidationError("LRU cache max_size must be a positive integer.")
        self.max_size = max_size
        self.cache = OrderedDict()

    def get(self, key, default=None):
        if key in self.cache:
            # Move to end (most recently used)
            self.cache.move_to_end(key)
            return self.cache[key]
        return default

    def put(self, key, value):
        if key in self.cache:
            self.cache.move_to_end(key)
        elif len(self.cache) >= self.max_size:
            # Remove least recently used (first item)
            self.cache.popitem(last=False)
        self.cache[key] = value

    def clear(self):
        self.cache.clear()

    def __contains__(self, key):
        return key in self.cache

    def __delitem__(self, key):
        if key in self.cache:
            del self.cache[key]

    def __len__(self):
        return len(self.cache)


class IdentityCache(Generic[V]):
    """
    Side-table keyed by object identity, not equality.

    Owners that support weak references are tracked weakly and their entry
    disappears with them. Other owners (plain lists) go into a bounded LRU
    that stores the owner next to its value, so an id() can't be reused
    while its entry lives and at most `max_size` such owners are retained.
    """

    def __init__(self, max_size: int = 20):
        self._entries: Dict[int, Tuple[weakref.ref, V]] = {}
        self._strong = LRUCache(max_size=max_size)
        self._lock = threading.RLock()

    def _discard(self, key: int, ref):
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry[0] is ref:
                del self._entries[key]

    def get(self, owner) -> Optional[V]:
        key = id(owner)
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry[0]() is owner:
                return entry[1]
            entry = self._strong.get(key)
            if entry is not None and entry[0] is owner:
                return entry[1]
            return None

    def get_or_create(self, owner, factory: Callable[[Any], V]) -> V:
        with self._lock:
            value = self.get(owner)
            if value is None:
                value = factory(owner)
                key = id(owner)
                try:
                    ref = weakref.ref(owner, lambda _ref: self._discard(key, _ref))
                except TypeError:
                    self._strong.put(key, (owner, value))
                else:
                    self._entries[key] = (ref, value)
            return value

    def forget(self, owner) -> bool:
        key = id(owner)
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry[0]() is owner:
                del self._entries[key]
                return True
            entry = self._strong.get(key)
            if entry is not None and entry[0] is owner:
                del self._strong[key]
                return True
            return False

    def prune(self) -> int:
        """Drops entries whose weakly-held owner is gone. Returns how many were dropped."""
        with self._lock:
            dead = [key for key, (ref, _) in self._entries.items() if ref() is None]
            for key in dead:
                del self._entries[key]
            return len(dead)

    def clear(self):
        with self._lock:
            self._entries.clear()
            self._strong.clear()

    def __len__(self):
        return len(self._entries) + len(self._strong)
