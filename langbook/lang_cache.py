"""
In-memory caches used by Translator
- LangCache: normalized language code -> loaded LangFile
- OnceCache: a value computed at most once until invalidated
"""

import threading
from typing import Callable, Dict, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


class LangCache(Generic[T]):
    """
    Thread-safe key/value cache
    - Reads never take the lock
    - Writes and deletes are serialized
    """

    def __init__(self):
        self._cache: Dict[str, T] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[T]:
        return self._cache.get(key)

    def set(self, key: str, value: T) -> None:
        with self._lock:
            self._cache[key] = value

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._cache.pop(key, None) is not None

    def clear(self) -> int:
        """Drop every entry, returns how many were removed"""
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
            return count


class OnceCache(Generic[T]):
    """Get-or-compute-once with an invalidate-all escape hatch"""

    def __init__(self):
        # (value,) once computed, swapped atomically
        self._result: Optional[Tuple[T]] = None
        self._lock = threading.Lock()

    def get_or_compute(self, compute: Callable[[], T]) -> T:
        result = self._result
        if result is not None:
            return result[0]

        with self._lock:
            # Another caller may have finished while we waited
            if self._result is None:
                self._result = (compute(),)
            return self._result[0]

    def invalidate(self) -> None:
        with self._lock:
            self._result = None
