import threading
import time
from collections import OrderedDict


class TTLCache:
    """
    Bounded key-value store whose entries expire ``ttl`` seconds after they
    were written. When full, expired entries are purged first and then the
    oldest writes are evicted until there is room.
    """

    def __init__(self, maxsize: int, ttl: float, clock=time.monotonic):
        if maxsize <= 0:
            raise ValueError("maxsize must be positive")
        self.maxsize = maxsize
        self.ttl = ttl
        self._clock = clock
        self._data = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            self._purge(self._clock())
            return len(self._data)

    def _purge(self, now: float) -> None:
        expired = [key for key, (expires, _) in self._data.items() if expires <= now]
        for key in expired:
            del self._data[key]

    def get(self, key, default=None):
        with self._lock:
            item = self._data.get(key)
            if item is None:
                return default
            expires, value = item
            if expires <= self._clock():
                del self._data[key]
                return default
            return value

    def expires_at(self, key):
        with self._lock:
            item = self._data.get(key)
            return item[0] if item else None

    def set(self, key, value, ttl: float = None) -> None:
        now = self._clock()
        with self._lock:
            self._data.pop(key, None)
            if len(self._data) >= self.maxsize:
                self._purge(now)
            while len(self._data) >= self.maxsize:
                self._data.popitem(last=False)
            self._data[key] = (now + (self.ttl if ttl is None else ttl), value)

    def update(self, key, func, initial):
        """Atomically replace the live value with ``func(value)``, keeping its expiry."""
        now = self._clock()
        with self._lock:
            item = self._data.get(key)
            if item is None or item[0] <= now:
                self._data.pop(key, None)
                if len(self._data) >= self.maxsize:
                    self._purge(now)
                while len(self._data) >= self.maxsize:
                    self._data.popitem(last=False)
                expires, value = now + self.ttl, initial
            else:
                expires, value = item
            value = func(value)
            self._data[key] = (expires, value)
            return value, expires - now

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
