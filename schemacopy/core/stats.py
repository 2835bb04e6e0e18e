import threading
import time
from dataclasses import dataclass
from dataclasses import field


@dataclass
class BaseStats:
    total: int = 0
    failed: int = 0
    start_time: float = field(default_factory=time.time)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def inc_failed(self, count: int = 1):
        with self._lock:
            self.failed += count

    @property
    def elapsed_time(self) -> float:
        return time.time() - self.start_time


@dataclass
class CopyStats(BaseStats):
    copied: int = 0
    bytes_written: int = 0

    def inc_copied(self, size: int = 0):
        with self._lock:
            self.copied += 1
            self.bytes_written += size
