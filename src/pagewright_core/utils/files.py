import threading
import time
from pathlib import Path


def delete_if_present(path: Path | str) -> bool:
    """Delete a file if it exists.

    Returns True when a file was removed, False when it was already gone.
    """
    try:
        Path(path).unlink()
    except FileNotFoundError:
        return False
    return True


class StampGenerator:
    """Millisecond timestamps, strictly increasing within the process."""

    def __init__(self, clock=time.time):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            stamp = max(int(self._clock() * 1000), self._last + 1)
            self._last = stamp
            return stamp


_stamps = StampGenerator()


def unique_stamp() -> int:
    return _stamps.next()
