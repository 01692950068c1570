"""Deferred deletion of expiring files."""

import heapq
import itertools
import threading
import time
from logging import Logger
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from pagewright_core.logging import create_null_logger
from pagewright_core.utils import delete_if_present


class ExpiryScheduler:
    """
    A queue of files to delete once their deadline has passed.

    Deadlines are POSIX timestamps. Pending deletions are served by a
    single daemon thread once ``start`` is called; ``run_pending`` can also
    be called directly, which is how tests drive expiry with a fake clock.
    Deleting a file that is already gone is not an error, so scheduling
    the same path twice is safe.
    """

    def __init__(self, clock: Callable[[], float] = time.time, logger: Logger = None):
        self._clock = clock
        self._logger = logger or create_null_logger('pagewright.ExpiryScheduler')
        self._queue: List[Tuple[float, int, Path]] = []
        self._counter = itertools.count()
        self._condition = threading.Condition()
        self._thread: Optional[threading.Thread] = None
        self._stopping = False

    @property
    def pending(self) -> int:
        with self._condition:
            return len(self._queue)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def schedule(self, path: Path | str, deadline: float) -> None:
        with self._condition:
            heapq.heappush(self._queue, (deadline, next(self._counter), Path(path)))
            self._condition.notify()

    def run_pending(self, now: Optional[float] = None) -> List[Path]:
        """
        Delete every file whose deadline is at or before ``now``.

        Returns:
            The paths that were due, whether or not they still existed
        """
        now = self._clock() if now is None else now

        due = []
        with self._condition:
            while self._queue and self._queue[0][0] <= now:
                due.append(heapq.heappop(self._queue)[2])

        for path in due:
            try:
                if delete_if_present(path):
                    self._logger.info(f'Expired {path.name}')
            except OSError:
                self._logger.exception(f'Unable to delete expired file {path}')

        return due

    def start(self) -> None:
        if self.running:
            return
        with self._condition:
            self._stopping = False
        self._thread = threading.Thread(
            target=self._run, name='pagewright-expiry', daemon=True
        )
        self._thread.start()
        self._logger.debug('Expiry scheduler started')

    def stop(self, timeout: float = 5.0) -> None:
        with self._condition:
            self._stopping = True
            self._condition.notify()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        self._logger.debug('Expiry scheduler stopped')

    def _run(self) -> None:
        while True:
            with self._condition:
                if self._stopping:
                    return
                timeout = None
                if self._queue:
                    timeout = max(0.0, self._queue[0][0] - self._clock())
                self._condition.wait(timeout=timeout)
                if self._stopping:
                    return
            self.run_pending()
