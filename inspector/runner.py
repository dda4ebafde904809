"""
Bounded concurrent validation.

Runs one validation per item name on a thread pool and hands every finished
item to a completion callback on the calling thread, in completion order.
"""

import logging
import os
import threading
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Callable, Dict, Iterable, List, Optional

from inspector.exceptions import ValidationAbortedError, ValidationCancelledError, ValidationTimeoutError
from inspector.models import Item

logger = logging.getLogger(__name__)

ValidateFn = Callable[[str], Item]
CompletionCallback = Callable[[Item], None]

MAX_POLL_INTERVAL = 0.5


def default_worker_count() -> int:
    """Number of processing units available on this host."""
    return os.cpu_count() or 1


class ConcurrentRunner:
    """Execute a validator over many names with a fixed-size worker pool."""

    def __init__(self, max_workers: Optional[int] = None, item_timeout: Optional[float] = None):
        """
        Initialize the runner.

        Args:
            max_workers: Pool size, defaults to the host's processor count
            item_timeout: Optional limit in seconds for a single validation
        """
        if max_workers is not None and max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if item_timeout is not None and item_timeout <= 0:
            raise ValueError("item_timeout must be positive")

        self.max_workers = max_workers or default_worker_count()
        self.item_timeout = item_timeout

        self._cancel_event = threading.Event()
        self._lock = threading.Lock()

    @property
    def cancelled(self) -> bool:
        """True once the current run is being aborted.

        Long-running validators should poll this and return early.
        """
        return self._cancel_event.is_set()

    def run_all(
        self,
        names: Iterable[str],
        validate_fn: ValidateFn,
        on_complete: Optional[CompletionCallback] = None,
    ) -> List[Item]:
        """Validate every name and collect the results.

        Args:
            names: Item names in canonical order
            validate_fn: Called once per name from a worker thread
            on_complete: Called once per finished item, in completion order

        Returns:
            Items in the same order as ``names``

        Raises:
            ValidationAbortedError: If any validation raises; the run is aborted
            ValidationTimeoutError: If a validation exceeds ``item_timeout``
        """
        names = list(names)
        if not names:
            return []

        # Fresh per-run state; workers left over from an aborted run keep theirs.
        self._cancel_event = cancel_event = threading.Event()
        started: Dict[int, float] = {}
        results: List[Optional[Item]] = [None] * len(names)

        logger.debug(f"Validating {len(names)} items with {self.max_workers} workers")

        executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="inspector")
        try:
            futures: Dict[Future, int] = {
                executor.submit(self._execute, validate_fn, index, name, cancel_event, started): index
                for index, name in enumerate(names)
            }
            pending = set(futures)

            while pending:
                done, pending = wait(pending, timeout=self._poll_interval(), return_when=FIRST_COMPLETED)

                for future in done:
                    index = futures[future]
                    try:
                        item = future.result()
                    except Exception as e:
                        logger.error(f"Validation of '{names[index]}' failed: {e}")
                        raise ValidationAbortedError(names[index], e) from e

                    results[index] = item
                    if on_complete is not None:
                        on_complete(item)

                self._check_timeouts(names, started)
        except BaseException:
            # Workers still in flight observe the event; the abort does not wait for them.
            cancel_event.set()
            executor.shutdown(wait=False, cancel_futures=True)
            raise

        executor.shutdown(wait=True)
        return results

    def _execute(
        self,
        validate_fn: ValidateFn,
        index: int,
        name: str,
        cancel_event: threading.Event,
        started: Dict[int, float],
    ) -> Item:
        if cancel_event.is_set():
            raise ValidationCancelledError(name)

        with self._lock:
            started[index] = time.monotonic()
        try:
            return validate_fn(name)
        finally:
            with self._lock:
                started.pop(index, None)

    def _poll_interval(self) -> Optional[float]:
        if self.item_timeout is None:
            return None
        return min(self.item_timeout, MAX_POLL_INTERVAL)

    def _check_timeouts(self, names: List[str], started: Dict[int, float]) -> None:
        if self.item_timeout is None:
            return

        now = time.monotonic()
        with self._lock:
            running = dict(started)

        for index, started_at in running.items():
            if now - started_at > self.item_timeout:
                logger.error(f"Validation of '{names[index]}' exceeded {self.item_timeout}s")
                raise ValidationTimeoutError(names[index], self.item_timeout)
