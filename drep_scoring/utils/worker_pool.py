"""Worker pool with per-item exception isolation for batch scoring.

Wraps ThreadPoolExecutor so one failing item is logged and reported without
affecting the rest. Results come back in input order.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Optional, Sequence

from drep_scoring.config import get_max_workers


class WorkerPool:
    """ThreadPoolExecutor wrapper with exception handling for scoring tasks."""

    def __init__(self, max_workers: Optional[int] = None, logger=None):
        """
        Initialize worker pool.

        Args:
            max_workers: Maximum concurrent worker threads (default: DREP_SCORING_MAX_WORKERS or 10)
            logger: Optional logger instance for logging
        """
        self.max_workers = max(1, max_workers or get_max_workers())
        self.logger = logger or logging.getLogger(__name__)
        self._stats_lock = threading.Lock()
        self.stats = {
            "max_workers": self.max_workers,
            "total_submitted": 0,
            "total_completed": 0,
            "total_successful": 0,
            "total_failed": 0,
        }

    def map(
        self,
        func: Callable[[Any], Any],
        items: Sequence[Any],
        desc: str = "Scoring",
        label: Optional[Callable[[Any], str]] = None,
    ) -> list[tuple[bool, Any, Any]]:
        """
        Process items in parallel with exception handling.

        Args:
            func: Worker function to execute
            items: Items to process
            desc: Description for progress reporting
            label: Optional function naming an item in log lines

        Returns:
            List of tuples in input order: (success, item, result_or_error)
        """
        label = label or str
        results: list[Optional[tuple[bool, Any, Any]]] = [None] * len(items)
        if not items:
            return []

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_index = {executor.submit(func, item): i for i, item in enumerate(items)}
            with self._stats_lock:
                self.stats["total_submitted"] += len(items)

            for future in as_completed(future_to_index):
                index = future_to_index[future]
                item = items[index]
                with self._stats_lock:
                    self.stats["total_completed"] += 1

                try:
                    result = future.result()
                    with self._stats_lock:
                        self.stats["total_successful"] += 1
                    results[index] = (True, item, result)
                    self.logger.debug(f"{desc}: Success for {label(item)}")

                except Exception as e:
                    with self._stats_lock:
                        self.stats["total_failed"] += 1
                    results[index] = (False, item, e)
                    self.logger.error(f"{desc}: Failed for {label(item)}: {e}", exc_info=True)

        self.logger.info(
            f"{desc} complete: {self.stats['total_successful']} successful, {self.stats['total_failed']} failed"
        )
        return results

    def get_stats(self) -> dict:
        """Get worker pool statistics."""
        with self._stats_lock:
            return dict(self.stats)
