"""
ScanDeskew - Background Deskew Worker

Runs the synchronous deskew core on a thread pool so interactive callers
never block, and hands results back through futures or callbacks.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor

import numpy as np

from scandeskew.config import DeskewConfig
from scandeskew.constants import DEFAULT_WORKERS
from scandeskew.services.skew.deskew import DeskewResult, deskew_with_details

logger = logging.getLogger(__name__)

ResultCallback = Callable[[DeskewResult | None, BaseException | None], None]
Dispatcher = Callable[[Callable[[], None]], object]


class DeskewWorker:
    """Thread-pooled deskew with completion callbacks.

    A single cancellation event is shared by every submitted job; setting
    it with ``cancel()`` stops in-flight angle searches between candidates.

    Args:
        max_workers: Number of pages processed concurrently
        config: Settings passed to every deskew call
        dispatch: Optional function that schedules a zero-argument callable
            on the caller's thread (for example ``GLib.idle_add`` or
            ``loop.call_soon_threadsafe``). Without it callbacks run on the
            worker thread.
    """

    def __init__(
        self,
        max_workers: int = DEFAULT_WORKERS,
        config: DeskewConfig | None = None,
        dispatch: Dispatcher | None = None,
    ) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.config = config or DeskewConfig()
        self._dispatch = dispatch
        self._cancel_event = threading.Event()
        self._pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="deskew")

    def __enter__(self) -> "DeskewWorker":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True)

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def submit(self, image: np.ndarray, callback: ResultCallback | None = None) -> Future:
        """Queue *image* for deskewing.

        Args:
            image: Page to correct
            callback: Called once with ``(result, None)`` on success or
                ``(None, error)`` on failure

        Returns:
            Future resolving to a DeskewResult
        """
        future = self._pool.submit(deskew_with_details, image, self.config, self._cancel_event)
        if callback is not None:
            future.add_done_callback(lambda f: self._deliver(f, callback))
        return future

    def _deliver(self, future: Future, callback: ResultCallback) -> None:
        if future.cancelled():
            result, error = None, CancelledError()
        else:
            error = future.exception()
            result = None if error is not None else future.result()
            if error is not None:
                logger.error(f"Deskew failed: {error}")

        if self._dispatch is not None:
            self._dispatch(lambda: callback(result, error))
        else:
            callback(result, error)

    def deskew_many(self, images: Iterable[np.ndarray]) -> list[DeskewResult]:
        """Deskew several pages in parallel; results follow input order.

        Raises:
            The first error raised by any page, after submission of all pages
        """
        futures = [self.submit(image) for image in images]
        return [future.result() for future in futures]

    def cancel(self) -> None:
        """Ask running and queued jobs to stop."""
        logger.debug("Deskew worker: cancellation requested")
        self._cancel_event.set()

    def reset(self) -> None:
        """Clear a previous cancellation so new jobs run normally."""
        self._cancel_event.clear()

    def shutdown(self, wait: bool = True) -> None:
        """Stop the pool, dropping jobs that have not started yet."""
        self._pool.shutdown(wait=wait, cancel_futures=True)
