"""
WorkerPool - Fixed set of threads draining one bounded task queue.
"""

import logging
import queue
import threading
from typing import Any, Callable, List, Optional

from .tracker import CompletionTracker

_STOP = object()


class WorkerPool:
    """
    Runs `handler(item)` for each submitted item on a fixed number of threads.
    
    Every submitted item produces exactly one tracker.done(), including
    items whose handler raised. Handler exceptions are logged and never
    leave the worker.
    """
    
    def __init__(
        self,
        name: str,
        handler: Callable[[Any], Any],
        workers: int,
        tracker: Optional[CompletionTracker] = None,
        queue_size: Optional[int] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize pool.
        
        Args:
            name: Stage name, used for thread names and log messages
            handler: Called once per item on a worker thread
            workers: Number of worker threads
            tracker: Completion tracker for the stage (created if omitted)
            queue_size: Bound on queued items (default: twice the workers)
            logger: Optional logger instance
        """
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.name = name
        self.handler = handler
        self.workers = workers
        self.tracker = tracker or CompletionTracker(name)
        self.logger = logger or logging.getLogger(__name__)
        self._queue: queue.Queue = queue.Queue(maxsize=queue_size or workers * 2)
        self._threads: List[threading.Thread] = []
        self._closed = False
    
    def start(self) -> 'WorkerPool':
        """Start the worker threads."""
        for index in range(self.workers):
            thread = threading.Thread(
                target=self._run,
                name=f"{self.name}-{index}",
                daemon=True,
            )
            thread.start()
            self._threads.append(thread)
        return self
    
    def submit(self, item: Any) -> None:
        """Queue one item, blocking while the queue is full."""
        if self._closed:
            raise RuntimeError(f"{self.name} pool is closed")
        self.tracker.dispatched()
        self._queue.put(item)
    
    def close(self) -> None:
        """Signal end of input; workers exit once the queue is drained."""
        if self._closed:
            return
        self._closed = True
        self.tracker.close()
        for _ in self._threads:
            self._queue.put(_STOP)
    
    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for worker threads to exit."""
        for thread in self._threads:
            thread.join(timeout)
    
    def wait(self, timeout: Optional[float] = None) -> bool:
        """Close the pool and wait for every dispatched item to complete."""
        self.close()
        complete = self.tracker.wait(timeout)
        if complete:
            self.join()
        return complete
    
    def _run(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                return
            try:
                self.handler(item)
            except Exception as e:
                self.logger.exception(f"[{self.name}] task failed: {e}")
            finally:
                self.tracker.done()
