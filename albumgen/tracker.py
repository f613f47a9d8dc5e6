"""
CompletionTracker - Fan-in of per-task completion signals for one stage.
"""

import threading
from typing import Optional

from .errors import PipelineInvariantError


class CompletionTracker:
    """
    Releases a single "stage complete" signal once every dispatched task
    has reported done.
    
    The release condition is only evaluated after close(), when the
    dispatched total can no longer change.
    """
    
    def __init__(self, stage: str):
        self.stage = stage
        self._lock = threading.Lock()
        self._complete = threading.Event()
        self._dispatched = 0
        self._completed = 0
        self._closed = False
    
    def dispatched(self) -> None:
        """Count one task handed to the stage."""
        with self._lock:
            if self._closed:
                raise PipelineInvariantError(
                    f"{self.stage}: task dispatched after dispatch was closed"
                )
            self._dispatched += 1
    
    def done(self) -> None:
        """Count one finished task, whatever its outcome."""
        with self._lock:
            if self._completed >= self._dispatched:
                raise PipelineInvariantError(
                    f"{self.stage}: more completions than dispatched tasks "
                    f"({self._completed + 1} > {self._dispatched})"
                )
            self._completed += 1
            self._check()
    
    def close(self) -> None:
        """Mark dispatch as finished; no more tasks will be added."""
        with self._lock:
            self._closed = True
            self._check()
    
    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the stage is complete. Returns False on timeout."""
        return self._complete.wait(timeout)
    
    def _check(self) -> None:
        if self._closed and self._completed == self._dispatched:
            self._complete.set()
    
    @property
    def is_complete(self) -> bool:
        return self._complete.is_set()
    
    @property
    def dispatched_count(self) -> int:
        with self._lock:
            return self._dispatched
    
    @property
    def completed_count(self) -> int:
        with self._lock:
            return self._completed
