"""
StageStats / RunStats - Statistics for a pipeline run.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class StageStats:
    """
    Statistics for one pipeline stage. Safe to update from worker threads
    through record().
    
    Attributes:
        name: Stage name
        dispatched: Tasks handed to the stage
        processed: Tasks that produced new work (hash written, thumbnail built)
        skipped: Tasks satisfied by the cache
        errors: Tasks that failed
        bytes_written: Total bytes of artifacts produced
        start_time: Start timestamp
        end_time: End timestamp, once the stage finished
        error_details: List of error messages
    """
    name: str
    dispatched: int = 0
    processed: int = 0
    skipped: int = 0
    errors: int = 0
    bytes_written: int = 0
    start_time: float = field(default_factory=time.time)
    end_time: Optional[float] = None
    error_details: List[str] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)
    
    def record(self, outcome: str, nbytes: int = 0, error: Optional[str] = None) -> None:
        """
        Count one finished task.
        
        Args:
            outcome: 'processed', 'skipped' or 'errors'
            nbytes: Bytes written for this task
            error: Error message to keep when outcome is 'errors'
        """
        if outcome not in ('processed', 'skipped', 'errors'):
            raise ValueError(f"Unknown outcome: {outcome}")
        with self._lock:
            setattr(self, outcome, getattr(self, outcome) + 1)
            self.bytes_written += nbytes
            if error:
                self.error_details.append(error)
    
    def add_dispatched(self, count: int = 1) -> None:
        with self._lock:
            self.dispatched += count
    
    def finish(self) -> None:
        self.end_time = time.time()
    
    @property
    def elapsed_seconds(self) -> float:
        """Elapsed time in seconds."""
        return (self.end_time or time.time()) - self.start_time
    
    @property
    def rate_per_second(self) -> float:
        """Completion rate in tasks per second."""
        if self.elapsed_seconds > 0:
            return self.completed_count / self.elapsed_seconds
        return 0.0
    
    @property
    def rate_per_minute(self) -> float:
        return self.rate_per_second * 60
    
    @property
    def completed_count(self) -> int:
        """Total completed (processed + skipped + errors)."""
        return self.processed + self.skipped + self.errors
    

@dataclass
class RunStats:
    """
    Statistics for a full run.
    
    Attributes:
        photos: Photos found by the walker
        duplicates: Photos sharing a fingerprint with an earlier photo
        dry_run: Whether writes were suppressed
        hashing: Hash stage statistics
        thumbnails: Thumbnail stage statistics
    """
    photos: int = 0
    duplicates: int = 0
    dry_run: bool = False
    hashing: StageStats = field(default_factory=lambda: StageStats('hash'))
    thumbnails: StageStats = field(default_factory=lambda: StageStats('thumbnail'))
    start_time: float = field(default_factory=time.time)
    
    @property
    def elapsed_seconds(self) -> float:
        end = self.thumbnails.end_time or self.hashing.end_time or time.time()
        return end - self.start_time
    
    @property
    def errors(self) -> int:
        return self.hashing.errors + self.thumbnails.errors
