"""
PipelineProgress - Tracks and displays per-file progress.
"""

import logging
import threading
from typing import Optional

from .records import FileDescriptor, HashResult, ThumbnailResult
from .stats import StageStats


class PipelineProgress:
    """
    Tracks and displays pipeline progress with optional per-file output.
    
    Callbacks arrive from worker threads.
    """
    
    def __init__(
        self,
        show_files: bool = False,
        log_interval: int = 100,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize progress tracker.
        
        Args:
            show_files: If True, print each file as it's processed
            log_interval: Log summary progress every N tasks (when not show_files)
            logger: Optional logger instance
        """
        self.show_files = show_files
        self.log_interval = log_interval
        self.logger = logger or logging.getLogger(__name__)
        self.last_logged = {}
        self._lock = threading.Lock()
    
    def on_stage_start(self, stage: str) -> None:
        if self.show_files:
            print(f"\n=== {stage} ===")
        else:
            self.logger.info(f"Starting stage: {stage}")
    
    def on_hashed(self, result: HashResult) -> None:
        """Called when a file has been fingerprinted."""
        if self.show_files:
            state = 'unchanged' if result.cached else 'hashed'
            self._print(f"  [{state.upper()}] {result.descriptor.relative_path} -> {result.fingerprint}")
    
    def on_hash_failed(self, descriptor: FileDescriptor) -> None:
        if self.show_files:
            self._print(f"  [ERROR] {descriptor.relative_path} -> could not read")
    
    def on_thumbnail(self, result: ThumbnailResult) -> None:
        """Called when a thumbnail task finished."""
        if self.show_files:
            tag = {'generated': 'OK', 'cached': 'SKIP', 'failed': 'ERROR'}[result.status]
            self._print(f"  [{tag}] {result.format_status()}")
    
    def on_duplicate(self, descriptor: FileDescriptor, fingerprint: str) -> None:
        if self.show_files:
            self._print(f"  [DUP] {descriptor.relative_path} -> shares {fingerprint[:12]}")
    
    def on_progress_update(self, stats: StageStats) -> None:
        """
        Called after each task to report overall progress.
        
        Args:
            stats: Current stage statistics
        """
        if self.show_files:
            return
        
        total_done = stats.completed_count
        with self._lock:
            if total_done - self.last_logged.get(stats.name, 0) < self.log_interval:
                return
            self.last_logged[stats.name] = total_done
        
        self.logger.info(
            f"Progress [{stats.name}]: {total_done} done, {stats.skipped} cached, "
            f"{stats.errors} errors ({stats.rate_per_minute:.1f}/min)"
        )
    
    def _print(self, line: str) -> None:
        with self._lock:
            print(line)
    