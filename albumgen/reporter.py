"""
Reporter - Prints a human-readable summary of a pipeline run.
"""

import logging
import sys
from typing import Optional, TextIO

from .records import format_bytes
from .stats import RunStats, StageStats


class Reporter:
    """
    Generates human-readable reports from run statistics.
    """
    
    def __init__(
        self,
        output: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize reporter.
        
        Args:
            output: Output stream (default: stdout)
            logger: Optional logger instance
        """
        self.output = output or sys.stdout
        self.logger = logger or logging.getLogger(__name__)
    
    def _print(self, text: str = "") -> None:
        """Print to output stream."""
        print(text, file=self.output)
    
    def _format_duration(self, seconds: float) -> str:
        """Format duration as human-readable string."""
        if seconds < 60:
            return f"{seconds:.1f} seconds"
        elif seconds < 3600:
            return f"{seconds / 60:.1f} minutes"
        else:
            return f"{seconds / 3600:.1f} hours"
    
    def _stage_row(self, label: str, stats: StageStats) -> None:
        self._print(
            f"{label:<12} {stats.dispatched:>10,} {stats.processed:>10,} "
            f"{stats.skipped:>10,} {stats.errors:>8,} "
            f"{self._format_duration(stats.elapsed_seconds):>16}"
        )
    
    def report_summary(self, stats: RunStats) -> None:
        """Generate a summary report."""
        self._print("=" * 70)
        title = "ALBUM RUN SUMMARY"
        if stats.dry_run:
            title += " [DRY RUN]"
        self._print(title)
        self._print("=" * 70)
        self._print()
        
        self._print("Overall Statistics:")
        self._print(f"  Photos Found:         {stats.photos:,}")
        self._print(f"  Duplicate Photos:     {stats.duplicates:,}")
        self._print(f"  Thumbnails Written:   {stats.thumbnails.processed:,} "
                    f"({format_bytes(stats.thumbnails.bytes_written)})")
        self._print(f"  Errors:               {stats.errors:,}")
        self._print(f"  Run Time:             {self._format_duration(stats.elapsed_seconds)}")
        self._print()
        
        self._print("Stages:")
        self._print("-" * 70)
        self._print(f"{'Stage':<12} {'Tasks':>10} {'New':>10} {'Cached':>10} {'Errors':>8} {'Time':>16}")
        self._print("-" * 70)
        self._stage_row('hash', stats.hashing)
        self._stage_row('thumbnail', stats.thumbnails)
        self._print("-" * 70)
        
        details = stats.hashing.error_details + stats.thumbnails.error_details
        if details:
            self._print()
            self._print("Errors:")
            for detail in details[:20]:
                self._print(f"  {detail}")
            if len(details) > 20:
                self._print(f"  ... and {len(details) - 20} more")
        self._print()
