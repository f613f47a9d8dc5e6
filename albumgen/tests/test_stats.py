"""Tests for StageStats and RunStats classes."""

import threading
import time

import pytest

from albumgen.stats import RunStats, StageStats


class TestStageStats:
    """Tests for StageStats class."""
    
    def test_elapsed_seconds(self):
        stats = StageStats('hash')
        stats.start_time = time.time() - 10
        
        assert stats.elapsed_seconds >= 10
        assert stats.elapsed_seconds < 12
    
    def test_elapsed_stops_at_finish(self):
        stats = StageStats('hash')
        stats.start_time = time.time() - 10
        stats.finish()
        
        elapsed = stats.elapsed_seconds
        time.sleep(0.01)
        
        assert stats.elapsed_seconds == elapsed
    
    def test_rate_per_minute(self):
        stats = StageStats('hash')
        stats.start_time = time.time() - 60
        stats.processed = 100
        
        assert 90 <= stats.rate_per_minute <= 110
    
    def test_record(self):
        stats = StageStats('thumbnail')
        stats.record('processed', nbytes=100)
        stats.record('skipped')
        stats.record('errors', error='a.jpg: boom')
        
        assert stats.processed == 1
        assert stats.skipped == 1
        assert stats.errors == 1
        assert stats.bytes_written == 100
        assert stats.error_details == ['a.jpg: boom']
    
    def test_record_unknown_outcome(self):
        with pytest.raises(ValueError):
            StageStats('hash').record('dispatched')
    
    def test_completed_and_remaining(self):
        stats = StageStats('hash')
        stats.add_dispatched(100)
        stats.processed = 50
        stats.skipped = 10
        stats.errors = 5
        
        assert stats.completed_count == 65
    
    def test_concurrent_record(self):
        stats = StageStats('hash')
        
        def work():
            for _ in range(500):
                stats.record('processed', nbytes=1)
        
        threads = [threading.Thread(target=work) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        
        assert stats.processed == 4000
        assert stats.bytes_written == 4000


class TestRunStats:
    """Tests for RunStats class."""
    
    def test_errors_span_stages(self):
        stats = RunStats()
        stats.hashing.record('errors')
        stats.thumbnails.record('errors')
        stats.thumbnails.record('processed')
        
        assert stats.errors == 2
    
    def test_stage_names(self):
        stats = RunStats()
        
        assert stats.hashing.name == 'hash'
        assert stats.thumbnails.name == 'thumbnail'
