"""
Pipeline - Walks the album, fingerprints every photo, then builds thumbnails.

Phase 1 streams walker output into the hash pool. Phase 2 starts once the
hash stage's tracker releases and dispatches one thumbnail task per distinct
fingerprint.
"""

import logging
import time
from dataclasses import replace
from typing import Optional

from .builder import ThumbnailBuilder
from .classifier import PathClassifier
from .config import AlbumConfig
from .fingerprints import FingerprintMap
from .hasher import ContentHasher
from .metastore import MetaStore
from .pool import WorkerPool
from .progress import PipelineProgress
from .records import HashTask, ThumbnailResult, ThumbnailTask
from .stats import RunStats
from .thumbnail_generator import ThumbnailGenerator
from .tracker import CompletionTracker
from .walker import TreeWalker, check_root


class Pipeline:
    """
    Drives the hash and thumbnail stages over one album root.
    """
    
    def __init__(
        self,
        config: AlbumConfig,
        store: Optional[MetaStore] = None,
        hasher: Optional[ContentHasher] = None,
        builder: Optional[ThumbnailBuilder] = None,
        classifier: Optional[PathClassifier] = None,
        progress: Optional[PipelineProgress] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize pipeline.
        
        Args:
            config: Run configuration
            store: Metadata store (default: <root>/<meta_dir>)
            hasher: Hash stage implementation
            builder: Thumbnail stage implementation
            classifier: Path classifier for the walker
            progress: Optional progress tracker
            logger: Optional logger instance
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.store = store or MetaStore(config.meta_root, logger=self.logger)
        self.hasher = hasher or ContentHasher(self.store, dry_run=config.dry_run, logger=self.logger)
        self.builder = builder or ThumbnailBuilder(
            self.store,
            ThumbnailGenerator(size=config.thumbnail_size, quality=config.quality, logger=self.logger),
            dry_run=config.dry_run,
            logger=self.logger,
        )
        self.classifier = classifier or PathClassifier()
        self.progress = progress
        self.fingerprints = FingerprintMap()
        self.stats = RunStats(dry_run=config.dry_run)
    
    @property
    def photo_count(self) -> int:
        """Photos discovered so far."""
        return self.stats.photos
    
    def run(self) -> RunStats:
        """
        Run both stages to completion.
        
        Raises:
            RootUnreadableError: If the root cannot be listed; no worker is started
        """
        root = str(self.config.root_path)
        check_root(root)
        
        mode_str = " [DRY RUN]" if self.config.dry_run else ""
        self.logger.info(f"Meta dir: {self.config.meta_dir}")
        self.logger.info(f"Root: {root}{mode_str}")
        
        self.stats = RunStats(dry_run=self.config.dry_run)
        self.fingerprints = FingerprintMap()
        
        self._hash_stage(root)
        self._thumbnail_stage()
        
        self.logger.info(
            f"Run complete: {self.stats.photos} photos, "
            f"{self.stats.thumbnails.processed} thumbnails generated, "
            f"{self.stats.thumbnails.skipped} cached, {self.stats.errors} errors "
            f"({self.stats.elapsed_seconds:.1f}s)"
        )
        return self.stats
    
    def _start_pool(self, name: str, handler) -> WorkerPool:
        if self.progress:
            self.progress.on_stage_start(name)
        return WorkerPool(
            name,
            handler,
            workers=self.config.workers,
            tracker=CompletionTracker(name),
            logger=self.logger,
        ).start()
    
    def _hash_stage(self, root: str) -> None:
        walker = TreeWalker(root, self.classifier, logger=self.logger)
        stats = self.stats.hashing
        pool = self._start_pool('hash', self._hash_one)
        
        try:
            for descriptor in walker.walk():
                self.stats.photos += 1
                stats.add_dispatched()
                pool.submit(HashTask(descriptor))
        finally:
            pool.wait()
            stats.finish()
        
        self.logger.info(
            f"Hashing complete: {stats.dispatched} files, {stats.processed} updated, "
            f"{stats.skipped} unchanged, {stats.errors} errors"
        )
    
    def _hash_one(self, task: HashTask) -> None:
        descriptor = task.descriptor
        stats = self.stats.hashing
        try:
            result = self.hasher.process(descriptor)
        except Exception as e:
            self.logger.exception(f"Error hashing {descriptor.path}: {e}")
            result = None
        
        if result is None:
            stats.record('errors', error=f"{descriptor.relative_path}: could not hash")
            if self.progress:
                self.progress.on_hash_failed(descriptor)
        else:
            self.fingerprints.set(descriptor, result.fingerprint)
            stats.record('skipped' if result.cached else 'processed')
            if self.progress:
                self.progress.on_hashed(result)
        
        if self.progress:
            self.progress.on_progress_update(stats)
    
    def _thumbnail_stage(self) -> None:
        stats = self.stats.thumbnails
        stats.start_time = time.time()
        pool = self._start_pool('thumbnail', self._thumbnail_one)
        
        try:
            for fingerprint, descriptors in self.fingerprints.groups():
                first, rest = descriptors[0], descriptors[1:]
                for duplicate in rest:
                    self.stats.duplicates += 1
                    self.logger.info(f"{duplicate.relative_path} shares thumbnail with {first.relative_path}")
                    if self.progress:
                        self.progress.on_duplicate(duplicate, fingerprint)
                stats.add_dispatched()
                pool.submit(ThumbnailTask(first, fingerprint, alternates=tuple(rest)))
        finally:
            pool.wait()
            stats.finish()
        
        self.logger.info(
            f"Thumbnails complete: {stats.processed} generated, "
            f"{stats.skipped} cached, {stats.errors} errors"
        )
    
    def _thumbnail_one(self, task: ThumbnailTask) -> None:
        stats = self.stats.thumbnails
        result = self._build(task)
        for alternate in task.alternates:
            if result.ok:
                break
            self.logger.info(f"Retrying {task.fingerprint[:12]} with {alternate.relative_path}")
            result = self._build(replace(task, descriptor=alternate, alternates=()))
        
        if result.status == 'cached':
            stats.record('skipped')
        elif result.status == 'generated':
            nbytes = 0 if self.config.dry_run else result.thumb_bytes
            stats.record('processed', nbytes=nbytes)
        else:
            stats.record('errors', error=f"{task.descriptor.relative_path}: {result.error}")
        
        if self.progress:
            self.progress.on_thumbnail(result)
            self.progress.on_progress_update(stats)
    
    def _build(self, task: ThumbnailTask) -> ThumbnailResult:
        try:
            return self.builder.process(task)
        except Exception as e:
            self.logger.exception(f"Error building thumbnail for {task.descriptor.path}: {e}")
            return ThumbnailResult(task=task, status='failed', error=str(e))
