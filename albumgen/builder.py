"""
ThumbnailBuilder - Thumbnail stage: builds the artifact for one fingerprint.
"""

import io
import logging
from typing import Optional

from .hasher import ContentHasher
from .metastore import MetaStore
from .records import ThumbnailResult, ThumbnailTask
from .thumbnail_generator import ThumbnailGenerator


class ThumbnailBuilder:
    """
    Builds and stores the thumbnail for a hashed file unless one already
    exists for its fingerprint.
    """
    
    def __init__(
        self,
        store: MetaStore,
        thumbnail_generator: Optional[ThumbnailGenerator] = None,
        dry_run: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize builder.
        
        Args:
            store: Metadata store for thumbnails
            thumbnail_generator: Thumbnail generator instance
            dry_run: If True, build thumbnails but don't write them
            logger: Optional logger instance
        """
        self.store = store
        self.thumb_gen = thumbnail_generator or ThumbnailGenerator()
        self.dry_run = dry_run
        self.logger = logger or logging.getLogger(__name__)
    
    def process(self, task: ThumbnailTask) -> ThumbnailResult:
        """Build the thumbnail for one task. Never raises for per-file errors."""
        descriptor = task.descriptor
        
        if self.store.has_thumbnail(task.fingerprint):
            self.logger.info(f"Skipping {descriptor.relative_path} (thumbnail exists)")
            return ThumbnailResult(task=task, status='cached')
        
        self.logger.debug(f"Starting thumbnail work on {descriptor.path} ({task.fingerprint})")
        
        try:
            with open(descriptor.path, 'rb') as f:
                image_data = f.read()
        except OSError as e:
            self.logger.error(f"Could not read photo file at {descriptor.path}: {e}")
            return ThumbnailResult(task=task, status='failed', error=str(e))
        
        if ContentHasher.fingerprint_stream(io.BytesIO(image_data)) != task.fingerprint:
            self.logger.error(f"{descriptor.path} changed since it was hashed, not building thumbnail")
            return ThumbnailResult(task=task, status='failed', error='file changed since hashing')
        
        try:
            thumbnail = self.thumb_gen.generate(image_data)
        except Exception as e:
            self.logger.error(f"Jpeg decode error for {descriptor.path}: {e}")
            return ThumbnailResult(task=task, status='failed', error=str(e))
        
        result = ThumbnailResult(
            task=task,
            status='generated',
            source_size=thumbnail.source_size,
            thumb_size=thumbnail.size,
            thumb_bytes=len(thumbnail.data),
            metadata=thumbnail.metadata,
        )
        
        if self.dry_run:
            self.logger.info(f"[DRY RUN] Would write thumbnail for {descriptor.relative_path}")
            return result
        
        try:
            self.store.write_thumbnail(task.fingerprint, thumbnail.data)
        except OSError as e:
            self.logger.error(f"Could not write thumbnail for {descriptor.relative_path}: {e}")
            result.status = 'failed'
            result.error = str(e)
            return result
        
        width, height = thumbnail.source_size
        thumb_width, thumb_height = thumbnail.size
        self.logger.info(
            f"Processed {descriptor.relative_path}, {width}x{height}, "
            f"thumbnail is {thumb_width}x{thumb_height}"
        )
        return result
