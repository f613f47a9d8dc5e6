"""
MetaStore - Hash records and thumbnails kept in the album's metadata directory.

Layout::

    <root>/.album/hash/<relative path>.sha1    hex digest of the source file
    <root>/.album/thumbs/<fingerprint>.jpg     thumbnail keyed by content
"""

import logging
import os
import threading
from pathlib import Path
from typing import Optional

from .records import FileDescriptor


class MetaStore:
    """
    Filesystem storage for hash records and thumbnail artifacts.
    
    Safe to share between worker threads: directory creation tolerates
    concurrent creators and every artifact path is unique to one source
    path or one fingerprint.
    """
    
    HASH_DIR = 'hash'
    THUMBS_DIR = 'thumbs'
    HASH_SUFFIX = '.sha1'
    THUMB_SUFFIX = '.jpg'
    
    def __init__(self, meta_root: Path, logger: Optional[logging.Logger] = None):
        """
        Initialize store.
        
        Args:
            meta_root: Metadata directory (usually <root>/.album)
            logger: Optional logger instance
        """
        self.meta_root = Path(meta_root)
        self.logger = logger or logging.getLogger(__name__)
    
    def hash_path(self, descriptor: FileDescriptor) -> Path:
        """Hash record location for a source file."""
        normalized = descriptor.relative_path.lstrip('/')
        return self.meta_root / self.HASH_DIR / f"{normalized}{self.HASH_SUFFIX}"
    
    def thumb_path(self, fingerprint: str) -> Path:
        """Thumbnail location for a fingerprint."""
        return self.meta_root / self.THUMBS_DIR / f"{fingerprint}{self.THUMB_SUFFIX}"
    
    def read_hash(self, descriptor: FileDescriptor) -> Optional[str]:
        """
        Read the stored fingerprint for a file.
        
        Returns:
            The stored hex digest, or None if there is no readable record
        """
        path = self.hash_path(descriptor)
        try:
            return path.read_text(encoding='ascii').strip()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            self.logger.warning(f"Could not read hash record {path}: {e}")
            return None
    
    def write_hash(self, descriptor: FileDescriptor, fingerprint: str) -> Path:
        """Write the fingerprint record for a file. Raises OSError on failure."""
        path = self.hash_path(descriptor)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(fingerprint, encoding='ascii')
        return path
    
    def has_thumbnail(self, fingerprint: str) -> bool:
        """Check whether the thumbnail for a fingerprint exists."""
        return self.thumb_path(fingerprint).is_file()
    
    def write_thumbnail(self, fingerprint: str, data: bytes) -> Path:
        """
        Write a thumbnail, replacing the final path only once fully written.
        
        Raises:
            OSError: If the directory or file cannot be written
        """
        path = self.thumb_path(fingerprint)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(f"{path.name}.{os.getpid()}-{threading.get_ident()}.tmp")
        try:
            tmp_path.write_bytes(data)
            os.replace(tmp_path, path)
        except OSError:
            try:
                tmp_path.unlink()
            except OSError:
                pass
            raise
        return path
