"""
ContentHasher - Fingerprints photo files and maintains their hash records.
"""

import hashlib
import logging
from typing import BinaryIO, Optional

from .metastore import MetaStore
from .records import FileDescriptor, HashResult


class ContentHasher:
    """
    Computes the SHA-1 fingerprint of a file and compares it against the
    stored hash record, rewriting the record only when it changed.
    """
    
    CHUNK_SIZE = 1024 * 1024
    
    def __init__(
        self,
        store: MetaStore,
        dry_run: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize hasher.
        
        Args:
            store: Metadata store for hash records
            dry_run: If True, never write hash records
            logger: Optional logger instance
        """
        self.store = store
        self.dry_run = dry_run
        self.logger = logger or logging.getLogger(__name__)
    
    @classmethod
    def fingerprint_stream(cls, stream: BinaryIO) -> str:
        """Return the lowercase hex SHA-1 of everything left in a stream."""
        sha = hashlib.sha1()
        for chunk in iter(lambda: stream.read(cls.CHUNK_SIZE), b''):
            sha.update(chunk)
        return sha.hexdigest()
    
    def fingerprint_file(self, path: str) -> str:
        """Fingerprint a file. Raises OSError if it cannot be read."""
        with open(path, 'rb') as f:
            return self.fingerprint_stream(f)
    
    def process(self, descriptor: FileDescriptor) -> Optional[HashResult]:
        """
        Hash one file and update its record.
        
        Returns:
            HashResult, or None if the file could not be read
        """
        self.logger.debug(f"Starting work on {descriptor.path}")
        try:
            fingerprint = self.fingerprint_file(descriptor.path)
        except OSError as e:
            self.logger.error(f"Could not read photo file at {descriptor.path}: {e}")
            return None
        
        if self.store.read_hash(descriptor) == fingerprint:
            self.logger.info(f"Skipping {descriptor.relative_path} (unchanged)")
            return HashResult(descriptor=descriptor, fingerprint=fingerprint, cached=True)
        
        if self.dry_run:
            self.logger.info(f"[DRY RUN] Would record hash for {descriptor.relative_path}")
            return HashResult(descriptor=descriptor, fingerprint=fingerprint)
        
        try:
            self.store.write_hash(descriptor, fingerprint)
        except OSError as e:
            self.logger.warning(f"Could not write hash record for {descriptor.relative_path}: {e}")
            return HashResult(descriptor=descriptor, fingerprint=fingerprint)
        
        self.logger.info(f"Hashed {descriptor.relative_path} ({fingerprint})")
        return HashResult(descriptor=descriptor, fingerprint=fingerprint, persisted=True)
