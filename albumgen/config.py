"""
AlbumConfig - Run configuration for the album pipeline.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


def _default_workers() -> int:
    return os.cpu_count() or 1


def _env_bool(value: Optional[str]) -> bool:
    return (value or '').strip().lower() in {'1', 'true', 'yes', 'y', 't'}


@dataclass
class AlbumConfig:
    """
    Configuration for a pipeline run.
    
    Attributes:
        root: Album root directory to scan
        meta_dir: Name of the metadata directory created inside the root
        dry_run: Compute everything but write no hash records or thumbnails
        workers: Worker threads per stage
        http_address: Listen address for the status page (e.g. ':8080')
        thumbnail_size: Bounding box for thumbnails, in pixels
        quality: JPEG quality for thumbnails
        serve: Serve the status page once the run finishes
    """
    root: Optional[str] = None
    meta_dir: str = '.album'
    dry_run: bool = False
    workers: int = field(default_factory=_default_workers)
    http_address: str = ':8080'
    thumbnail_size: int = 800
    quality: int = 85
    serve: bool = True
    
    @classmethod
    def from_env(cls) -> 'AlbumConfig':
        """Build configuration from ALBUM_* environment variables."""
        config = cls()
        config.root = os.environ.get('ALBUM_ROOT') or None
        config.dry_run = _env_bool(os.environ.get('ALBUM_DRY_RUN'))
        
        workers = os.environ.get('ALBUM_WORKERS')
        if workers:
            try:
                config.workers = int(workers)
            except ValueError:
                config.workers = 0
        
        http_address = os.environ.get('ALBUM_HTTP')
        if http_address:
            config.http_address = http_address
        
        return config
    
    @property
    def root_path(self) -> Path:
        """Normalized album root."""
        return Path(os.path.normpath(self.root or '.'))
    
    @property
    def meta_root(self) -> Path:
        """Directory holding hash records and thumbnails."""
        return self.root_path / self.meta_dir
    
    def validate(self) -> List[str]:
        """Return a list of configuration errors (empty when valid)."""
        errors = []
        if not self.root:
            errors.append("Album root is required")
        if self.workers < 1:
            errors.append(f"Worker count must be at least 1, got {self.workers}")
        if self.thumbnail_size < 1:
            errors.append(f"Thumbnail size must be positive, got {self.thumbnail_size}")
        if not 1 <= self.quality <= 95:
            errors.append(f"JPEG quality must be between 1 and 95, got {self.quality}")
        if not self.meta_dir or os.sep in self.meta_dir:
            errors.append(f"Invalid metadata directory name: {self.meta_dir!r}")
        return errors
