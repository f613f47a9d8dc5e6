"""
Photo album fingerprinting and thumbnail package.

Two stages over one album root:
    1. Hash stage: fingerprint every photo, keeping per-file hash records
    2. Thumbnail stage: build one orientation-corrected thumbnail per fingerprint

Artifacts live in <root>/.album and are re-derivable from the photos at any time.
"""

__version__ = "1.0.0"

from .config import AlbumConfig
from .errors import AlbumError, RootUnreadableError, PipelineInvariantError
from .records import (
    FileDescriptor,
    Flip,
    HashResult,
    HashTask,
    Orientation,
    PhotoMetadata,
    ThumbnailResult,
    ThumbnailTask,
)
from .classifier import Decision, PathClassifier
from .walker import TreeWalker, check_root
from .metastore import MetaStore
from .hasher import ContentHasher
from .thumbnail_generator import Thumbnail, ThumbnailGenerator, fit_within
from .builder import ThumbnailBuilder
from .tracker import CompletionTracker
from .pool import WorkerPool
from .fingerprints import FingerprintMap
from .stats import RunStats, StageStats
from .progress import PipelineProgress
from .reporter import Reporter
from .pipeline import Pipeline

__all__ = [
    "AlbumConfig",
    "AlbumError",
    "RootUnreadableError",
    "PipelineInvariantError",
    "FileDescriptor",
    "Flip",
    "HashResult",
    "HashTask",
    "Orientation",
    "PhotoMetadata",
    "ThumbnailResult",
    "ThumbnailTask",
    "Decision",
    "PathClassifier",
    "TreeWalker",
    "check_root",
    "MetaStore",
    "ContentHasher",
    "Thumbnail",
    "ThumbnailGenerator",
    "fit_within",
    "ThumbnailBuilder",
    "CompletionTracker",
    "WorkerPool",
    "FingerprintMap",
    "RunStats",
    "StageStats",
    "PipelineProgress",
    "Reporter",
    "Pipeline",
]
