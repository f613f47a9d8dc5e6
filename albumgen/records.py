"""
Records passed between pipeline stages.
"""

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class FileDescriptor:
    """
    An eligible photo found by the walker.
    
    Attributes:
        path: Path of the file as reached from the root
        relative_path: Path relative to the album root, without leading slash
    """
    path: str
    relative_path: str


class Flip(enum.Enum):
    NONE = 'none'
    HORIZONTAL = 'horizontal'
    VERTICAL = 'vertical'


@dataclass(frozen=True)
class Orientation:
    """
    Rotation and flip needed to display an image upright.
    
    Attributes:
        angle: Counter-clockwise rotation in degrees (0, 90, 180 or -90)
        flip: Flip applied after rotating
    """
    angle: int = 0
    flip: Flip = Flip.NONE
    
    @property
    def is_identity(self) -> bool:
        return self.angle == 0 and self.flip is Flip.NONE


@dataclass
class PhotoMetadata:
    """EXIF-derived facts about a photo. Not persisted."""
    orientation: Orientation = field(default_factory=Orientation)
    taken_at: Optional[datetime] = None
    location: Optional[Tuple[float, float]] = None


@dataclass(frozen=True)
class HashTask:
    """Unit of work for the hash stage."""
    descriptor: FileDescriptor


@dataclass(frozen=True)
class HashResult:
    """
    Outcome of hashing one file.
    
    Attributes:
        descriptor: The hashed file
        fingerprint: Lowercase hex SHA-1 of the file contents
        cached: True when the stored hash record already matched
        persisted: True when a new hash record was written this run
    """
    descriptor: FileDescriptor
    fingerprint: str
    cached: bool = False
    persisted: bool = False


@dataclass(frozen=True)
class ThumbnailTask:
    """
    Unit of work for the thumbnail stage.
    
    Attributes:
        descriptor: Source file to decode
        fingerprint: Fingerprint computed by the hash stage
        alternates: Other files sharing the fingerprint, tried in order if
            descriptor cannot be read or decoded
    """
    descriptor: FileDescriptor
    fingerprint: str
    alternates: Tuple[FileDescriptor, ...] = ()


@dataclass
class ThumbnailResult:
    """
    Outcome of building one thumbnail.
    
    Attributes:
        task: The processed task
        status: 'generated', 'cached' or 'failed'
        source_size: (width, height) of the decoded image
        thumb_size: (width, height) of the written thumbnail
        thumb_bytes: Encoded thumbnail size in bytes
        metadata: EXIF facts read from the source
        error: Error message when status is 'failed'
    """
    task: ThumbnailTask
    status: str
    source_size: Optional[Tuple[int, int]] = None
    thumb_size: Optional[Tuple[int, int]] = None
    thumb_bytes: int = 0
    metadata: Optional[PhotoMetadata] = None
    error: Optional[str] = None
    
    @property
    def ok(self) -> bool:
        return self.status != 'failed'
    
    def format_status(self) -> str:
        """Format a one-line status string, e.g. 'a.jpg - GENERATED 800x533'."""
        name = self.task.descriptor.relative_path
        if self.status == 'generated' and self.thumb_size:
            width, height = self.thumb_size
            return f"{name} - GENERATED {width}x{height} ({format_bytes(self.thumb_bytes)})"
        if self.status == 'cached':
            return f"{name} - thumbnail EXISTS ({self.task.fingerprint[:12]})"
        return f"{name} - FAILED ({self.error or 'unknown error'})"


def format_bytes(bytes_val: float) -> str:
    """Format bytes as human-readable string."""
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if bytes_val < 1024:
            return f"{bytes_val:.1f} {unit}"
        bytes_val /= 1024
    return f"{bytes_val:.1f} PB"
