"""
PathClassifier - Decides which directories to enter and which files to keep.
"""

import enum
import os
from typing import Iterable, Optional


class Decision(enum.Enum):
    DESCEND = 'descend'
    SKIP = 'skip'
    ACCEPT = 'accept'
    IGNORE = 'ignore'


class PathClassifier:
    """
    Pure decision function over filesystem entries.
    
    Hidden directories and opaque bundles (application packages, photo
    libraries) are never entered; files are kept by extension.
    """
    
    PHOTO_EXTENSIONS = frozenset({'.jpg', '.jpeg'})
    BUNDLE_SUFFIXES = (
        '.app',
        '.bundle',
        '.photoslibrary',
        '.photolibrary',
        '.aplibrary',
        '.migratedphotolibrary',
    )
    
    def __init__(
        self,
        extensions: Optional[Iterable[str]] = None,
        bundle_suffixes: Optional[Iterable[str]] = None
    ):
        """
        Initialize classifier.
        
        Args:
            extensions: Accepted file extensions (default: JPEG)
            bundle_suffixes: Directory suffixes treated as opaque bundles
        """
        self.extensions = frozenset(
            ext.lower() for ext in (extensions or self.PHOTO_EXTENSIONS)
        )
        self.bundle_suffixes = tuple(
            suffix.lower() for suffix in (bundle_suffixes or self.BUNDLE_SUFFIXES)
        )
    
    def classify(self, name: str, is_dir: bool, is_root: bool = False) -> Decision:
        """
        Classify one entry.
        
        Args:
            name: Entry name (basename, or the root path itself)
            is_dir: Whether the entry is a directory
            is_root: Whether the entry is the walk root
        """
        if is_dir:
            if is_root or name in ('.', '..'):
                return Decision.DESCEND
            if name.startswith('.'):
                return Decision.SKIP
            if name.lower().endswith(self.bundle_suffixes):
                return Decision.SKIP
            return Decision.DESCEND
        
        if self.is_photo(name):
            return Decision.ACCEPT
        return Decision.IGNORE
    
    def is_photo(self, name: str) -> bool:
        """Check if a filename has an accepted extension."""
        return os.path.splitext(name)[1].lower() in self.extensions
