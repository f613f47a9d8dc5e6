"""
TreeWalker - Lazily enumerates photo files under the album root.
"""

import logging
import os
from typing import Iterator, Optional

from .classifier import Decision, PathClassifier
from .errors import RootUnreadableError
from .records import FileDescriptor


def check_root(root: str) -> None:
    """
    Make sure the root directory can be listed.
    
    Raises:
        RootUnreadableError: If the root is missing, not a directory or unreadable
    """
    try:
        os.listdir(root)
    except OSError as e:
        raise RootUnreadableError(root, e.strerror or str(e)) from e


class TreeWalker:
    """
    Depth-first walk of the album root, yielding one FileDescriptor per photo.
    
    Entries are visited in name order within each directory. Errors on
    individual entries are logged and the entry skipped; only failure to
    list the root itself is raised.
    """
    
    def __init__(
        self,
        root: str,
        classifier: Optional[PathClassifier] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize walker.
        
        Args:
            root: Album root directory
            classifier: Path classifier (default: JPEG photos)
            logger: Optional logger instance
        """
        self.root = os.path.normpath(root)
        self.classifier = classifier or PathClassifier()
        self.logger = logger or logging.getLogger(__name__)
        self.errors = 0
    
    def walk(self) -> Iterator[FileDescriptor]:
        """Yield descriptors for every accepted file under the root."""
        if self.classifier.classify(self.root, is_dir=True, is_root=True) is not Decision.DESCEND:
            return
        
        try:
            entries = self._list(self.root)
        except OSError as e:
            raise RootUnreadableError(self.root, e.strerror or str(e)) from e
        
        yield from self._walk_entries(entries, '')
    
    def __iter__(self) -> Iterator[FileDescriptor]:
        return self.walk()
    
    def _list(self, directory: str) -> list:
        with os.scandir(directory) as it:
            return sorted(it, key=lambda entry: entry.name)
    
    def _walk_entries(self, entries: list, relative_dir: str) -> Iterator[FileDescriptor]:
        for entry in entries:
            relative_path = f"{relative_dir}/{entry.name}" if relative_dir else entry.name
            
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                self._entry_error(entry.path, e)
                continue
            
            decision = self.classifier.classify(entry.name, is_dir)
            
            if decision is Decision.SKIP:
                self.logger.debug(f"Skipping directory: {relative_path}")
            elif decision is Decision.DESCEND:
                try:
                    children = self._list(entry.path)
                except OSError as e:
                    self._entry_error(entry.path, e)
                    continue
                yield from self._walk_entries(children, relative_path)
            elif decision is Decision.ACCEPT:
                try:
                    if not entry.is_file():
                        continue
                except OSError as e:
                    self._entry_error(entry.path, e)
                    continue
                yield FileDescriptor(path=entry.path, relative_path=relative_path)
    
    def _entry_error(self, path: str, error: OSError) -> None:
        self.errors += 1
        self.logger.warning(f"Could not read {path}: {error}")
