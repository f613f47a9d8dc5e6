"""
FingerprintMap - Thread-safe bridge from hash results to thumbnail tasks.
"""

import threading
from typing import Dict, List, Optional, Tuple

from .records import FileDescriptor


class FingerprintMap:
    """Source path -> fingerprint map written concurrently by hash workers."""
    
    def __init__(self):
        self._lock = threading.Lock()
        self._entries: Dict[str, Tuple[FileDescriptor, str]] = {}
    
    def set(self, descriptor: FileDescriptor, fingerprint: str) -> None:
        with self._lock:
            self._entries[descriptor.path] = (descriptor, fingerprint)
    
    def get(self, path: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(path)
        return entry[1] if entry else None
    
    def groups(self) -> List[Tuple[str, List[FileDescriptor]]]:
        """
        Group descriptors by fingerprint.
        
        Returns:
            (fingerprint, descriptors) pairs; fingerprints and descriptors
            are ordered by relative path
        """
        with self._lock:
            entries = list(self._entries.values())
        
        grouped: Dict[str, List[FileDescriptor]] = {}
        for descriptor, fingerprint in sorted(entries, key=lambda e: e[0].relative_path):
            grouped.setdefault(fingerprint, []).append(descriptor)
        return list(grouped.items())
    
    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
    