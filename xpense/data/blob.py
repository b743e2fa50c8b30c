"""
Blob stores: whole-collection persistence targets for the ledger.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Protocol

from xpense.config import LEDGER_FILE


class BlobStore(Protocol):
    def load(self) -> Optional[bytes]: ...

    def save(self, data: bytes) -> None: ...


class FileBlobStore:
    """Single file on disk, replaced atomically on every save."""

    def __init__(self, path: str | Path = LEDGER_FILE) -> None:
        self.path = Path(path)

    def load(self) -> Optional[bytes]:
        if not self.path.exists():
            return None
        return self.path.read_bytes()

    def save(self, data: bytes) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_bytes(data)
        os.replace(tmp, self.path)

    def __repr__(self) -> str:
        return f"FileBlobStore({str(self.path)!r})"


class MemoryBlobStore:
    """In-process blob, used by tests and throwaway sessions."""

    def __init__(self, data: Optional[bytes] = None) -> None:
        self.data = data
        self.saves = 0

    def load(self) -> Optional[bytes]:
        return self.data

    def save(self, data: bytes) -> None:
        self.data = data
        self.saves += 1
