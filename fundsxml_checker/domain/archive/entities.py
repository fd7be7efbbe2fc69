"""Archive domain entities for storing report runs."""
from __future__ import annotations

import hashlib
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Sequence


class ArchiveRole(str, Enum):
    INPUT = "inputs"
    OUTPUT = "outputs"


@dataclass(frozen=True)
class ArchiveFile:
    """A file captured for a run; only its base name is ever used on disk."""

    name: str
    content: bytes

    @property
    def safe_name(self) -> str:
        base = Path(self.name).name
        return base if base not in {"", ".", ".."} else "unnamed"

    @property
    def sha256(self) -> str:
        return hashlib.sha256(self.content).hexdigest()


@dataclass(frozen=True)
class ArchiveReportRequest:
    run_id: str
    document_id: str
    inputs: Sequence[ArchiveFile] = field(default_factory=tuple)
    outputs: Sequence[ArchiveFile] = field(default_factory=tuple)

    def iter_files(self) -> Iterable[tuple[ArchiveRole, ArchiveFile]]:
        for item in self.inputs:
            yield ArchiveRole.INPUT, item
        for item in self.outputs:
            yield ArchiveRole.OUTPUT, item

    def duplicate_names(self) -> list[str]:
        """Relative paths claimed by more than one file of the same role."""
        counts = Counter(f"{role.value}/{item.safe_name}" for role, item in self.iter_files())
        return sorted(path for path, count in counts.items() if count > 1)


@dataclass(frozen=True)
class ArchiveReceipt:
    run_id: str
    location: Path
    files: tuple[Path, ...] = ()
