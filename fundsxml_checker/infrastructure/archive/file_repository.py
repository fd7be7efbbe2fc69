"""Filesystem repository for archiving report runs.

Layout of one run::

    <root>/<run id>/manifest.json
    <root>/<run id>/inputs/<file>
    <root>/<run id>/outputs/<file>
"""
from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from fundsxml_checker.domain.archive.entities import (
    ArchiveReceipt,
    ArchiveReportRequest,
    ArchiveRole,
)

logger = logging.getLogger(__name__)

MANIFEST_NAME = "manifest.json"


def normalize_run_id(run_id: str) -> str:
    """Turn a timestamp-like run id into ``YYYYMMDD_HHMMSS``; otherwise keep safe characters only."""
    if not run_id:
        return "run"
    digits = re.findall(r"\d", run_id)
    if len(digits) >= 14:
        normalized = "".join(digits[:8]) + "_" + "".join(digits[8:14])
        return normalized + "".join(digits[14:])
    sanitized = re.sub(r"[^0-9A-Za-z_-]+", "", run_id.strip())
    return sanitized or "run"


class FileSystemArchiveRepository:
    def __init__(self, root: Path) -> None:
        self._root = Path(root)

    def save_run(self, request: ArchiveReportRequest) -> ArchiveReceipt:
        duplicates = request.duplicate_names()
        if duplicates:
            raise ValueError(f"Archive file names collide: {', '.join(duplicates)}")

        run_id = normalize_run_id(request.run_id)
        run_dir = self._root / run_id
        manifest: dict[str, object] = {"run_id": run_id, "document_id": request.document_id}
        for role in ArchiveRole:
            manifest[role.value] = []

        written: list[Path] = []
        for role, archive_file in request.iter_files():
            target = run_dir / role.value / archive_file.safe_name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(archive_file.content)
            written.append(target)
            manifest[role.value].append(
                {
                    "name": archive_file.safe_name,
                    "path": f"{role.value}/{archive_file.safe_name}",
                    "bytes": len(archive_file.content),
                    "sha256": archive_file.sha256,
                }
            )
            logger.debug("Wrote %s (%d bytes)", target, len(archive_file.content))

        run_dir.mkdir(parents=True, exist_ok=True)
        (run_dir / MANIFEST_NAME).write_text(json.dumps(manifest, indent=2), encoding="utf-8")

        return ArchiveReceipt(run_id=run_id, location=run_dir, files=tuple(written))
