"""Archive application use cases."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from fundsxml_checker.domain.archive.entities import ArchiveReceipt, ArchiveReportRequest
from fundsxml_checker.infrastructure.archive.file_repository import FileSystemArchiveRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ArchiveReportUseCase:
    repository: FileSystemArchiveRepository

    def execute(self, request: ArchiveReportRequest) -> ArchiveReceipt:
        receipt = self.repository.save_run(request)
        logger.info("Archived run %s to %s", receipt.run_id, receipt.location)
        return receipt
