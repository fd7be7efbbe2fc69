"""Application services orchestrating the FundsXML evaluation workflow."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from fundsxml_checker.application.dto import EvaluationResponse
from fundsxml_checker.domain.repositories import FundDocumentRepository
from fundsxml_checker.domain.services import FieldEvaluator

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class EvaluationContext:
    repository: FundDocumentRepository
    evaluator: FieldEvaluator


class EvaluateDocumentUseCase:
    def __init__(self, context: EvaluationContext) -> None:
        self._context = context

    def execute(self) -> EvaluationResponse:
        document = self._context.repository.load_document()
        report = self._context.evaluator.evaluate_document(document)
        summary = report.summary
        logger.info(
            "Evaluated %d funds (%d positions): %d inconsistent, %d missing, %d invalid",
            summary.total_funds,
            summary.total_positions,
            summary.inconsistent_funds,
            summary.missing_fields,
            summary.invalid_fields,
        )
        return EvaluationResponse(report=report, document=document)
