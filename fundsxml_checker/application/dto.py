"""Application-level DTOs for FundsXML evaluation."""
from __future__ import annotations

from dataclasses import dataclass

from fundsxml_checker.domain.models import FundDocument
from fundsxml_checker.domain.results import EvaluationReport


@dataclass(slots=True, frozen=True)
class EvaluationResponse:
    report: EvaluationReport
    document: FundDocument
