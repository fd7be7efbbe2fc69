"""Domain-level results for FundsXML evaluation."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Iterable, Sequence

from .models import Fund, Position


class FieldKind(str, Enum):
    DATE = "Date"
    NUMERIC = "Numeric"
    CURRENCY = "Currency"


class FieldStatus(str, Enum):
    VALID = "Valid"
    INVALID_FORMAT = "InvalidFormat"
    MISSING = "Missing"


@dataclass(frozen=True)
class FieldClassification:
    kind: FieldKind
    status: FieldStatus
    raw: str | None
    label: str = ""

    @property
    def is_valid(self) -> bool:
        return self.status is FieldStatus.VALID


@dataclass(frozen=True)
class ConsistencyResult:
    """Reported NAV compared with the sum of position values."""

    reported_nav: Decimal
    sum_of_positions: Decimal
    difference: Decimal
    percentage_difference: Decimal
    is_consistent: bool


@dataclass(frozen=True)
class PositionReport:
    position: Position
    checks: Sequence[FieldClassification] = field(default_factory=tuple)


@dataclass(frozen=True)
class FundReport:
    fund: Fund
    consistency: ConsistencyResult
    checks: Sequence[FieldClassification] = field(default_factory=tuple)
    positions: Sequence[PositionReport] = field(default_factory=tuple)

    def iter_checks(self) -> Iterable[FieldClassification]:
        yield from self.checks
        for position_report in self.positions:
            yield from position_report.checks

    def iter_findings(self) -> Iterable[FieldClassification]:
        return (check for check in self.iter_checks() if not check.is_valid)


@dataclass(frozen=True)
class EvaluationSummary:
    total_funds: int
    total_positions: int
    inconsistent_funds: int
    missing_fields: int
    invalid_fields: int
    generated_at: datetime


@dataclass(frozen=True)
class EvaluationReport:
    summary: EvaluationSummary
    document_checks: Sequence[FieldClassification] = field(default_factory=tuple)
    funds: Sequence[FundReport] = field(default_factory=tuple)

    def has_issues(self) -> bool:
        return any(
            [
                self.summary.inconsistent_funds,
                self.summary.missing_fields,
                self.summary.invalid_fields,
            ]
        )

    def iter_findings(self) -> Iterable[tuple[FundReport | None, FieldClassification]]:
        for check in self.document_checks:
            if not check.is_valid:
                yield None, check
        for fund_report in self.funds:
            for check in fund_report.iter_findings():
                yield fund_report, check
