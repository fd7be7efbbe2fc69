"""Domain services implementing the FundsXML evaluation rules."""
from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Context, Decimal

from .models import Fund, FundDocument, Position
from .numbers import is_blank, parse_decimal
from .results import (
    ConsistencyResult,
    EvaluationReport,
    EvaluationSummary,
    FieldClassification,
    FieldKind,
    FieldStatus,
    FundReport,
    PositionReport,
)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


class FieldEvaluator:
    """Classifies FundsXML fields and checks reported NAV against position values.

    Every public method is total: absent or malformed input degrades to a
    ``Missing``/``InvalidFormat`` classification or to a zero contribution,
    never to an exception.
    """

    def __init__(self, consistency_places: int = 2, decimal_context: Context | None = None) -> None:
        context = (decimal_context or Context(prec=28)).copy()
        context.clear_traps()
        self._context = context
        self._scale = Decimal(10) ** consistency_places

    def evaluate_consistency(self, fund: Fund) -> ConsistencyResult:
        ctx = self._context
        # Rounded to the context precision, like every partial sum below.
        reported_nav = ctx.plus(fund.nav_amount or ZERO)

        sum_of_positions = ZERO
        for position in fund.positions:
            sum_of_positions = ctx.add(sum_of_positions, position.value_amount or ZERO)

        difference = ctx.subtract(reported_nav, sum_of_positions)
        if reported_nav != ZERO:
            percentage_difference = ctx.multiply(ctx.divide(difference, reported_nav), HUNDRED)
        else:
            percentage_difference = ZERO

        scaled = ctx.multiply(difference, self._scale)
        is_consistent = scaled.to_integral_value(rounding=ROUND_HALF_UP, context=ctx) == ZERO

        return ConsistencyResult(
            reported_nav=reported_nav,
            sum_of_positions=sum_of_positions,
            difference=difference,
            percentage_difference=percentage_difference,
            is_consistent=is_consistent,
        )

    @staticmethod
    def classify_date(raw: str | None, label: str = "") -> FieldClassification:
        # Presence only; the expected format is a display hint.
        status = FieldStatus.MISSING if is_blank(raw) else FieldStatus.VALID
        return FieldClassification(kind=FieldKind.DATE, status=status, raw=raw, label=label)

    @staticmethod
    def classify_numeric(raw: str | None, label: str = "") -> FieldClassification:
        if raw is None or raw == "":
            status = FieldStatus.MISSING
        elif parse_decimal(raw) is None:
            status = FieldStatus.INVALID_FORMAT
        else:
            status = FieldStatus.VALID
        return FieldClassification(kind=FieldKind.NUMERIC, status=status, raw=raw, label=label)

    @staticmethod
    def classify_currency(raw: str | None, label: str = "") -> FieldClassification:
        if raw is None or raw == "":
            status = FieldStatus.MISSING
        elif len(raw) == 3:
            status = FieldStatus.VALID
        else:
            status = FieldStatus.INVALID_FORMAT
        return FieldClassification(kind=FieldKind.CURRENCY, status=status, raw=raw, label=label)

    def evaluate_position(self, position: Position) -> PositionReport:
        checks = (
            self.classify_numeric(position.total_value, label="TotalValue"),
            self.classify_currency(position.currency, label="Currency"),
        )
        return PositionReport(position=position, checks=checks)

    def evaluate_fund(self, fund: Fund) -> FundReport:
        checks = (
            self.classify_date(fund.nav_date, label="NavDate"),
            self.classify_currency(fund.currency, label="Currency"),
            self.classify_numeric(fund.total_net_asset_value, label="TotalNetAssetValue"),
        )
        return FundReport(
            fund=fund,
            consistency=self.evaluate_consistency(fund),
            checks=checks,
            positions=tuple(self.evaluate_position(position) for position in fund.positions),
        )

    def evaluate_document(self, document: FundDocument) -> EvaluationReport:
        document_checks = (self.classify_date(document.content_date, label="ContentDate"),)
        fund_reports = tuple(self.evaluate_fund(fund) for fund in document.funds)

        all_checks = list(document_checks)
        for fund_report in fund_reports:
            all_checks.extend(fund_report.iter_checks())

        summary = EvaluationSummary(
            total_funds=len(fund_reports),
            total_positions=sum(len(fund_report.positions) for fund_report in fund_reports),
            inconsistent_funds=len([r for r in fund_reports if not r.consistency.is_consistent]),
            missing_fields=len([c for c in all_checks if c.status is FieldStatus.MISSING]),
            invalid_fields=len([c for c in all_checks if c.status is FieldStatus.INVALID_FORMAT]),
            generated_at=datetime.now(timezone.utc),
        )
        return EvaluationReport(summary=summary, document_checks=document_checks, funds=fund_reports)
