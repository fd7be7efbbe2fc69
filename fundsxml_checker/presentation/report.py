"""Report generators for FundsXML evaluation results."""
from __future__ import annotations

import csv
import io
from decimal import Decimal
from typing import Sequence

import pandas as pd
from jinja2 import Environment, PackageLoader, select_autoescape

from fundsxml_checker.config import SETTINGS
from fundsxml_checker.domain.models import FundDocument
from fundsxml_checker.domain.results import EvaluationReport, FieldStatus

STATUS_CSS = {
    FieldStatus.VALID: "ok",
    FieldStatus.INVALID_FORMAT: "warn",
    FieldStatus.MISSING: "error",
}


def format_amount(value: Decimal | None, places: int = 2) -> str:
    if value is None:
        return ""
    return f"{value:,.{places}f}"


def fund_rows(report: EvaluationReport) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for item in report.funds:
        fund = item.fund
        consistency = item.consistency
        rows.append(
            {
                "official_name": fund.official_name,
                "isin": fund.isin or "",
                "currency": fund.currency,
                "nav_date": fund.nav_date,
                "positions": str(len(item.positions)),
                "reported_nav": format(consistency.reported_nav, "f"),
                "sum_of_positions": format(consistency.sum_of_positions, "f"),
                "difference": format(consistency.difference, "f"),
                "percentage_difference": format(consistency.percentage_difference, "f"),
                "status": "consistent" if consistency.is_consistent else "mismatch",
            }
        )
    return rows


def position_rows(report: EvaluationReport) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for item in report.funds:
        for position_report in item.positions:
            position = position_report.position
            statuses = {check.label: check.status.value for check in position_report.checks}
            rows.append(
                {
                    "fund": item.fund.official_name,
                    "unique_id": position.unique_id,
                    "currency": position.currency,
                    "total_value": position.total_value or "",
                    "total_percentage": position.total_percentage or "",
                    "value_status": statuses.get("TotalValue", ""),
                    "currency_status": statuses.get("Currency", ""),
                }
            )
    return rows


def issue_rows(report: EvaluationReport) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for fund_report, check in report.iter_findings():
        rows.append(
            {
                "fund": fund_report.fund.official_name if fund_report else "",
                "field": check.label,
                "kind": check.kind.value,
                "status": check.status.value,
                "raw": check.raw or "",
            }
        )
    return rows


def render_csv(rows: Sequence[dict[str, str]]) -> bytes:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(rows[0].keys()) if rows else [])
    if rows:
        writer.writeheader()
        writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def render_excel(report: EvaluationReport) -> bytes:
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        pd.DataFrame(fund_rows(report)).to_excel(writer, sheet_name="Funds", index=False)
        pd.DataFrame(position_rows(report)).to_excel(writer, sheet_name="Positions", index=False)
        pd.DataFrame(issue_rows(report)).to_excel(writer, sheet_name="Issues", index=False)
    return buffer.getvalue()


def _environment() -> Environment:
    env = Environment(
        loader=PackageLoader("fundsxml_checker", "presentation/templates"),
        autoescape=select_autoescape(["html", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["amount"] = format_amount
    env.filters["status_css"] = lambda status: STATUS_CSS.get(status, "")
    return env


def render_html(report: EvaluationReport, document: FundDocument) -> str:
    template = _environment().get_template("report.html.j2")
    return template.render(
        report=report,
        document=document,
        date_format_hint=SETTINGS.date_format_hint,
    )
