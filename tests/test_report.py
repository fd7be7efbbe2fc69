import csv
import io
from decimal import Decimal
from pathlib import Path

import pandas as pd
import pytest

from fundsxml_checker import FieldEvaluator, parse_fundsxml
from fundsxml_checker.domain.models import Fund, FundDocument, Position
from fundsxml_checker.presentation.report import (
    format_amount,
    fund_rows,
    issue_rows,
    position_rows,
    render_csv,
    render_excel,
    render_html,
)

SAMPLE = Path(__file__).parent / "fixtures" / "sample_fundsxml.xml"


@pytest.fixture
def evaluated():
    document = parse_fundsxml(SAMPLE)
    return FieldEvaluator().evaluate_document(document), document


def test_format_amount():
    assert format_amount(Decimal("1234567.891")) == "1,234,567.89"
    assert format_amount(Decimal("-0.5")) == "-0.50"
    assert format_amount(None) == ""


def test_fund_rows(evaluated):
    report, _ = evaluated
    rows = fund_rows(report)

    assert [row["status"] for row in rows] == ["consistent", "mismatch"]
    assert rows[1]["difference"] == "0.50"
    assert rows[0]["isin"] == "AT0000000001"


def test_fund_rows_use_plain_notation():
    document = FundDocument(
        unique_document_id="DOC",
        content_date="2024-01-01",
        document_generated="",
        funds=(
            Fund(official_name="Exp", currency="EUR", nav_date="2024-01-01", total_net_asset_value="1E+3",
                 positions=(Position(unique_id="P", currency="EUR", total_value="1000"),)),
            Fund(official_name="Tiny", currency="EUR", nav_date="2024-01-01",
                 total_net_asset_value="1." + "0" * 26 + "8",
                 positions=(Position(unique_id="P", currency="EUR", total_value="1"),)),
        ),
    )

    rows = fund_rows(FieldEvaluator().evaluate_document(document))

    assert rows[0]["reported_nav"] == "1000"
    assert rows[1]["difference"] == "0." + "0" * 26 + "8"
    assert all("E" not in value for row in rows for value in row.values())


def test_position_and_issue_rows(evaluated):
    report, _ = evaluated

    positions = position_rows(report)
    assert len(positions) == 4
    assert positions[3]["value_status"] == "InvalidFormat"

    issues = issue_rows(report)
    assert {(row["field"], row["status"]) for row in issues} == {
        ("NavDate", "Missing"),
        ("Currency", "InvalidFormat"),
        ("TotalValue", "InvalidFormat"),
    }


def test_render_csv(evaluated):
    report, _ = evaluated
    payload = render_csv(fund_rows(report)).decode("utf-8")

    rows = list(csv.DictReader(io.StringIO(payload)))
    assert rows[0]["official_name"] == "Balanced Growth Fund"


def test_render_csv_empty():
    assert render_csv([]) == b""


def test_render_excel_has_three_sheets(evaluated):
    report, _ = evaluated
    workbook = pd.read_excel(io.BytesIO(render_excel(report)), sheet_name=None, engine="openpyxl")

    assert set(workbook) == {"Funds", "Positions", "Issues"}
    assert len(workbook["Positions"]) == 4


def test_render_html(evaluated):
    report, document = evaluated
    html = render_html(report, document)

    assert "DOC-2024-0001" in html
    assert "Balanced Growth Fund" in html
    assert "1,000.00" in html
    assert "Mismatch" in html
    assert "0.05%" in html
    assert "expected YYYY-MM-DD" in html


def test_render_html_escapes_document_values():
    document = parse_fundsxml(
        b"<FundsXML4><Funds><Fund><Names><OfficialName>&lt;script&gt;</OfficialName></Names></Fund></Funds></FundsXML4>"
    )
    html = render_html(FieldEvaluator().evaluate_document(document), document)

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
