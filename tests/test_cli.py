import json
from pathlib import Path

from fundsxml_checker.cli import EXIT_ISSUES, EXIT_OK, EXIT_UNREADABLE, main

SAMPLE = Path(__file__).parent / "fixtures" / "sample_fundsxml.xml"

CLEAN = """<FundsXML4>
    <ControlData><UniqueDocumentID>CLEAN</UniqueDocumentID><ContentDate>2024-01-01</ContentDate></ControlData>
    <Funds><Fund>
        <Names><OfficialName>Clean Fund</OfficialName></Names>
        <Currency>EUR</Currency>
        <FundDynamicData>
            <TotalAssetValues><TotalAssetValue>
                <NavDate>2024-01-01</NavDate>
                <TotalNetAssetValue><Amount ccy="EUR">10.00</Amount></TotalNetAssetValue>
            </TotalAssetValue></TotalAssetValues>
            <Portfolios><Portfolio><Positions>
                <Position><UniqueID>A</UniqueID><Currency>EUR</Currency><TotalValue><Amount ccy="EUR">10.00</Amount></TotalValue></Position>
            </Positions></Portfolio></Portfolios>
        </FundDynamicData>
    </Fund></Funds>
</FundsXML4>"""


def test_cli_writes_reports(tmp_path: Path, capsys):
    html_path = tmp_path / "report.html"
    csv_path = tmp_path / "funds.csv"
    issues_path = tmp_path / "issues.csv"
    xlsx_path = tmp_path / "report.xlsx"

    code = main(
        [
            str(SAMPLE),
            "--html", str(html_path),
            "--csv", str(csv_path),
            "--issues-csv", str(issues_path),
            "--xlsx", str(xlsx_path),
        ]
    )

    assert code == EXIT_OK
    assert "Balanced Growth Fund" in html_path.read_text(encoding="utf-8")
    assert csv_path.read_bytes().startswith(b"official_name,")
    assert b"NavDate" in issues_path.read_bytes()
    assert xlsx_path.stat().st_size > 0
    out = capsys.readouterr().out
    assert "Inconsistent funds: 1" in out
    assert "Short Duration Fund" in out


def test_cli_fail_on_issues(tmp_path: Path):
    assert main([str(SAMPLE), "--fail-on-issues"]) == EXIT_ISSUES

    clean = tmp_path / "clean.xml"
    clean.write_text(CLEAN, encoding="utf-8")
    assert main([str(clean), "--fail-on-issues"]) == EXIT_OK


def test_cli_unreadable_document(tmp_path: Path):
    broken = tmp_path / "broken.xml"
    broken.write_text("<FundsXML4>", encoding="utf-8")

    assert main([str(broken)]) == EXIT_UNREADABLE
    assert main([str(tmp_path / "missing.xml")]) == EXIT_UNREADABLE


def test_cli_archives_run(tmp_path: Path):
    archive_dir = tmp_path / "archive"

    code = main([str(SAMPLE), "--archive", "--archive-dir", str(archive_dir), "--run-id", "2024-01-02 08:30:00"])

    assert code == EXIT_OK
    run_dir = archive_dir / "20240102_083000"
    manifest = json.loads((run_dir / "manifest.json").read_text())
    assert manifest["document_id"] == "DOC-2024-0001"
    assert [entry["name"] for entry in manifest["inputs"]] == ["sample_fundsxml.xml"]
    assert [entry["name"] for entry in manifest["outputs"]] == ["report.html"]
    assert (run_dir / "inputs" / "sample_fundsxml.xml").read_bytes() == SAMPLE.read_bytes()
    assert (run_dir / "outputs" / "report.html").is_file()
