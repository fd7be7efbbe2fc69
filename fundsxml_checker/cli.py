"""Command-line entrypoint for FundsXML evaluation."""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from fundsxml_checker.application.archive.use_cases import ArchiveReportUseCase
from fundsxml_checker.application.use_cases import EvaluateDocumentUseCase, EvaluationContext
from fundsxml_checker.config import SETTINGS
from fundsxml_checker.domain.archive.entities import ArchiveFile, ArchiveReportRequest
from fundsxml_checker.domain.services import FieldEvaluator
from fundsxml_checker.infrastructure.archive.file_repository import FileSystemArchiveRepository
from fundsxml_checker.infrastructure.parsing.fundsxml import FundsXmlParseError
from fundsxml_checker.infrastructure.repositories.xml_repositories import FundsXmlDocumentRepository
from fundsxml_checker.logger import setup_logger
from fundsxml_checker.presentation.report import (
    fund_rows,
    issue_rows,
    render_csv,
    render_excel,
    render_html,
)

EXIT_OK = 0
EXIT_ISSUES = 1
EXIT_UNREADABLE = 2


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check FundsXML documents and render an HTML report")
    parser.add_argument("document", type=str, help="Path to a FundsXML4 file")
    parser.add_argument("--html", type=Path, help="Write the HTML report to this path")
    parser.add_argument("--csv", type=Path, help="Write the fund consistency table as CSV")
    parser.add_argument("--issues-csv", type=Path, help="Write missing/invalid fields as CSV")
    parser.add_argument("--xlsx", type=Path, help="Write funds, positions and issues to an Excel workbook")
    parser.add_argument("--archive", action="store_true", help="Archive the input and outputs of this run")
    parser.add_argument("--archive-dir", type=Path, default=SETTINGS.archive_dir, help="Archive root directory")
    parser.add_argument("--run-id", type=str, help="Archive run id (defaults to the current timestamp)")
    parser.add_argument("--fail-on-issues", action="store_true", help="Exit with status 1 when issues are found")
    parser.add_argument("--log-level", type=str, default=SETTINGS.log_level, help="Logging level")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    logger = setup_logger("fundsxml_checker", level=args.log_level.upper())

    try:
        repository = FundsXmlDocumentRepository(args.document)
        context = EvaluationContext(
            repository=repository,
            evaluator=FieldEvaluator(
                consistency_places=SETTINGS.consistency_places,
                decimal_context=SETTINGS.decimal_context,
            ),
        )
        response = EvaluateDocumentUseCase(context).execute()
    except (OSError, FundsXmlParseError) as exc:
        logger.error("Cannot read %s: %s", args.document, exc)
        return EXIT_UNREADABLE

    report, document = response.report, response.document
    outputs: list[ArchiveFile] = []

    html = render_html(report, document)
    outputs.append(ArchiveFile(name="report.html", content=html.encode("utf-8")))
    if args.html:
        args.html.write_text(html, encoding="utf-8")
        logger.info("HTML report written to %s", args.html)
    if args.csv:
        args.csv.write_bytes(render_csv(fund_rows(report)))
        logger.info("Fund table written to %s", args.csv)
    if args.issues_csv:
        args.issues_csv.write_bytes(render_csv(issue_rows(report)))
        logger.info("Issue table written to %s", args.issues_csv)
    if args.xlsx:
        workbook = render_excel(report)
        args.xlsx.write_bytes(workbook)
        outputs.append(ArchiveFile(name="report.xlsx", content=workbook))
        logger.info("Workbook written to %s", args.xlsx)

    if args.archive:
        request = ArchiveReportRequest(
            run_id=args.run_id or datetime.now().strftime("%Y%m%d_%H%M%S"),
            document_id=document.unique_document_id,
            inputs=[ArchiveFile(name=Path(args.document).name, content=repository.raw_bytes)],
            outputs=outputs,
        )
        receipt = ArchiveReportUseCase(repository=FileSystemArchiveRepository(args.archive_dir)).execute(request)
        print(f"Archived to {receipt.location}")

    print("Evaluation Summary")
    print("==================")
    summary = report.summary
    print(f"Document: {document.unique_document_id or '-'} ({document.content_date or 'no content date'})")
    print(f"Funds: {summary.total_funds}")
    print(f"Positions: {summary.total_positions}")
    print(f"Inconsistent funds: {summary.inconsistent_funds}")
    print(f"Missing fields: {summary.missing_fields}")
    print(f"Invalid fields: {summary.invalid_fields}")

    for fund_report in report.funds:
        consistency = fund_report.consistency
        status = "OK" if consistency.is_consistent else "MISMATCH"
        print(
            f"- {fund_report.fund.official_name or '(unnamed)'}: NAV {consistency.reported_nav} "
            f"vs positions {consistency.sum_of_positions} -> {status}"
        )

    if report.has_issues():
        print("\nIssues detected:")
        for fund_report, check in report.iter_findings():
            owner = fund_report.fund.official_name if fund_report else "document"
            print(f"- {owner}: {check.label} is {check.status.value} ({check.raw or 'empty'})")
        if args.fail_on_issues:
            return EXIT_ISSUES
    else:
        print("\nNo issues detected.")

    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
