"""Streamlit front-end for the FundsXML checker."""
from __future__ import annotations

from datetime import datetime
from io import BytesIO

import pandas as pd
import streamlit as st
import streamlit.components.v1 as components

from fundsxml_checker import (
    EvaluateDocumentUseCase,
    EvaluationContext,
    FieldEvaluator,
    FundsXmlDocumentRepository,
    FundsXmlParseError,
)
from fundsxml_checker.application.archive.use_cases import ArchiveReportUseCase
from fundsxml_checker.application.dto import EvaluationResponse
from fundsxml_checker.config import SETTINGS
from fundsxml_checker.domain.archive.entities import ArchiveFile, ArchiveReportRequest
from fundsxml_checker.infrastructure.archive.file_repository import FileSystemArchiveRepository
from fundsxml_checker.logger import setup_logger
from fundsxml_checker.presentation.report import (
    fund_rows,
    issue_rows,
    position_rows,
    render_csv,
    render_excel,
    render_html,
)

logger = setup_logger("fundsxml_checker", level=SETTINGS.log_level)

st.set_page_config(page_title="FundsXML Checker", layout="wide")
st.title("FundsXML Consistency Check")


def run_evaluation(xml_bytes: bytes) -> EvaluationResponse:
    context = EvaluationContext(
        repository=FundsXmlDocumentRepository(BytesIO(xml_bytes)),
        evaluator=FieldEvaluator(
            consistency_places=SETTINGS.consistency_places,
            decimal_context=SETTINGS.decimal_context,
        ),
    )
    return EvaluateDocumentUseCase(context).execute()


if "result" not in st.session_state:
    st.session_state["result"] = None

uploaded = st.file_uploader("Upload FundsXML file", type=["xml"])
run_btn = st.button("Run Check", disabled=uploaded is None)
if run_btn and uploaded is not None:
    xml_bytes = uploaded.read()
    with st.spinner("Checking..."):
        try:
            response = run_evaluation(xml_bytes)
        except FundsXmlParseError as exc:
            logger.warning("Rejected upload %s: %s", uploaded.name, exc)
            st.error(str(exc))
            response = None
    if response is not None:
        st.session_state["result"] = {
            "file_name": uploaded.name,
            "xml": xml_bytes,
            "response": response,
            "html": render_html(response.report, response.document),
        }

result = st.session_state.get("result")
if not result:
    st.info("Upload a FundsXML document and run the check.")
else:
    response: EvaluationResponse = result["response"]
    report = response.report
    document = response.document
    summary = report.summary

    st.subheader(f"Document {document.unique_document_id or '-'}")
    st.caption(f"Content date {document.content_date or 'missing'} · generated {document.document_generated or '-'}")
    cols = st.columns(5)
    cols[0].metric("Funds", summary.total_funds)
    cols[1].metric("Positions", summary.total_positions)
    cols[2].metric("Inconsistent funds", summary.inconsistent_funds)
    cols[3].metric("Missing fields", summary.missing_fields)
    cols[4].metric("Invalid fields", summary.invalid_fields)

    tabs = st.tabs(["Funds", "Positions", "Issues", "Report"])
    with tabs[0]:
        funds = fund_rows(report)
        st.dataframe(pd.DataFrame(funds))
        st.download_button(
            "Download fund CSV",
            data=render_csv(funds),
            file_name="fundsxml_funds.csv",
            mime="text/csv",
        )
    with tabs[1]:
        st.dataframe(pd.DataFrame(position_rows(report)))
    with tabs[2]:
        issues = issue_rows(report)
        if issues:
            st.dataframe(pd.DataFrame(issues))
        else:
            st.success("No missing or invalid fields.")
    with tabs[3]:
        components.html(result["html"], height=800, scrolling=True)

    workbook = render_excel(report)
    col1, col2, col3 = st.columns(3)
    with col1:
        st.download_button(
            "Download HTML report",
            data=result["html"].encode("utf-8"),
            file_name="fundsxml_report.html",
            mime="text/html",
        )
    with col2:
        st.download_button(
            "Download Excel workbook",
            data=workbook,
            file_name="fundsxml_report.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )
    with col3:
        if st.button("Archive run"):
            request = ArchiveReportRequest(
                run_id=datetime.now().strftime("%Y%m%d_%H%M%S"),
                document_id=document.unique_document_id,
                inputs=[ArchiveFile(name=result["file_name"], content=result["xml"])],
                outputs=[
                    ArchiveFile(name="report.html", content=result["html"].encode("utf-8")),
                    ArchiveFile(name="report.xlsx", content=workbook),
                ],
            )
            receipt = ArchiveReportUseCase(repository=FileSystemArchiveRepository(SETTINGS.archive_dir)).execute(request)
            st.success(f"Archived to {receipt.location}")
