"""XML-backed repositories for FundsXML documents."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path

from fundsxml_checker.domain.models import FundDocument
from fundsxml_checker.domain.repositories import FundDocumentRepository
from fundsxml_checker.infrastructure.parsing.fundsxml import parse_fundsxml
from fundsxml_checker.infrastructure.parsing.utils import compute_file_hash, ensure_bytes


class FundsXmlDocumentRepository(FundDocumentRepository):
    def __init__(self, source: BytesIO | Path | bytes | str) -> None:
        self._source = ensure_bytes(source)

    @property
    def raw_bytes(self) -> bytes:
        return self._source

    @property
    def file_hash(self) -> str:
        return compute_file_hash(self._source)

    def load_document(self) -> FundDocument:
        return parse_fundsxml(self._source)
