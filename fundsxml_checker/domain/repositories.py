"""Repository interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Protocol

from .models import FundDocument


class FundDocumentRepository(Protocol):
    """Provides a parsed FundsXML document."""

    def load_document(self) -> FundDocument:
        ...
