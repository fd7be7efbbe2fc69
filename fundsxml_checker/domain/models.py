"""Domain models for FundsXML documents.

These dataclasses hold field values exactly as they appear in the document.
Decimal views are derived on demand so that malformed values stay
representable and can still be reported.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from .numbers import parse_decimal


@dataclass(frozen=True)
class Position:
    """A single holding within a fund's portfolio."""

    unique_id: str
    currency: str
    total_value: str | None = None
    total_percentage: str | None = None

    @property
    def value_amount(self) -> Decimal | None:
        return parse_decimal(self.total_value)

    @property
    def percentage_amount(self) -> Decimal | None:
        return parse_decimal(self.total_percentage)


@dataclass(frozen=True)
class Fund:
    """A fund with its reported NAV and the positions backing it."""

    official_name: str
    currency: str
    nav_date: str
    isin: str | None = None
    total_net_asset_value: str | None = None
    positions: tuple[Position, ...] = field(default_factory=tuple)

    @property
    def nav_amount(self) -> Decimal | None:
        return parse_decimal(self.total_net_asset_value)


@dataclass(frozen=True)
class FundDocument:
    """Root of a parsed FundsXML document."""

    unique_document_id: str
    content_date: str
    document_generated: str
    funds: tuple[Fund, ...] = field(default_factory=tuple)
    data_supplier: str | None = None
