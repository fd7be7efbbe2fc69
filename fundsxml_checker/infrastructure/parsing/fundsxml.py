"""FundsXML4 parser producing canonical fund documents."""
from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path

from lxml import etree

from fundsxml_checker.domain.models import Fund, FundDocument, Position
from fundsxml_checker.infrastructure.parsing.utils import (
    ensure_bytes,
    find_all,
    find_path,
    find_text,
    iter_children,
    local_name,
    text_of,
)

logger = logging.getLogger(__name__)

ROOT_ELEMENT = "FundsXML4"
TOTAL_ASSET_VALUE_PATH = "FundDynamicData/TotalAssetValues/TotalAssetValue"
POSITION_PATH = "FundDynamicData/Portfolios/Portfolio/Positions/Position"


class FundsXmlParseError(ValueError):
    """Raised when the input cannot be read as a FundsXML document."""


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)


def _pick_amount(container: etree._Element | None, preferred_ccy: str) -> str | None:
    amounts = list(iter_children(container, "Amount"))
    if not amounts:
        return text_of(container) if container is not None and len(container) == 0 else None
    preferred = (preferred_ccy or "").strip().upper()
    if preferred:
        for amount in amounts:
            if (amount.get("ccy") or "").strip().upper() == preferred:
                return text_of(amount)
    return text_of(amounts[0])


def _parse_position(element: etree._Element, fund_currency: str) -> Position:
    return Position(
        unique_id=find_text(element, "UniqueID") or "",
        currency=find_text(element, "Currency") or "",
        total_value=_pick_amount(find_path(element, "TotalValue"), fund_currency),
        total_percentage=find_text(element, "TotalPercentage"),
    )


def _parse_fund(element: etree._Element) -> Fund:
    currency = find_text(element, "Currency") or ""
    total_asset_value = find_path(element, TOTAL_ASSET_VALUE_PATH)
    positions = tuple(_parse_position(item, currency) for item in find_all(element, POSITION_PATH))
    return Fund(
        official_name=find_text(element, "Names/OfficialName") or "",
        currency=currency,
        isin=find_text(element, "Identifiers/ISIN") or None,
        nav_date=find_text(total_asset_value, "NavDate") or "",
        total_net_asset_value=_pick_amount(find_path(total_asset_value, "TotalNetAssetValue"), currency),
        positions=positions,
    )


def parse_fundsxml(source: BytesIO | Path | bytes | str) -> FundDocument:
    raw_bytes = ensure_bytes(source)
    try:
        root = etree.fromstring(raw_bytes, parser=_make_parser())
    except etree.XMLSyntaxError as exc:
        raise FundsXmlParseError(f"Malformed XML: {exc}") from exc
    if local_name(root) != ROOT_ELEMENT:
        raise FundsXmlParseError(f"Expected a {ROOT_ELEMENT} root element, found {local_name(root)}")

    control_data = find_path(root, "ControlData")
    funds = tuple(_parse_fund(element) for element in find_all(root, "Funds/Fund"))
    document = FundDocument(
        unique_document_id=find_text(control_data, "UniqueDocumentID") or "",
        content_date=find_text(control_data, "ContentDate") or "",
        document_generated=find_text(control_data, "DocumentGenerated") or "",
        funds=funds,
        data_supplier=find_text(control_data, "DataSupplier/Name") or None,
    )
    logger.debug(
        "Parsed document %s with %d funds and %d positions",
        document.unique_document_id or "<no id>",
        len(funds),
        sum(len(fund.positions) for fund in funds),
    )
    return document
