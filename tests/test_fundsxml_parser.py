from io import BytesIO
from pathlib import Path

import pytest

from fundsxml_checker.infrastructure.parsing.fundsxml import FundsXmlParseError, parse_fundsxml

SAMPLE = Path(__file__).parent / "fixtures" / "sample_fundsxml.xml"


def test_parse_control_data():
    document = parse_fundsxml(SAMPLE)

    assert document.unique_document_id == "DOC-2024-0001"
    assert document.content_date == "2024-01-01"
    assert document.document_generated == "2024-01-02T08:30:00"
    assert document.data_supplier == "Acme Asset Management"
    assert len(document.funds) == 2


def test_parse_fund_prefers_amount_in_fund_currency():
    fund = parse_fundsxml(SAMPLE).funds[0]

    assert fund.official_name == "Balanced Growth Fund"
    assert fund.isin == "AT0000000001"
    assert fund.currency == "EUR"
    assert fund.nav_date == "2024-01-01"
    assert fund.total_net_asset_value == "1000.00"
    assert [p.unique_id for p in fund.positions] == ["POS-1", "POS-2"]
    assert [p.total_value for p in fund.positions] == ["600.00", "400.00"]
    assert fund.positions[1].currency == "USD"
    assert fund.positions[0].total_percentage == "60.0"


def test_parse_keeps_malformed_values():
    fund = parse_fundsxml(SAMPLE).funds[1]

    assert fund.isin is None
    assert fund.currency == "EU"
    assert fund.nav_date == ""
    assert fund.positions[1].total_value == "n/a"
    assert fund.positions[1].total_percentage is None


def test_parse_without_namespace_and_missing_sections():
    xml = b"""<FundsXML4>
        <Funds>
            <Fund>
                <Names><OfficialName>Bare</OfficialName></Names>
            </Fund>
        </Funds>
    </FundsXML4>"""

    document = parse_fundsxml(BytesIO(xml))

    assert document.unique_document_id == ""
    assert document.content_date == ""
    assert document.data_supplier is None
    fund = document.funds[0]
    assert fund.official_name == "Bare"
    assert fund.currency == ""
    assert fund.total_net_asset_value is None
    assert fund.positions == ()


def test_plain_text_total_value_is_used():
    xml = b"""<FundsXML4><Funds><Fund><Currency>EUR</Currency>
        <FundDynamicData><Portfolios><Portfolio><Positions>
            <Position><UniqueID>P</UniqueID><TotalValue>12.5</TotalValue></Position>
        </Positions></Portfolio></Portfolios></FundDynamicData>
    </Fund></Funds></FundsXML4>"""

    position = parse_fundsxml(xml).funds[0].positions[0]

    assert position.total_value == "12.5"
    assert position.currency == ""


def test_malformed_xml_raises_parse_error():
    with pytest.raises(FundsXmlParseError):
        parse_fundsxml(b"<FundsXML4><Funds>")


def test_wrong_root_raises_parse_error():
    with pytest.raises(FundsXmlParseError, match="FundsXML4"):
        parse_fundsxml(b"<Invoice/>")


def test_unsupported_source_type():
    with pytest.raises(TypeError):
        parse_fundsxml(42)


def test_field_text_is_kept_verbatim():
    xml = b"""<FundsXML4><Funds><Fund><Currency> EUR</Currency>
        <FundDynamicData><TotalAssetValues><TotalAssetValue>
            <TotalNetAssetValue><Amount ccy="EUR">  </Amount></TotalNetAssetValue>
        </TotalAssetValue></TotalAssetValues></FundDynamicData>
    </Fund></Funds></FundsXML4>"""

    fund = parse_fundsxml(xml).funds[0]

    assert fund.currency == " EUR"
    assert fund.total_net_asset_value == "  "
