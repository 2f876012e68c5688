from procnorm.adapters import proact
from procnorm.config import TransformConfig

CONFIG = TransformConfig(transform="proact-contracts")

ROW = {
    "tender_id": "T1",
    "lot_row_nr": "2",
    "tender_country": "HU",
    "tender_title": "Road works",
    "lot_title": "Resurfacing",
    "buyer_name": "Budapest Főváros",
    "buyer_id": "15735636",
    "buyer_city": "Budapest",
    "buyer_postcode": "1052",
    "buyer_country": "HU",
    "buyer_buyertype": "REGIONAL_AUTHORITY",
    "bidder_name": "Strabag Kft.",
    "bidder_country": "AT",
    "bid_price": "",
    "bid_pricecurrency": "HUF",
    "tender_publications_firstcallfortenderdate": "2019-05-12",
    "tender_proceduretype": "OPEN",
    "tender_cpvs": "45000000,45233000",
}


def test_contract():
    contract = proact.contract(ROW, CONFIG)

    assert contract["id"] == "HU_T1-2"
    assert contract["country"] == "HU"
    assert contract["title"] == "Resurfacing"
    assert contract["publish_date"] == "2019-05-12T00:00:00.000+00:00"
    assert contract["award_date"] is None
    assert contract["buyer"] == {"id": "budapest-fovaros-hu", "name": "Budapest Főváros", "country": "HU"}
    assert contract["supplier"] == {"id": "strabag-kft-at", "name": "Strabag Kft.", "country": "AT"}
    assert contract["categories"] == ["45000000", "45233000"]
    assert contract["source"] == "proact"


def test_absent_amount_is_omitted_not_zeroed():
    assert "amount" not in proact.contract(ROW, CONFIG)
    assert "amount" not in proact.contract({**ROW, "bid_price": "n/a"}, CONFIG)
    assert proact.contract({**ROW, "bid_price": "1234.5"}, CONFIG)["amount"] == 1234.5


def test_configured_country_wins_except_for_ted():
    assert proact.contract(ROW, TransformConfig(country="sk"))["id"] == "SK_T1-2"
    assert proact.contract(ROW, TransformConfig(country="ted"))["id"] == "HU_T1-2"


def test_entities_match_contract_references():
    contract = proact.contract(ROW, CONFIG)
    buyer = proact.buyer(ROW, CONFIG)
    supplier = proact.supplier(ROW, CONFIG)

    assert buyer["id"] == contract["buyer"]["id"]
    assert buyer["identifier"] == "15735636"
    assert buyer["address"] == {"locality": "Budapest", "postal_code": "1052", "country": "HU"}
    assert buyer["classification"] == "REGIONAL_AUTHORITY"
    assert supplier["id"] == contract["supplier"]["id"]
    assert supplier["identifier"] == ""


def test_rows_without_tender_or_name_are_dropped():
    assert proact.contract({**ROW, "tender_id": ""}, CONFIG) is None
    assert proact.buyer({**ROW, "buyer_name": "A"}, CONFIG) is None


def test_configured_country_reaches_buyer_references_and_entities():
    config = TransformConfig(country="sk")
    contract = proact.contract(ROW, config)
    buyer = proact.buyer(ROW, config)

    assert contract["buyer"]["country"] == "SK"
    assert buyer["country"] == "SK"
    assert buyer["id"] == contract["buyer"]["id"] == "budapest-fovaros-sk"
    assert contract["supplier"]["country"] == "AT"

    ted = TransformConfig(country="ted")
    assert proact.contract(ROW, ted)["buyer"]["country"] == "HU"
    assert proact.buyer(ROW, ted)["country"] == "HU"


def test_non_finite_amount_is_omitted():
    for price in ("Infinity", "-inf", "nan", "1_000"):
        assert "amount" not in proact.contract({**ROW, "bid_price": price}, CONFIG)
