"""
ProACT (GTI procurement anti-corruption dataset) flat rows.

One row is one bid on one lot. Amounts are omitted when missing, never zeroed.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..config import TransformConfig
from ..countries import resolve_country_code
from ..identity import generate_entity_id, get_contract_id
from ..models import Contract, Entity
from ..normalize import parse_iso_date
from ..rules import SOURCE_PROACT, TED_SOURCE
from .common import address, amount_or_none, dedupe, party_reference, text


def configured_country(config: TransformConfig) -> str:
    """The configured country applies to buyers and contracts, never for the "ted" dataset."""
    if config.country and config.country.lower() != TED_SOURCE:
        return config.country.upper()
    return ""


def row_country(row: Dict[str, Any], config: TransformConfig) -> str:
    return (
        configured_country(config)
        or resolve_country_code(row.get("tender_country"))
        or resolve_country_code(row.get("buyer_country"))
    )


def buyer_country(row: Dict[str, Any], config: TransformConfig) -> str:
    return configured_country(config) or resolve_country_code(row.get("buyer_country")) or row_country(row, config)


def bidder_country(row: Dict[str, Any], config: TransformConfig) -> str:
    return resolve_country_code(row.get("bidder_country")) or row_country(row, config)


def _native_id(row: Dict[str, Any]) -> Optional[str]:
    tender_id = text(row.get("tender_id"))
    if not tender_id:
        return None
    lot = text(row.get("lot_row_nr"))
    return f"{tender_id}-{lot}" if lot else tender_id


def contract(row: Dict[str, Any], config: TransformConfig) -> Optional[Dict[str, Any]]:
    native_id = _native_id(row)
    if not native_id:
        return None

    country = row_country(row, config)
    categories = dedupe((text(row.get("tender_cpvs")) or "").split(","))
    return Contract(
        id=get_contract_id(country, native_id),
        country=country,
        title=text(row.get("lot_title")) or text(row.get("tender_title")),
        description=text(row.get("tender_title")),
        publish_date=parse_iso_date(row.get("tender_publications_firstcallfortenderdate")),
        award_date=parse_iso_date(row.get("tender_publications_firstdcontractawarddate")),
        contract_date=parse_iso_date(row.get("tender_contractsignaturedate")),
        buyer=party_reference(row.get("buyer_name"), buyer_country(row, config)),
        supplier=party_reference(row.get("bidder_name"), bidder_country(row, config)),
        amount=amount_or_none(row.get("bid_price")),
        currency=text(row.get("bid_pricecurrency")),
        method=text(row.get("tender_proceduretype")),
        category=text(row.get("tender_supplytype")),
        categories=categories or None,
        url=text(row.get("notice_url")) or text(row.get("tender_publications_lastcontractawardurl")),
        source=SOURCE_PROACT,
    ).to_record()


def _entity(row: Dict[str, Any], prefix: str, country: str) -> Optional[Dict[str, Any]]:
    name = text(row.get(f"{prefix}_name"))
    if not name or len(name) < 2:
        return None
    return Entity(
        id=generate_entity_id(name, country),
        name=name,
        identifier=text(row.get(f"{prefix}_id")) or "",
        country=country,
        address=address(
            street=row.get(f"{prefix}_street"),
            locality=row.get(f"{prefix}_city"),
            region=row.get(f"{prefix}_nuts"),
            postal_code=row.get(f"{prefix}_postcode"),
            country=country,
        ),
        classification=text(row.get(f"{prefix}_buyertype")),
        source=SOURCE_PROACT,
        updated_date=parse_iso_date(row.get("tender_publications_firstdcontractawarddate")),
    ).to_record()


def buyer(row: Dict[str, Any], config: TransformConfig) -> Optional[Dict[str, Any]]:
    return _entity(row, "buyer", buyer_country(row, config))


def supplier(row: Dict[str, Any], config: TransformConfig) -> Optional[Dict[str, Any]]:
    return _entity(row, "bidder", bidder_country(row, config))
