"""
Guatecompras legacy feeds.

- `guatecompras`: OCDS releases from the old portal export, passed through
  with the space-padded `dateSigned` values repaired.
- `guatecompras-historical-*`: label-keyed award rows from the historical
  bulk download, mapped to Contract / Buyer / Supplier records.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..config import TransformConfig
from ..identity import generate_entity_id, get_contract_id
from ..models import Contract, Entity, PartyReference
from ..normalize import parse_month_date, parse_slash_date
from ..rules import (
    GUATECOMPRAS_TENDER_URL,
    GUATEMALA,
    GUATEMALA_CURRENCY,
    SOURCE_GUATECOMPRAS,
)
from .common import amount_or_none, dig, party_reference, text


NOG = "NOG"
DESCRIPTION = "Descripción"
METHOD = "Modalidad"
CATEGORY = "Categoría"
STATUS = "Estatus"
ENTITY = "Entidad"
ENTITY_TYPE = "Tipo de entidad"
UNIT = "Unidad compradora"
SUPPLIER_NIT = "NIT"
SUPPLIER = "Proveedor"
AMOUNT = "Monto"
PUBLISH_DATE = "Fecha de publicación"
AWARD_DATE = "Fecha de adjudicación"
CONTRACT_DATE = "Fecha de contrato"


def repair_signed_dates(record: Dict[str, Any], config: TransformConfig) -> Dict[str, Any]:
    """Remove the stray space the old export leaves inside contracts[].dateSigned (first one only)."""
    contracts = record.get("contracts")
    if not isinstance(contracts, list):
        return record

    repaired = []
    for contract in contracts:
        if isinstance(contract, dict) and isinstance(contract.get("dateSigned"), str):
            contract = {**contract, "dateSigned": contract["dateSigned"].replace(" ", "", 1)}
        repaired.append(contract)
    return {**record, "contracts": repaired}


def parse_portal_date(value: Any) -> Optional[str]:
    """Historical rows mix DD/MM/YYYY and "15.ene.2014 10:30:00 hrs."."""
    raw = text(value)
    if not raw:
        return None
    return parse_slash_date(raw.split(" ")[0]) or parse_month_date(raw)


def unit_entity_id(unit_name: str, entity_name: str) -> str:
    # Unit names ("Unidad de Compras") repeat across entities; qualify them.
    return generate_entity_id(f"{unit_name} {entity_name}", GUATEMALA)


def _unit_reference(row: Dict[str, Any]) -> Optional[PartyReference]:
    unit = text(row.get(UNIT))
    entity = text(row.get(ENTITY))
    if not unit or not entity:
        return None
    return PartyReference(id=unit_entity_id(unit, entity), name=unit, country=GUATEMALA)


def historical_contract(row: Dict[str, Any], config: TransformConfig) -> Optional[Dict[str, Any]]:
    nog = text(row.get(NOG))
    if not nog:
        return None

    fields: Dict[str, Any] = {
        "id": get_contract_id(GUATEMALA, nog),
        "country": GUATEMALA,
        "title": text(row.get(DESCRIPTION)),
        "description": text(row.get(DESCRIPTION)),
        "publish_date": parse_portal_date(row.get(PUBLISH_DATE)),
        "award_date": parse_portal_date(row.get(AWARD_DATE)),
        "contract_date": parse_portal_date(row.get(CONTRACT_DATE)),
        "buyer": party_reference(row.get(ENTITY), GUATEMALA),
        "procuring_entity": _unit_reference(row),
        "supplier": party_reference(row.get(SUPPLIER), GUATEMALA),
        "currency": GUATEMALA_CURRENCY,
        "method": text(row.get(METHOD)),
        "category": text(row.get(CATEGORY)),
        "status": text(row.get(STATUS)),
        "url": GUATECOMPRAS_TENDER_URL.format(nog=nog),
        "source": SOURCE_GUATECOMPRAS,
    }
    amount = amount_or_none(row.get(AMOUNT))
    if amount is not None:
        fields["amount"] = amount
    return Contract(**fields).to_record()


def historical_buyers(row: Dict[str, Any], config: TransformConfig) -> Optional[List[Dict[str, Any]]]:
    """The buying entity plus, when present, its procuring unit."""
    name = text(row.get(ENTITY))
    if not name or len(name) < 2:
        return None

    updated = parse_portal_date(row.get(PUBLISH_DATE))
    buyer = Entity(
        id=generate_entity_id(name, GUATEMALA),
        name=name,
        identifier="",
        country=GUATEMALA,
        classification=text(row.get(ENTITY_TYPE)),
        source=SOURCE_GUATECOMPRAS,
        updated_date=updated,
    )
    records = [buyer.to_record()]

    unit = _unit_reference(row)
    if unit is not None and len(unit.name) >= 2:
        records.append(
            Entity(
                id=unit.id,
                name=unit.name,
                identifier="",
                country=GUATEMALA,
                classification="unidad compradora",
                member_of=party_reference(name, GUATEMALA),
                source=SOURCE_GUATECOMPRAS,
                updated_date=updated,
            ).to_record()
        )
    return records


def historical_supplier(row: Dict[str, Any], config: TransformConfig) -> Optional[Dict[str, Any]]:
    name = text(row.get(SUPPLIER))
    if not name or len(name) < 2:
        return None
    return Entity(
        id=generate_entity_id(name, GUATEMALA),
        name=name,
        identifier=text(row.get(SUPPLIER_NIT)) or "",
        country=GUATEMALA,
        source=SOURCE_GUATECOMPRAS,
        updated_date=parse_portal_date(dig(row, AWARD_DATE)),
    ).to_record()
