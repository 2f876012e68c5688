"""
Guatecompras OCDS releases.

Parties tagged "buyer" are split into the buying entity (no `memberOf`) and
its procuring units (with `memberOf`). Contracts are only emitted for complete
tenders, one per active award.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Tuple

from ..config import TransformConfig
from ..identity import generate_entity_id, get_contract_id
from ..models import Contract, Entity, PartyReference
from ..normalize import parse_iso_date
from ..rules import GUATECOMPRAS_TENDER_URL, GUATEMALA, SOURCE_GUATECOMPRAS_OCDS
from .common import (
    address,
    amount_or_none,
    as_list,
    contact_point,
    dedupe,
    dig,
    find_party,
    index_parties,
    party_reference,
    text,
)


_SCHEME_COUNTRY = re.compile(r"^([A-Za-z]{2})-")


def _parties_with_role(release: Dict[str, Any], role: str) -> List[Dict[str, Any]]:
    return [
        party
        for party in as_list(release.get("parties"))
        if isinstance(party, dict) and role in as_list(party.get("roles"))
    ]


def split_buyer_parties(release: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], List[Dict[str, Any]]]:
    """(buying entity, procuring units) among the parties with the buyer role."""
    buyer = None
    units = []
    for party in _parties_with_role(release, "buyer"):
        if dig(party, "memberOf"):
            units.append(party)
        elif buyer is None:
            buyer = party
    return buyer, units


def _parent_name(unit: Dict[str, Any]) -> Optional[str]:
    return text(dig(unit, "memberOf", 0, "name"))


def supplier_country(party: Optional[Dict[str, Any]]) -> str:
    """Country encoded in the identifier scheme ("GT-NIT" -> "GT"), else Guatemala."""
    scheme = text(dig(party, "identifier", "scheme"))
    if scheme:
        match = _SCHEME_COUNTRY.match(scheme)
        if match:
            return match.group(1).upper()
    return GUATEMALA


def _buyer_name(release: Dict[str, Any]) -> Optional[str]:
    buyer, units = split_buyer_parties(release)
    if buyer is not None:
        return text(buyer.get("name"))
    if units:
        return _parent_name(units[0])
    return text(dig(release, "buyer", "name"))


def _unit_reference(release: Dict[str, Any]) -> Optional[PartyReference]:
    _, units = split_buyer_parties(release)
    if not units:
        return None
    return party_reference(units[0].get("name"), GUATEMALA)


def _signed_date(release: Dict[str, Any], award_id: Any) -> Optional[str]:
    for contract in as_list(release.get("contracts")):
        if isinstance(contract, dict) and contract.get("awardID") == award_id:
            signed = contract.get("dateSigned")
            if isinstance(signed, str):
                return parse_iso_date(signed.replace(" ", ""))
    return None


def contracts(release: Dict[str, Any], config: TransformConfig) -> Optional[List[Dict[str, Any]]]:
    tender = dig(release, "tender")
    if dig(tender, "status") != "complete":
        return None

    parties = index_parties(release.get("parties"))
    nog = text(dig(tender, "id")) or text(release.get("ocid"))
    buyer = party_reference(_buyer_name(release), GUATEMALA)
    unit = _unit_reference(release)
    publish_date = parse_iso_date(dig(tender, "datePublished")) or parse_iso_date(
        dig(tender, "tenderPeriod", "startDate")
    )

    records = []
    for award in as_list(release.get("awards")):
        if not isinstance(award, dict) or award.get("status") != "active":
            continue

        supplier_ref = None
        supplier = dig(award, "suppliers", 0)
        if isinstance(supplier, dict):
            supplier_party = find_party(parties, supplier)
            supplier_ref = party_reference(supplier.get("name"), supplier_country(supplier_party), GUATEMALA)

        native_id = text(award.get("id")) or nog
        fields: Dict[str, Any] = {
            "id": get_contract_id(GUATEMALA, native_id),
            "country": GUATEMALA,
            "title": text(award.get("title")) or text(dig(tender, "title")),
            "description": text(award.get("description")) or text(dig(tender, "description")),
            "publish_date": publish_date,
            "award_date": parse_iso_date(award.get("date")),
            "contract_date": _signed_date(release, award.get("id")),
            "buyer": buyer,
            "procuring_entity": unit,
            "supplier": supplier_ref,
            "currency": text(dig(award, "value", "currency")),
            "method": text(dig(tender, "procurementMethod")),
            "method_details": text(dig(tender, "procurementMethodDetails")),
            "category": text(dig(tender, "mainProcurementCategory")),
            "status": text(award.get("status")),
            "url": GUATECOMPRAS_TENDER_URL.format(nog=nog) if nog else None,
            "source": SOURCE_GUATECOMPRAS_OCDS,
        }
        amount = amount_or_none(dig(award, "value", "amount"))
        if amount is not None:
            fields["amount"] = amount
        records.append(Contract(**fields).to_record())

    return records or None


def _party_entity(
    party: Dict[str, Any],
    country: str,
    release: Dict[str, Any],
    member_of: Optional[PartyReference] = None,
) -> Optional[Dict[str, Any]]:
    name = text(party.get("name"))
    if not name or len(name) < 2:
        return None

    other_names = dedupe(
        [dig(party, "identifier", "legalName")]
        + [dig(extra, "legalName") for extra in as_list(party.get("additionalIdentifiers"))]
    )
    other_names = [other for other in other_names if other != name]
    fields: Dict[str, Any] = {
        "id": generate_entity_id(name, country),
        "name": name,
        "identifier": text(dig(party, "identifier", "id")) or "",
        "country": country,
        "address": address(
            street=dig(party, "address", "streetAddress"),
            locality=dig(party, "address", "locality"),
            region=dig(party, "address", "region"),
            postal_code=dig(party, "address", "postalCode"),
            country=country,
        ),
        "contactPoint": contact_point(
            name=dig(party, "contactPoint", "name"),
            email=dig(party, "contactPoint", "email"),
            telephone=dig(party, "contactPoint", "telephone"),
            url=dig(party, "contactPoint", "url"),
        ),
        "source": SOURCE_GUATECOMPRAS_OCDS,
        "updated_date": parse_iso_date(release.get("date")),
    }
    if other_names:
        fields["other_names"] = other_names
    if member_of is not None:
        fields["member_of"] = member_of
    classification = text(dig(party, "details", "type")) or text(dig(party, "details", "classification"))
    if classification:
        fields["classification"] = classification
    return Entity(**fields).to_record()


def buyers(release: Dict[str, Any], config: TransformConfig) -> Optional[List[Dict[str, Any]]]:
    buyer, units = split_buyer_parties(release)

    records = []
    if buyer is not None:
        records.append(_party_entity(buyer, GUATEMALA, release))
    for unit in units:
        parent = party_reference(_parent_name(unit), GUATEMALA)
        records.append(_party_entity(unit, GUATEMALA, release, member_of=parent))

    records = [record for record in records if record]
    return records or None


def suppliers(release: Dict[str, Any], config: TransformConfig) -> Optional[List[Dict[str, Any]]]:
    records = []
    for party in _parties_with_role(release, "supplier"):
        record = _party_entity(party, supplier_country(party), release)
        if record:
            records.append(record)
    return records or None
