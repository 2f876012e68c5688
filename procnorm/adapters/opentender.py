"""
OpenTender (DIGIWHIST) OCDS releases.

Country resolution for a party, first match wins:

1. configured country, buyers only, unless it is the "ted" dataset
2. the party's own address country name (via the country-name table)
3. the structure of the party id:
   - "XX_..."            -> XX
   - "ABC_..." / "ABC-..." -> Slovak registry prefix, SK
   - "hash...."          -> characters [12, 14)

Placeholder, numeric or unknown address countries fall through to step 3.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from ..config import TransformConfig
from ..countries import resolve_country_code
from ..identity import generate_entity_id, get_contract_id
from ..models import Contract, Entity
from ..normalize import parse_iso_date
from ..rules import (
    COUNTRY_PLACEHOLDERS,
    HASH_ID_COUNTRY_SLICE,
    SOURCE_OPENTENDER,
    TED_SOURCE,
    THREE_LETTER_PREFIX_COUNTRY,
)
from .common import (
    address,
    amount_or_none,
    as_list,
    contact_point,
    dig,
    find_party,
    index_parties,
    party_reference,
    text,
)


_TWO_LETTER_PREFIX = re.compile(r"^([A-Za-z]{2})_")
_THREE_LETTER_PREFIX = re.compile(r"^[A-Za-z]{3}[_-]")


def address_country(party: Optional[Dict[str, Any]]) -> str:
    raw = text(dig(party, "address", "countryName")) or text(dig(party, "address", "country"))
    if not raw:
        return ""
    if raw.lower() in COUNTRY_PLACEHOLDERS or raw.replace(" ", "").isdigit():
        return ""
    return resolve_country_code(raw)


def id_country(party_id: Any) -> str:
    party_id = text(party_id)
    if not party_id:
        return ""
    if party_id.lower().startswith("hash"):
        code = party_id[HASH_ID_COUNTRY_SLICE]
        return code.upper() if len(code) == 2 and code.isalpha() else ""
    match = _TWO_LETTER_PREFIX.match(party_id)
    if match:
        return match.group(1).upper()
    if _THREE_LETTER_PREFIX.match(party_id):
        return THREE_LETTER_PREFIX_COUNTRY
    return ""


def party_country(party: Optional[Dict[str, Any]], role: str, config: TransformConfig) -> str:
    if role == "buyer" and config.country and config.country.lower() != TED_SOURCE:
        return config.country.upper()
    return address_country(party) or id_country(dig(party, "id"))


def _parties(release: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [party for party in as_list(release.get("parties")) if isinstance(party, dict)]


def buyer_parties(release: Dict[str, Any]) -> List[Dict[str, Any]]:
    found = [party for party in _parties(release) if "buyer" in as_list(party.get("roles"))]
    if not found and isinstance(release.get("buyer"), dict):
        found = [release["buyer"]]
    return found


def supplier_parties(release: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Parties behind every awarded supplier; bare award stubs when the party is missing."""
    by_id = index_parties(release.get("parties"))
    found: Dict[Any, Dict[str, Any]] = {}
    for award in as_list(release.get("awards")):
        for stub in as_list(dig(award, "suppliers")):
            if not isinstance(stub, dict):
                continue
            key = stub.get("id") or stub.get("name")
            if key not in found:
                found[key] = find_party(by_id, stub) or stub
    for party in _parties(release):
        if "supplier" in as_list(party.get("roles")):
            found.setdefault(party.get("id") or party.get("name"), party)
    return list(found.values())


def _signed_date(release: Dict[str, Any], award_id: Any) -> Optional[str]:
    for signed in as_list(release.get("contracts")):
        if isinstance(signed, dict) and signed.get("awardID") == award_id:
            return parse_iso_date(signed.get("dateSigned"))
    return None


def _native_id(release: Dict[str, Any], award: Dict[str, Any], index: int) -> str:
    ocid = text(release.get("ocid")) or text(release.get("id")) or ""
    award_id = text(award.get("id")) or str(index)
    if not ocid or award_id.startswith(ocid):
        return award_id
    return f"{ocid}-{award_id}"


def contracts(release: Dict[str, Any], config: TransformConfig) -> Optional[List[Dict[str, Any]]]:
    tender = dig(release, "tender")
    parties = index_parties(release.get("parties"))

    buyer_refs = []
    for party in buyer_parties(release):
        ref = party_reference(party.get("name"), party_country(party, "buyer", config))
        if ref is not None:
            buyer_refs.append(ref)
    country = (buyer_refs[0].country or "") if buyer_refs else ""

    records = []
    for index, award in enumerate(as_list(release.get("awards"))):
        if not isinstance(award, dict):
            continue
        suppliers = [stub for stub in as_list(award.get("suppliers")) if isinstance(stub, dict)]
        if not suppliers:
            continue

        supplier_party = find_party(parties, suppliers[0]) or suppliers[0]
        award_date = parse_iso_date(award.get("date"))
        contract_date = _signed_date(release, award.get("id"))
        publish_date = parse_iso_date(dig(tender, "datePublished")) or award_date or contract_date

        records.append(
            Contract(
                id=get_contract_id(country, _native_id(release, award, index)),
                country=country,
                title=text(award.get("title")) or text(dig(tender, "title")),
                description=text(award.get("description")) or text(dig(tender, "description")),
                publish_date=publish_date,
                award_date=award_date,
                contract_date=contract_date,
                buyer=buyer_refs[0] if buyer_refs else None,
                other_buyers=buyer_refs[1:] or None,
                supplier=party_reference(
                    supplier_party.get("name"), party_country(supplier_party, "supplier", config)
                ),
                amount=amount_or_none(dig(award, "value", "amount")),
                currency=text(dig(award, "value", "currency")),
                method=text(dig(tender, "procurementMethod")),
                method_details=text(dig(tender, "procurementMethodDetails")),
                category=text(dig(tender, "mainProcurementCategory")),
                status=text(award.get("status")) or text(dig(tender, "status")),
                url=text(dig(tender, "documents", 0, "url")),
                source=SOURCE_OPENTENDER,
            ).to_record()
        )
    return records or None


def _entity(party: Dict[str, Any], country: str, release: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    name = text(party.get("name"))
    if not name or len(name) < 2:
        return None
    return Entity(
        id=generate_entity_id(name, country),
        name=name,
        identifier=text(dig(party, "identifier", "id")) or "",
        country=country,
        address=address(
            street=dig(party, "address", "streetAddress"),
            locality=dig(party, "address", "locality"),
            region=dig(party, "address", "region"),
            postal_code=dig(party, "address", "postalCode"),
            country=country,
        ),
        contactPoint=contact_point(
            name=dig(party, "contactPoint", "name"),
            email=dig(party, "contactPoint", "email"),
            telephone=dig(party, "contactPoint", "telephone"),
            url=dig(party, "contactPoint", "url"),
        ),
        classification=text(dig(party, "details", "buyerType")),
        source=SOURCE_OPENTENDER,
        updated_date=parse_iso_date(release.get("date")),
    ).to_record()


def buyers(release: Dict[str, Any], config: TransformConfig) -> Optional[List[Dict[str, Any]]]:
    records = [
        _entity(party, party_country(party, "buyer", config), release)
        for party in buyer_parties(release)
    ]
    return [record for record in records if record] or None


def suppliers(release: Dict[str, Any], config: TransformConfig) -> Optional[List[Dict[str, Any]]]:
    records = [
        _entity(party, party_country(party, "supplier", config), release)
        for party in supplier_parties(release)
    ]
    return [record for record in records if record] or None
