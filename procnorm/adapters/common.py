"""Helpers shared by the source adapters."""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Optional

from ..identity import generate_entity_id
from ..models import Address, ContactPoint, PartyReference
from ..normalize import parse_monetary


def dig(obj: Any, *path: Any, default: Any = None) -> Any:
    """
    Walk nested dicts (by key) and lists (by index).

    Any missing step or unexpected type yields `default` instead of raising.
    """
    current = obj
    for step in path:
        if isinstance(current, dict):
            if step not in current:
                return default
            current = current[step]
        elif isinstance(current, list) and isinstance(step, int):
            if not -len(current) <= step < len(current):
                return default
            current = current[step]
        else:
            return default
    return default if current is None else current


def as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def text(value: Any) -> Optional[str]:
    """Scalar to stripped string; None for absent or blank values."""
    if value is None or isinstance(value, (dict, list)):
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    result = str(value).strip()
    return result or None


def index_parties(parties: Any) -> Dict[str, Dict[str, Any]]:
    """Parties keyed by id; parties without an id cannot be referenced and are left out."""
    index = {}
    for party in as_list(parties):
        party_id = text(party.get("id")) if isinstance(party, dict) else None
        if party_id:
            index[party_id] = party
    return index


def find_party(index: Dict[str, Dict[str, Any]], stub: Any) -> Optional[Dict[str, Any]]:
    """The indexed party an award stub points at, or None when the stub has no known id."""
    party_id = text(dig(stub, "id"))
    if not party_id:
        return None
    return index.get(party_id)


def amount_or_none(value: Any) -> Optional[float]:
    """Parsed amount, or None when absent, zero or unparseable (caller omits the field)."""
    amount = parse_monetary(value)
    if math.isnan(amount) or amount == 0:
        return None
    return amount


def amount_or_zero(value: Any) -> float:
    amount = parse_monetary(value)
    return 0.0 if math.isnan(amount) else amount


def compact(mapping: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys whose value is None, blank or an empty container."""
    return {key: value for key, value in mapping.items() if value not in (None, "", [], {})}


def dedupe(values: Iterable[Any]) -> List[str]:
    """Order-preserving set of non-blank strings."""
    seen: Dict[str, None] = {}
    for value in values:
        value = text(value)
        if value and value not in seen:
            seen[value] = None
    return list(seen)


def party_reference(name: Any, country: Optional[str], fallback_country: Optional[str] = "") -> Optional[PartyReference]:
    """Embedded pointer whose id matches the one the entity adapters produce."""
    name = text(name)
    if not name:
        return None
    resolved = country or fallback_country or ""
    fields: Dict[str, Any] = {"id": generate_entity_id(name, country, fallback_country), "name": name}
    if resolved:
        fields["country"] = resolved
    return PartyReference(**fields)


def address(**fields: Any) -> Optional[Address]:
    populated = compact({key: text(value) for key, value in fields.items()})
    return Address(**populated) if populated else None


def contact_point(**fields: Any) -> Optional[ContactPoint]:
    populated = compact({key: text(value) for key, value in fields.items()})
    return ContactPoint(**populated) if populated else None


def merge_overlay(record: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay keys win over anything the adapter set."""
    if not overlay:
        return record
    return {**record, **overlay}
