"""
Deterministic identifiers for entities and contracts.

Entity ids are the record-linkage key across sources and runs: the same
(name, country) pair must always produce the same id, both for the entity
record itself and for every party reference that points at it.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from .normalize import slugify, transliterate_to_latin


_REPEATED_HYPHENS = re.compile(r"-{2,}")


def generate_entity_id(name: Any, entity_country: Optional[str], fallback_country: Optional[str] = "") -> str:
    """
    Slug of "<name without periods> <country>".

    The entity's own country wins over the fallback (usually the country of
    the record that mentions it).
    """
    base = str(name or "").replace(".", "").strip()
    country = entity_country or fallback_country or ""
    slug = slugify(f"{base} {country}")
    return _REPEATED_HYPHENS.sub("-", slug)


def get_contract_id(country: str, native_id: Any) -> str:
    """Transliterated source id, namespaced as "<country>_<id>" unless already prefixed."""
    contract_id = transliterate_to_latin(native_id)
    prefix = f"{country}_"
    if prefix in contract_id:
        return contract_id
    return prefix + contract_id
