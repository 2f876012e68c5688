"""
Guatecompras supplier registry ("proveedores").

Rows are keyed by the portal's free-text Spanish labels. Only the labels in
the tables below are mapped; anything else in the row is ignored.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..config import TransformConfig
from ..identity import generate_entity_id
from ..models import Entity
from ..normalize import parse_slash_date
from ..rules import GUATEMALA, SOURCE_GUATECOMPRAS_PROVEEDORES
from .common import address, amount_or_none, as_list, compact, contact_point, dedupe, text
from .guatecompras import parse_portal_date


LEGAL_NAME = "Nombre o razón social"
TRADE_NAMES = "Nombre comercial"
NIT = "NIT"
ORGANIZATION_TYPE = "Tipo de organización"
ECONOMIC_ACTIVITY = "Actividad económica"
STREET = "Dirección"
MUNICIPALITY = "Municipio"
DEPARTMENT = "Departamento"
PHONES = "Teléfonos"
EMAIL = "Correo electrónico"
WEBSITE = "Página web"
CONTACT_NAME = "Nombre de contacto"
CAPITAL = "Capital autorizado"
FOUNDING_DATE = "Fecha de constitución"
REGISTRATION_DATE = "Fecha de inscripción"
LAST_UPDATE = "Última actualización"

# Boolean fields: (label, phrase that means True)
FLAGS = {
    "enabled": ("Estado del proveedor", "HABILITADO"),
    "rgae_registered": ("Inscripción en el RGAE", "INSCRITO"),
    "open_contract_access": ("Acceso a contrato abierto", "SÍ TIENE ACCESO"),
    "sat_active": ("Estado en SAT", "ACTIVO"),
}

NOTARY_FIELDS = {
    "name": "Nombre del notario",
    "deed_number": "Número de escritura",
    "deed_date": "Fecha de escritura",
}

REPRESENTATIVE_FIELDS = {
    "name": "Representante legal",
    "identifier": "DPI del representante legal",
    "appointment_date": "Fecha de nombramiento",
}

_COMPANY_MARKER = "SOCIEDAD"


def natural_name(legal_name: str) -> str:
    """
    "PEREZ,LOPEZ,,JUAN,CARLOS" -> "JUAN CARLOS PEREZ LOPEZ".

    The registry stores individuals as three surname slots followed by two
    given-name slots. Company names are left alone.
    """
    if _COMPANY_MARKER in legal_name.upper():
        return legal_name.strip()
    parts = legal_name.split(",")
    if len(parts) != 5:
        return legal_name.strip()
    surnames, given = parts[:3], parts[3:]
    return " ".join(part.strip() for part in given + surnames if part.strip())


def _flag(row: Dict[str, Any], label: str, phrase: str) -> Optional[bool]:
    value = text(row.get(label))
    if value is None:
        return None
    return value.upper() == phrase


def _sub_object(row: Dict[str, Any], fields: Dict[str, str]) -> Dict[str, Any]:
    values = {}
    for key, label in fields.items():
        if key.endswith("_date"):
            values[key] = parse_slash_date(text(row.get(label)))
        else:
            values[key] = text(row.get(label))
    return compact(values)


def _split_phones(value: Any) -> Optional[str]:
    phones = dedupe(part for item in as_list(value) for part in str(item).split(","))
    return ", ".join(phones) if phones else None


def proveedor(row: Dict[str, Any], config: TransformConfig) -> Optional[Dict[str, Any]]:
    raw_name = text(row.get(LEGAL_NAME))
    if not raw_name:
        return None
    name = natural_name(raw_name)
    if len(name) < 2:
        return None

    other_names = [other for other in dedupe([raw_name] + as_list(row.get(TRADE_NAMES))) if other != name]

    fields: Dict[str, Any] = {
        "id": generate_entity_id(name, GUATEMALA),
        "name": name,
        "identifier": text(row.get(NIT)) or "",
        "country": GUATEMALA,
        "classification": text(row.get(ORGANIZATION_TYPE)),
        "address": address(
            street=row.get(STREET),
            locality=row.get(MUNICIPALITY),
            region=row.get(DEPARTMENT),
            country=GUATEMALA,
        ),
        "contactPoint": contact_point(
            name=row.get(CONTACT_NAME),
            email=row.get(EMAIL),
            telephone=_split_phones(row.get(PHONES)),
            url=row.get(WEBSITE),
        ),
        "activity": text(row.get(ECONOMIC_ACTIVITY)),
        "capital": amount_or_none(row.get(CAPITAL)),
        "founding_date": parse_slash_date(text(row.get(FOUNDING_DATE))),
        "registration_date": parse_slash_date(text(row.get(REGISTRATION_DATE))),
        "source": SOURCE_GUATECOMPRAS_PROVEEDORES,
        "updated_date": parse_portal_date(row.get(LAST_UPDATE)),
    }
    if other_names:
        fields["other_names"] = other_names
    for key, (label, phrase) in FLAGS.items():
        fields[key] = _flag(row, label, phrase)

    notary = _sub_object(row, NOTARY_FIELDS)
    if notary:
        fields["notary"] = notary
    representative = _sub_object(row, REPRESENTATIVE_FIELDS)
    if representative:
        fields["legal_representative"] = representative

    return Entity(**fields).to_record()
