"""
Plataforma Nacional de Transparencia (PNT) thematic disclosures.

The overlay's `folder` tag names the disclosure family. Each family is
described by a field table of (output key, source key, kind):

- text:  stripped string or None
- money: parsed amount, 0 when absent or unparseable
- date:  DD/MM/YYYY -> local ISO timestamp, None when absent

Families without a table are reduced to {id, sujeto, date, size}.
Records with neither reporting-period field are dropped.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..config import TransformConfig
from ..normalize import parse_slash_date
from .common import amount_or_zero, merge_overlay, text


TEXT = "text"
MONEY = "money"
DATE = "date"

FieldTable = List[Tuple[str, str, str]]

CONTRACTS_FIELDS: FieldTable = [
    ("expediente", "numeroexpediente", TEXT),
    ("procedure", "tipoprocedimiento", TEXT),
    ("category", "materia", TEXT),
    ("title", "descripcionobras", TEXT),
    ("supplier_name", "razonsocial", TEXT),
    ("supplier_rfc", "rfc", TEXT),
    ("buyer_area", "areacontratante", TEXT),
    ("contract_number", "numerocontrato", TEXT),
    ("contract_date", "fechacontrato", DATE),
    ("start_date", "fechainicio", DATE),
    ("end_date", "fechatermino", DATE),
    ("amount", "montocontrato", MONEY),
    ("amount_with_tax", "montototalcontrato", MONEY),
    ("min_amount", "montominimo", MONEY),
    ("max_amount", "montomaximo", MONEY),
    ("currency", "tipomoneda", TEXT),
    ("url", "hipervinculodocumento", TEXT),
]

DIRECTORY_FIELDS: FieldTable = [
    ("name", "nombre", TEXT),
    ("first_surname", "primerapellido", TEXT),
    ("second_surname", "segundoapellido", TEXT),
    ("position", "denominacioncargo", TEXT),
    ("area", "area", TEXT),
    ("start_date", "fechaalta", DATE),
    ("email", "correo", TEXT),
    ("telephone", "telefono", TEXT),
]

SALARY_FIELDS: FieldTable = [
    ("name", "nombre", TEXT),
    ("first_surname", "primerapellido", TEXT),
    ("second_surname", "segundoapellido", TEXT),
    ("position", "denominacioncargo", TEXT),
    ("area", "area", TEXT),
    ("gross_salary", "montobruto", MONEY),
    ("net_salary", "montoneto", MONEY),
    ("currency", "tipomoneda", TEXT),
]

BUDGET_EXERCISE_FIELDS: FieldTable = [
    ("chapter", "capitulo", TEXT),
    ("concept", "concepto", TEXT),
    ("approved", "presupuestoasignado", MONEY),
    ("modified", "presupuestomodificado", MONEY),
    ("accrued", "presupuestodevengado", MONEY),
    ("paid", "presupuestopagado", MONEY),
    ("exercised", "presupuestoejercido", MONEY),
]

BENEFICIARY_FIELDS: FieldTable = [
    ("program", "nombreprograma", TEXT),
    ("name", "nombre", TEXT),
    ("first_surname", "primerapellido", TEXT),
    ("second_surname", "segundoapellido", TEXT),
    ("legal_name", "denominacionsocial", TEXT),
    ("amount", "montorecurso", MONEY),
    ("grant_date", "fechaalta", DATE),
    ("municipality", "unidadterritorial", TEXT),
]

ANNUAL_BUDGET_FIELDS: FieldTable = [
    ("fiscal_year", "ejercicio", TEXT),
    ("budget", "presupuestoanual", MONEY),
    ("url", "hipervinculo", TEXT),
]

RESOLUTION_FIELDS: FieldTable = [
    ("expediente", "numeroexpediente", TEXT),
    ("subject", "materia", TEXT),
    ("resolution_type", "tiporesolucion", TEXT),
    ("resolution_date", "fecharesolucion", DATE),
    ("authority", "organoemisor", TEXT),
    ("outcome", "sentido", TEXT),
    ("status", "estatus", TEXT),
    ("url", "hipervinculo", TEXT),
]

DIRECTORY_FOLDERS = ("Directorio", "Estructura orgánica", "Servidores públicos")


def reporting_date(record: Dict[str, Any]) -> Optional[str]:
    return text(record.get("periodoreporta")) or text(record.get("periodoinforma"))


def _convert(value: Any, kind: str) -> Any:
    if kind == MONEY:
        return amount_or_zero(value)
    if kind == DATE:
        return parse_slash_date(text(value))
    return text(value)


def _base_fields(record: Dict[str, Any], date: str) -> Dict[str, Any]:
    return {
        "id": record.get("id"),
        "sujeto": text(record.get("sujetoobligado")),
        "date": date,
    }


def table_transform(table: FieldTable) -> Callable[[Dict[str, Any], str], Dict[str, Any]]:
    def transform(record: Dict[str, Any], date: str) -> Dict[str, Any]:
        result = _base_fields(record, date)
        for output_key, source_key, kind in table:
            result[output_key] = _convert(record.get(source_key), kind)
        return result

    return transform


def fallback(record: Dict[str, Any], date: str) -> Dict[str, Any]:
    result = _base_fields(record, date)
    serialized = json.dumps(record, ensure_ascii=False, separators=(",", ":"))
    result["size"] = len(serialized.encode("utf-8"))
    return result


FOLDER_TRANSFORMS: Dict[str, Callable[[Dict[str, Any], str], Dict[str, Any]]] = {
    "Contratos": table_transform(CONTRACTS_FIELDS),
    "Sueldos": table_transform(SALARY_FIELDS),
    "Presupuesto ejercido": table_transform(BUDGET_EXERCISE_FIELDS),
    "Padrón de beneficiarios": table_transform(BENEFICIARY_FIELDS),
    "Presupuesto anual": table_transform(ANNUAL_BUDGET_FIELDS),
    "Resoluciones": table_transform(RESOLUTION_FIELDS),
}
FOLDER_TRANSFORMS.update({folder: table_transform(DIRECTORY_FIELDS) for folder in DIRECTORY_FOLDERS})


def pnt(record: Dict[str, Any], config: TransformConfig) -> Optional[Dict[str, Any]]:
    date = reporting_date(record)
    if not date:
        return None
    transform = FOLDER_TRANSFORMS.get(config.folder or "", fallback)
    return merge_overlay(transform(record, date), config.overlay)
