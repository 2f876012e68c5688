"""
SIPOT tabular exports.

Each record carries an `informacion` list of [code, label, value] triples.
Labels become snake_case keys and values are converted with
`detect_and_convert`. Code 10 marks a nested table: its value is a list of
rows, each itself a list of triples, flattened into a list of mappings.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..config import TransformConfig
from ..normalize import detect_and_convert, normalize_key
from .common import as_list, merge_overlay


NESTED_TABLE_CODE = 10


def _is_triple(item: Any) -> bool:
    return isinstance(item, (list, tuple)) and len(item) == 3


def flatten_fields(triples: List[Any]) -> Dict[str, Any]:
    flat: Dict[str, Any] = {}
    for item in triples:
        if not _is_triple(item):
            continue
        code, label, value = item
        key = normalize_key(label)
        if not key:
            continue
        if str(code) == str(NESTED_TABLE_CODE):
            flat[key] = [flatten_fields(as_list(row)) for row in as_list(value)]
        else:
            flat[key] = detect_and_convert(value, key)
    return flat


def sipot(record: Dict[str, Any], config: TransformConfig) -> Dict[str, Any]:
    result = {key: value for key, value in record.items() if key != "informacion"}
    result.update(flatten_fields(as_list(record.get("informacion"))))
    return merge_overlay(result, config.overlay)
