"""
Transform dispatcher.

A flat table from transform token to adapter. Every adapter has the same
shape: (record, config) -> record | None | list of records.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Union

from .adapters import guatecompras, guatecompras_ocds, opentender, pnt, proact, proveedores, sipot
from .config import TransformConfig

TransformResult = Union[Dict[str, Any], List[Dict[str, Any]], None]
Adapter = Callable[[Any, TransformConfig], TransformResult]

TRANSFORMS: Dict[str, Adapter] = {
    "guatecompras": guatecompras.repair_signed_dates,
    "guatecompras-historical-contracts": guatecompras.historical_contract,
    "guatecompras-historical-buyers": guatecompras.historical_buyers,
    "guatecompras-historical-suppliers": guatecompras.historical_supplier,
    "guatecompras-ocds-contracts": guatecompras_ocds.contracts,
    "guatecompras-ocds-buyers": guatecompras_ocds.buyers,
    "guatecompras-ocds-suppliers": guatecompras_ocds.suppliers,
    "guatecompras-proveedores": proveedores.proveedor,
    "pnt": pnt.pnt,
    "sipot": sipot.sipot,
    "proact-contracts": proact.contract,
    "proact-buyers": proact.buyer,
    "proact-suppliers": proact.supplier,
    "opentender-contracts": opentender.contracts,
    "opentender-buyers": opentender.buyers,
    "opentender-suppliers": opentender.suppliers,
}


def get_adapter(transform: Optional[str]) -> Optional[Adapter]:
    return TRANSFORMS.get(transform or "")


def transform(record: Any, config: TransformConfig) -> TransformResult:
    """Run the configured adapter; unknown tokens pass the record through untouched."""
    adapter = get_adapter(config.transform)
    if adapter is None:
        return record
    # Adapters only understand JSON objects; other values are not records.
    if not isinstance(record, dict):
        return None
    return adapter(record, config)
