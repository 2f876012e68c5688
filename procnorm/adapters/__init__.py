"""Source adapters: one pure function per (source, record type)."""

from . import guatecompras, guatecompras_ocds, opentender, pnt, proact, proveedores, sipot

__all__ = [
    "guatecompras",
    "guatecompras_ocds",
    "opentender",
    "pnt",
    "proact",
    "proveedores",
    "sipot",
]
