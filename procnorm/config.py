"""
Process-wide transform configuration.

Built once before the first record is read and never mutated afterwards, so
adapters can share it freely.
"""

from __future__ import annotations

import os
import re
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from .rules import DEFAULT_FIELD_DELIMITER, DEFAULT_VALUE_DELIMITER

load_dotenv()

_INTEGER = re.compile(r"^[-+]?\d+$")
_FLOAT = re.compile(r"^[-+]?\d+\.\d+$")


class ConfigError(ValueError):
    """Raised when the transform configuration cannot be used."""
    pass


class Settings(BaseModel):
    FIELD_DELIMITER: str = os.getenv("PROCNORM_FIELD_DELIMITER", DEFAULT_FIELD_DELIMITER)
    VALUE_DELIMITER: str = os.getenv("PROCNORM_VALUE_DELIMITER", DEFAULT_VALUE_DELIMITER)
    COUNTRY: Optional[str] = os.getenv("PROCNORM_COUNTRY") or None


settings = Settings()


class TransformConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    transform: str = ""
    overlay: Dict[str, Any] = Field(default_factory=dict)
    country: Optional[str] = None
    strict: bool = False

    @property
    def folder(self) -> Optional[str]:
        folder = self.overlay.get("folder")
        return str(folder) if folder is not None else None


def convert_scalar(raw: str) -> Any:
    """Integer, float or string, decided by the whole value's shape."""
    if _INTEGER.match(raw):
        return int(raw)
    if _FLOAT.match(raw):
        return float(raw)
    return raw


def parse_overlay(
    data: Optional[str],
    field_delimiter: str = DEFAULT_FIELD_DELIMITER,
    value_delimiter: str = DEFAULT_VALUE_DELIMITER,
) -> Dict[str, Any]:
    """
    Parse "key1=val1|key2=val2" into typed scalars.

    Pairs are split by `field_delimiter`, then each pair once by
    `value_delimiter`. A pair without a value delimiter maps to "".
    """
    if not field_delimiter or not value_delimiter:
        raise ConfigError("Field and value delimiters must not be empty")
    if field_delimiter == value_delimiter:
        raise ConfigError(
            f"Field delimiter and value delimiter must differ (both are {field_delimiter!r})"
        )

    overlay: Dict[str, Any] = {}
    if not data:
        return overlay

    for pair in data.split(field_delimiter):
        if not pair.strip():
            continue
        key, _, value = pair.partition(value_delimiter)
        overlay[key.strip()] = convert_scalar(value)
    return overlay


def build_config(
    transform: Optional[str],
    overlay_data: Optional[str] = None,
    field_delimiter: Optional[str] = None,
    value_delimiter: Optional[str] = None,
    country: Optional[str] = None,
    strict: bool = False,
) -> TransformConfig:
    """Assemble the configuration, falling back to environment defaults."""
    overlay = parse_overlay(
        overlay_data,
        field_delimiter if field_delimiter is not None else settings.FIELD_DELIMITER,
        value_delimiter if value_delimiter is not None else settings.VALUE_DELIMITER,
    )
    return TransformConfig(
        transform=transform or "",
        overlay=overlay,
        country=country or settings.COUNTRY,
        strict=strict,
    )
