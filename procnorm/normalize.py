"""
Lexical normalizers shared by every source adapter.

Responsibilities:
- label slugs for free-text column names (SIPOT)
- typed conversion of tabular cell values
- monetary and date string parsing
- transliteration and slugs used by entity identity

All functions are pure and never raise on malformed input; they resolve to
None / NaN and let the caller decide the default.
"""

from __future__ import annotations

import math
import re
import unicodedata
from datetime import date, timezone, tzinfo
from typing import Any, Optional

from dateutil import parser as date_parser
from unidecode import unidecode

from .rules import LOCAL_UTC_OFFSET, SPANISH_MONTHS


_PARENTHESIZED = re.compile(r"\([^)]*\)")
_NON_KEY_CHARS = re.compile(r"[^a-zñ ]+")
_SLASH_DATE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
_DOLLAR_AMOUNT = re.compile(r"^(?=.*\d)[-+]?\$\s?[-+]?[\d,]*(\.\d+)?$")
_MONTH_DATE = re.compile(
    r"^(\d{1,2})\.([a-zA-Z]{3})\.(\d{4})(?:\s+(\d{1,2}):(\d{2})(?::(\d{2}))?)?"
)
_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def strip_diacritics(value: str) -> str:
    """Remove combining marks after canonical decomposition (á -> a, ü -> u)."""
    decomposed = unicodedata.normalize("NFD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_key(label: Any) -> str:
    """
    Turn a free-text column label into a stable snake_case key.

    "Fecha de Inicio (días)" -> "fecha_de_inicio"

    Idempotent: normalizing an already normalized key returns it unchanged.
    """
    key = str(label).lower().replace("ñ", "n")
    key = strip_diacritics(key)
    key = _PARENTHESIZED.sub(" ", key)
    key = _NON_KEY_CHARS.sub(" ", key)
    return "_".join(key.split())


def _is_calendar_date(year: int, month: int, day: int) -> bool:
    try:
        date(year, month, day)
    except ValueError:
        return False
    return True


def _local_timestamp(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> str:
    return (
        f"{year:04d}-{month:02d}-{day:02d}"
        f"T{hour:02d}:{minute:02d}:{second:02d}.000{LOCAL_UTC_OFFSET}"
    )


def parse_slash_date(value: Any) -> Optional[str]:
    """
    Parse DD/MM/YYYY into an ISO timestamp at local midnight.

    "25/12/2021" -> "2021-12-25T00:00:00.000-06:00"

    Only the textual shape is checked; anything else yields None.
    """
    if not isinstance(value, str):
        return None
    match = _SLASH_DATE.match(value.strip())
    if not match:
        return None
    day, month, year = match.groups()
    return f"{year}-{month}-{day}T00:00:00.000{LOCAL_UTC_OFFSET}"


def parse_month_date(value: Any) -> Optional[str]:
    """Parse the portal form "15.ene.2014 10:30:00 hrs." into a local ISO timestamp."""
    if not isinstance(value, str):
        return None
    match = _MONTH_DATE.match(value.strip())
    if not match:
        return None
    day, month_abbr, year, hour, minute, second = match.groups()
    month = SPANISH_MONTHS.get(month_abbr.lower())
    if month is None or not _is_calendar_date(int(year), month, int(day)):
        return None
    return _local_timestamp(
        int(year), month, int(day), int(hour or 0), int(minute or 0), int(second or 0)
    )


def parse_iso_date(value: Any, default_tz: tzinfo = timezone.utc) -> Optional[str]:
    """
    Parse an ISO-8601 date or date-time and re-emit it with a fixed offset.

    Naive values are assumed to be in `default_tz`.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = date_parser.isoparse(value.strip())
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=default_tz)
    return parsed.isoformat(timespec="milliseconds")


def parse_monetary(value: Any) -> float:
    """
    Parse "$1,234.50" style amounts.

    "$" and "," are stripped; anything that still is not a finite number
    (including "inf", "Infinity" and "1_000") yields NaN.
    """
    if isinstance(value, bool) or value is None:
        return math.nan
    if isinstance(value, (int, float)):
        amount = float(value)
    else:
        cleaned = str(value).replace("$", "").replace(",", "").strip()
        if "_" in cleaned:
            return math.nan
        try:
            amount = float(cleaned)
        except ValueError:
            return math.nan
    return amount if math.isfinite(amount) else math.nan


def detect_and_convert(value: Any, key: str) -> Any:
    """
    Convert one tabular cell to a typed value.

    Rules:
    - empty string -> None
    - DD/MM/YYYY -> local ISO timestamp; when day/month do not form a real
      date the two are swapped once (some exports emit MM/DD/YYYY)
    - "$"-prefixed amounts -> float
    - keys mentioning "fecha" with no recognizable date -> None
    - anything else is returned unchanged
    """
    if not isinstance(value, str):
        return value
    stripped = value.strip()
    if stripped == "":
        return None

    match = _SLASH_DATE.match(stripped)
    if match:
        day, month, year = (int(part) for part in match.groups())
        if _is_calendar_date(year, month, day):
            return _local_timestamp(year, month, day)
        if _is_calendar_date(year, day, month):
            return _local_timestamp(year, day, month)
        return None

    if _DOLLAR_AMOUNT.match(stripped):
        amount = parse_monetary(stripped)
        return None if math.isnan(amount) else amount

    if "fecha" in key:
        return None
    return value


def transliterate_to_latin(value: Any) -> str:
    """Plain-ASCII approximation of any text ("Србија" -> "Srbija", "Zürich" -> "Zurich")."""
    if value is None:
        return ""
    return unidecode(str(value))


def slugify(value: Any) -> str:
    """Lowercase ASCII slug with single hyphens between alphanumeric runs."""
    slug = transliterate_to_latin(value).lower()
    slug = _NON_SLUG_CHARS.sub("-", slug)
    return slug.strip("-")
