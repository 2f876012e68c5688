"""
Deterministic transformation rules.

Constants shared by the normalizers and the source adapters live here so that
they can be changed without touching adapter logic.
"""

# Local midnight offset used for dates that carry no time zone (Guatemala / Mexico City).
LOCAL_UTC_OFFSET = "-06:00"

DEFAULT_FIELD_DELIMITER = "|"
DEFAULT_VALUE_DELIMITER = "="

# Placeholders some sources use instead of leaving a country name empty.
COUNTRY_PLACEHOLDERS = ("none", "null", "n/a", "-", "–", "—", "--")

# OpenTender buyer ids with a 3-letter prefix all come from the Slovak registry.
THREE_LETTER_PREFIX_COUNTRY = "SK"
# OpenTender "hash" ids carry the country code at this offset.
HASH_ID_COUNTRY_SLICE = slice(12, 14)

# Configured country that never overrides inferred buyer countries.
TED_SOURCE = "ted"

GUATEMALA = "GT"
GUATEMALA_CURRENCY = "GTQ"
GUATECOMPRAS_TENDER_URL = "https://www.guatecompras.gt/concursos/consultaConcurso.aspx?nog={nog}"

SOURCE_GUATECOMPRAS = "guatecompras"
SOURCE_GUATECOMPRAS_OCDS = "guatecompras-ocds"
SOURCE_GUATECOMPRAS_PROVEEDORES = "guatecompras-proveedores"
SOURCE_PROACT = "proact"
SOURCE_OPENTENDER = "opentender"

# Spanish month abbreviations as printed by the Guatecompras portal.
SPANISH_MONTHS = {
    "ene": 1,
    "feb": 2,
    "mar": 3,
    "abr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "ago": 8,
    "sep": 9,
    "set": 9,
    "oct": 10,
    "nov": 11,
    "dic": 12,
}
