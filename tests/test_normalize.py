import math

import pytest

from procnorm.normalize import (
    detect_and_convert,
    normalize_key,
    parse_iso_date,
    parse_monetary,
    parse_month_date,
    parse_slash_date,
    slugify,
    transliterate_to_latin,
)


def test_parse_slash_date():
    assert parse_slash_date("25/12/2021") == "2021-12-25T00:00:00.000-06:00"


@pytest.mark.parametrize("value", ["2021-12-25", "25-12-2021", "5/1/2021", "", None, 20211225])
def test_parse_slash_date_rejects_other_shapes(value):
    assert parse_slash_date(value) is None


def test_parse_monetary():
    assert parse_monetary("$1,234.50") == 1234.5
    assert parse_monetary("$-45.00") == -45
    assert parse_monetary(12) == 12.0
    assert math.isnan(parse_monetary("no aplica"))
    assert math.isnan(parse_monetary(None))


def test_parse_monetary_rejects_non_finite_and_underscores():
    for raw in ("Infinity", "-inf", "$inf", "1_000", float("inf")):
        assert math.isnan(parse_monetary(raw))


def test_normalize_key():
    assert normalize_key("Fecha de Inicio (días)") == "fecha_de_inicio"
    assert normalize_key("Año") == "ano"
    assert normalize_key("  Monto   total  ") == "monto_total"
    assert normalize_key("Número de contrato (NC)") == "numero_de_contrato"


@pytest.mark.parametrize(
    "label",
    [
        "Fecha de Inicio (días)",
        "Señalización 2021",
        "Razón social / Nombre",
        "ALREADY_normalized_key",
        "¿Cuál es el monto?",
        "(x)",
    ],
)
def test_normalize_key_is_idempotent(label):
    once = normalize_key(label)
    assert normalize_key(once) == once


def test_detect_and_convert_dates():
    assert detect_and_convert("25/12/2021", "fecha") == "2021-12-25T00:00:00.000-06:00"
    # month/day swapped in the source
    assert detect_and_convert("12/25/2021", "fecha") == "2021-12-25T00:00:00.000-06:00"
    assert detect_and_convert("31/02/2021", "fecha_de_termino") is None
    assert detect_and_convert("sin fecha", "fecha_de_termino") is None


def test_detect_and_convert_other_values():
    assert detect_and_convert("", "nombre") is None
    assert detect_and_convert("$1,000.00", "monto") == 1000.0
    assert detect_and_convert("Juan", "nombre") == "Juan"
    assert detect_and_convert("1000", "monto") == "1000"
    assert detect_and_convert(5, "monto") == 5


def test_parse_month_date():
    assert parse_month_date("15.ene.2014 10:30:00 hrs.") == "2014-01-15T10:30:00.000-06:00"
    assert parse_month_date("03.DIC.2019") == "2019-12-03T00:00:00.000-06:00"
    assert parse_month_date("31.feb.2019") is None
    assert parse_month_date("15/01/2014") is None


def test_parse_iso_date():
    assert parse_iso_date("2019-05-12") == "2019-05-12T00:00:00.000+00:00"
    assert parse_iso_date("2019-05-12T10:00:00Z") == "2019-05-12T10:00:00.000+00:00"
    assert parse_iso_date("2020-02-15T10:00:00-06:00") == "2020-02-15T10:00:00.000-06:00"
    assert parse_iso_date("not a date") is None
    assert parse_iso_date(None) is None


def test_transliterate_and_slugify():
    assert transliterate_to_latin("Србија") == "Srbija"
    assert transliterate_to_latin("Zürich") == "Zurich"
    assert slugify("Ministerio de Salud, S.A.") == "ministerio-de-salud-s-a"
    assert slugify("  Ürge -- Kft  ") == "urge-kft"
