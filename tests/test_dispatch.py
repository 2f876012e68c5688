from procnorm.config import TransformConfig
from procnorm.dispatch import TRANSFORMS, get_adapter, transform


def test_unknown_transform_passes_record_through():
    record = {"anything": [1, 2, 3]}
    assert transform(record, TransformConfig(transform="does-not-exist")) is record
    assert transform(record, TransformConfig()) is record


def test_every_token_has_an_adapter():
    expected = {
        "guatecompras",
        "guatecompras-historical-contracts",
        "guatecompras-historical-buyers",
        "guatecompras-historical-suppliers",
        "guatecompras-ocds-contracts",
        "guatecompras-ocds-buyers",
        "guatecompras-ocds-suppliers",
        "guatecompras-proveedores",
        "pnt",
        "sipot",
        "proact-contracts",
        "proact-buyers",
        "proact-suppliers",
        "opentender-contracts",
        "opentender-buyers",
        "opentender-suppliers",
    }
    assert set(TRANSFORMS) == expected
    assert all(callable(get_adapter(token)) for token in expected)


def test_non_object_values_are_not_records():
    assert transform([1, 2], TransformConfig(transform="sipot")) is None


def test_dispatch_forwards_configuration():
    config = TransformConfig(transform="pnt", overlay={"folder": "Sueldos"})
    result = transform({"id": 1, "periodoreporta": "2021", "montobruto": "$5.00"}, config)
    assert result["gross_salary"] == 5.0
    assert result["folder"] == "Sueldos"
