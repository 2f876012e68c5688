from procnorm.adapters.sipot import sipot
from procnorm.config import TransformConfig


def test_flattens_information_triples():
    record = {
        "idRegistro": 1,
        "informacion": [
            [1, "Fecha de Inicio (días)", "25/12/2021"],
            [2, "Monto total", "$1,234.50"],
            [3, "Nombre", "Juan"],
            [4, "Fecha de término", ""],
            [5, "Fecha de validación", "pendiente"],
        ],
    }
    result = sipot(record, TransformConfig(transform="sipot"))

    assert result == {
        "idRegistro": 1,
        "fecha_de_inicio": "2021-12-25T00:00:00.000-06:00",
        "monto_total": 1234.5,
        "nombre": "Juan",
        "fecha_de_termino": None,
        "fecha_de_validacion": None,
    }


def test_code_10_is_a_nested_table():
    record = {
        "informacion": [
            [
                10,
                "Tabla de Proveedores",
                [
                    [[1, "Razón social", "ACME"], [2, "Monto", "$10.00"]],
                    [[1, "Razón social", "Otra"], [2, "Monto", ""]],
                ],
            ]
        ]
    }
    result = sipot(record, TransformConfig(transform="sipot"))
    assert result["tabla_de_proveedores"] == [
        {"razon_social": "ACME", "monto": 10.0},
        {"razon_social": "Otra", "monto": None},
    ]


def test_overlay_wins_over_adapter_fields():
    record = {"informacion": [[1, "Status", "draft"]]}
    config = TransformConfig(transform="sipot", overlay={"status": "verified", "year": 2021})
    result = sipot(record, config)
    assert result["status"] == "verified"
    assert result["year"] == 2021


def test_missing_information_keeps_top_level_fields():
    result = sipot({"idRegistro": 5}, TransformConfig(transform="sipot"))
    assert result == {"idRegistro": 5}
