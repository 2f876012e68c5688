from procnorm.identity import generate_entity_id, get_contract_id


def test_generate_entity_id():
    assert generate_entity_id("Ministerio de Salud S.A.", "GT") == "ministerio-de-salud-sa-gt"


def test_generate_entity_id_uses_fallback_country():
    assert generate_entity_id("ACME", "", "HU") == "acme-hu"
    assert generate_entity_id("ACME", "AT", "HU") == "acme-at"


def test_generate_entity_id_collapses_hyphens():
    assert generate_entity_id("ACME -- Ltd.", "GB") == "acme-ltd-gb"


def test_generate_entity_id_is_deterministic():
    pairs = [("Budapest Főváros", "HU"), ("Град Београд", "RS"), ("Farmacias S.A.", "GT")]
    for name, country in pairs:
        assert generate_entity_id(name, country) == generate_entity_id(name, country)


def test_get_contract_id():
    assert get_contract_id("GT", "12345") == "GT_12345"
    assert get_contract_id("GT", "GT_12345") == "GT_12345"
    assert get_contract_id("RS", "Уговор-1") == "RS_Ugovor-1"
