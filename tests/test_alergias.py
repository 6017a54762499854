from __future__ import annotations

import pytest

from consultadesk.app.domain.alergias import ComprobadorAlergias
from consultadesk.app.domain.farmacia import primary_drug_token, split_dosage_form


@pytest.mark.parametrize(
    ("farmaco", "alergias", "esperado"),
    [
        ("Tab. Aspirin 75mg", "Aspirin", True),
        ("Tab. Aspirin 75mg", "sulfa, ASPIRIN", True),
        ("Amoxicillin 500mg", "amoxicillin", True),
        ("Syr. Amoxicillin", "Penicillin", False),
        ("Tab. Paracetamol 500mg", "", False),
        ("Tab. Paracetamol 500mg", "   ", False),
        ("", "Aspirin", False),
    ],
)
def test_check_matches_primary_token_after_dosage_form(farmaco: str, alergias: str, esperado: bool) -> None:
    assert ComprobadorAlergias().check(farmaco, alergias) is esperado


def test_split_dosage_form_recognises_known_prefixes() -> None:
    assert split_dosage_form("Inj. Ceftriaxone 1g") == ("Inj.", "Ceftriaxone 1g")
    assert split_dosage_form("Ceftriaxone 1g") == (None, "Ceftriaxone 1g")


def test_primary_drug_token_falls_back_to_whole_name_without_form() -> None:
    assert primary_drug_token("Tab.") == "tab."
    assert primary_drug_token("Metformin 500mg") == "metformin"
