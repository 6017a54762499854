from __future__ import annotations

from pathlib import Path

import pytest

from consultadesk.app.application.ports.persistencia_port import PersistenceFailure
from consultadesk.app.infrastructure.persistencia.local_json_gateway import LocalJsonGateway


def test_missing_key_loads_none(tmp_path: Path) -> None:
    assert LocalJsonGateway(tmp_path).load("consultadesk_patients_v2") is None


def test_save_writes_one_file_per_key_without_temp_leftovers(tmp_path: Path) -> None:
    gateway = LocalJsonGateway(tmp_path / "data")

    gateway.save("consultadesk_patients_v2", [{"id": "P-1", "nombre": "Asha Verma"}])

    assert gateway.load("consultadesk_patients_v2") == [{"id": "P-1", "nombre": "Asha Verma"}]
    assert sorted(p.name for p in (tmp_path / "data").iterdir()) == ["consultadesk_patients_v2.json"]


def test_save_overwrites_previous_payload(tmp_path: Path) -> None:
    gateway = LocalJsonGateway(tmp_path)
    gateway.save("consultadesk_settings_v2", {"nombre_clinica": "A"})

    gateway.save("consultadesk_settings_v2", {"nombre_clinica": "B"})

    assert gateway.load("consultadesk_settings_v2") == {"nombre_clinica": "B"}


def test_corrupt_file_raises_persistence_failure(tmp_path: Path) -> None:
    (tmp_path / "consultadesk_visits_v2.json").write_text("[{roto", encoding="utf-8")

    with pytest.raises(PersistenceFailure):
        LocalJsonGateway(tmp_path).load("consultadesk_visits_v2")


def test_unserializable_payload_keeps_previous_file(tmp_path: Path) -> None:
    gateway = LocalJsonGateway(tmp_path)
    gateway.save("consultadesk_settings_v2", {"nombre_clinica": "A"})

    with pytest.raises(PersistenceFailure):
        gateway.save("consultadesk_settings_v2", {"nombre_clinica": object()})

    assert gateway.load("consultadesk_settings_v2") == {"nombre_clinica": "A"}
    assert sorted(p.name for p in tmp_path.iterdir()) == ["consultadesk_settings_v2.json"]
