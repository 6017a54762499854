from __future__ import annotations

from pathlib import Path

import pytest

from consultadesk.app.bootstrap import (
    ENV_AI_DELAY_MS,
    ENV_DATA_DIR,
    ENV_LOG_LEVEL,
    ENV_STORAGE,
    build_gateway,
    resolve_ai_delay_ms,
    resolve_data_dir,
    resolve_log_level,
    resolve_storage_backend,
)
from consultadesk.app.infrastructure.persistencia.local_json_gateway import LocalJsonGateway
from consultadesk.app.infrastructure.sqlite.kv_gateway import SqliteKeyValueGateway


def test_resolve_data_dir_uses_arg_over_env(monkeypatch) -> None:
    monkeypatch.setenv(ENV_DATA_DIR, "/tmp/from-env")

    resolved = resolve_data_dir("./from-arg", emit_log=False)

    assert resolved == Path("./from-arg").resolve()


def test_resolve_data_dir_uses_env_when_no_arg(monkeypatch) -> None:
    monkeypatch.setenv(ENV_DATA_DIR, "/tmp/from-env")

    resolved = resolve_data_dir(None, emit_log=False)

    assert resolved == Path("/tmp/from-env").resolve()


def test_resolve_data_dir_uses_default(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.delenv(ENV_DATA_DIR, raising=False)
    monkeypatch.chdir(tmp_path)

    resolved = resolve_data_dir(None, emit_log=False)

    assert resolved == (tmp_path / "data").resolve()


@pytest.mark.parametrize(
    ("valor", "esperado"),
    [(None, "json"), ("sqlite", "sqlite"), (" SQLite ", "sqlite"), ("postgres", "json")],
)
def test_resolve_storage_backend(monkeypatch, valor, esperado: str) -> None:
    if valor is None:
        monkeypatch.delenv(ENV_STORAGE, raising=False)
    else:
        monkeypatch.setenv(ENV_STORAGE, valor)

    assert resolve_storage_backend(emit_log=False) == esperado


@pytest.mark.parametrize(
    ("valor", "esperado"),
    [(None, 1200), ("0", 0), ("250", 250), ("-5", 0), ("rápido", 1200)],
)
def test_resolve_ai_delay_ms(monkeypatch, valor, esperado: int) -> None:
    if valor is None:
        monkeypatch.delenv(ENV_AI_DELAY_MS, raising=False)
    else:
        monkeypatch.setenv(ENV_AI_DELAY_MS, valor)

    assert resolve_ai_delay_ms(emit_log=False) == esperado


def test_resolve_log_level_falls_back_to_info(monkeypatch) -> None:
    monkeypatch.setenv(ENV_LOG_LEVEL, "debug")
    assert resolve_log_level() == "DEBUG"

    monkeypatch.setenv(ENV_LOG_LEVEL, "verbose")
    assert resolve_log_level() == "INFO"


def test_build_gateway_selects_backend(tmp_path: Path) -> None:
    json_gateway = build_gateway("json", tmp_path)
    sqlite_gateway = build_gateway("sqlite", tmp_path)
    try:
        assert isinstance(json_gateway, LocalJsonGateway)
        assert json_gateway.base_path == tmp_path
        assert isinstance(sqlite_gateway, SqliteKeyValueGateway)
        assert (tmp_path / "consultadesk.db").exists()
    finally:
        sqlite_gateway.close()
