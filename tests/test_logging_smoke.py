from __future__ import annotations

from pathlib import Path

from consultadesk.app.bootstrap_logging import (
    configure_logging,
    fatal_exception_handler,
    get_logger,
    log_soft_exception,
    set_run_context,
    set_visit_context,
)


def test_configure_logging_creates_operational_log(tmp_path: Path) -> None:
    configure_logging("test-app", tmp_path, json=False)
    set_run_context("run-test")
    set_visit_context("V-TEST")
    logger = get_logger("tests.logging")

    logger.info("hello operational")

    content = (tmp_path / "app.log").read_text(encoding="utf-8")
    assert "hello operational" in content
    assert "run_id=run-test" in content
    assert "visit_id=V-TEST" in content
    set_visit_context(None)


def test_log_soft_exception_writes_soft_file_only(tmp_path: Path) -> None:
    configure_logging("test-app", tmp_path, json=False)
    set_run_context("run-soft")
    logger = get_logger("tests.logging")

    try:
        raise ValueError("disco lleno")
    except ValueError as exc:
        log_soft_exception(logger, exc, {"operation": "commit"})

    soft = (tmp_path / "crash_soft.log").read_text(encoding="utf-8")
    app = (tmp_path / "app.log").read_text(encoding="utf-8")
    assert "soft_exception" in soft
    assert "ValueError: disco lleno" in soft
    assert "soft_exception_operational error=ValueError" in app
    assert "ValueError: disco lleno" not in app


def test_fatal_hook_handler_writes_fatal_file(tmp_path: Path) -> None:
    configure_logging("test-app", tmp_path, json=False)
    set_run_context("run-fatal")
    logger = get_logger("tests.logging")
    handler = fatal_exception_handler(logger)

    try:
        raise RuntimeError("fatal")
    except RuntimeError as exc:
        handler(type(exc), exc, exc.__traceback__)

    content = (tmp_path / "crash_fatal.log").read_text(encoding="utf-8")
    assert "unhandled_exception" in content
    assert "RuntimeError: fatal" in content


def test_logging_redacts_pii_in_message(tmp_path: Path) -> None:
    configure_logging("test-app", tmp_path, json=False)
    set_run_context("run-redact")
    logger = get_logger("tests.logging")

    logger.info("Paciente Asha email asha.verma@example.com teléfono +91 98765 43210")

    content = (tmp_path / "app.log").read_text(encoding="utf-8")
    assert "asha.verma@example.com" not in content
    assert "+91 98765 43210" not in content
    assert "***" in content


def test_logging_redacts_pii_in_exception_traceback(tmp_path: Path) -> None:
    configure_logging("test-app", tmp_path, json=False)
    set_run_context("run-redact-soft")
    logger = get_logger("tests.logging")

    try:
        raise ValueError("Error para Ravi tel 9876543210 email ravi@example.com")
    except ValueError as exc:
        log_soft_exception(logger, exc, {"nombre": "Ravi Kumar", "telefono": "9876543210"})

    content = (tmp_path / "crash_soft.log").read_text(encoding="utf-8")
    assert "9876543210" not in content
    assert "ravi@example.com" not in content
    assert "***" in content
