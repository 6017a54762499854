from __future__ import annotations

from consultadesk.app.common.log_redaction import redact_text, redact_value


def test_redact_text_masks_email_and_phone() -> None:
    text = "Contacto: asha.verma@example.com tel +91 98765 43210 móvil 9876543210"

    redacted = redact_text(text)

    assert "asha.verma@example.com" not in redacted
    assert "+91 98765 43210" not in redacted
    assert "9876543210" not in redacted
    assert redacted.count("***") >= 3


def test_redact_text_keeps_identifiers_and_short_numbers() -> None:
    text = "visit_saved visit_id=V-LZ3K9Q1A-4F7XQ rx_count=3"

    assert redact_text(text) == text


def test_redact_value_masks_sensitive_keys_recursively() -> None:
    payload = {
        "nombre": "Asha Verma",
        "paciente": {"telefono": "9876543210", "alergias": "Penicillin"},
        "visitas": [{"diagnostico": "Essential Hypertension"}],
        "operation": "commit",
        "rx_count": 2,
    }

    redacted = redact_value(payload)

    assert redacted["nombre"] == "***"
    assert redacted["paciente"]["telefono"] == "***"
    assert redacted["paciente"]["alergias"] == "***"
    assert redacted["visitas"][0]["diagnostico"] == "***"
    assert redacted["operation"] == "commit"
    assert redacted["rx_count"] == 2


def test_redact_text_masks_sensitive_key_value_pairs_in_event_messages() -> None:
    text = "patient_registered patient_name=Asha diagnosis=Migraine rx_count=2"

    assert redact_text(text) == "patient_registered patient_name=*** diagnosis=*** rx_count=2"
