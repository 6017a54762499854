from __future__ import annotations

import pytest

from consultadesk.app.application.recetas.editor import BorradorLinea, EditorReceta
from consultadesk.app.domain.exceptions import AllergyConfirmationRequired, ValidationError
from consultadesk.app.domain.protocolos import LineaProtocolo


@pytest.fixture()
def editor(generador_ids) -> EditorReceta:
    return EditorReceta(generar_id=generador_ids)


def _borrador(farmaco: str, dosis: str = "1 Tab") -> BorradorLinea:
    return BorradorLinea(farmaco=farmaco, dosis=dosis, frecuencia="BD", duracion="5 Days")


def test_add_appends_in_insertion_order_and_resets_buffer(editor: EditorReceta) -> None:
    editor.edit_buffer.farmaco = "Tab. Metformin 500mg"
    primera = editor.add()
    segunda = editor.add(_borrador("Tab. Glimepiride 1mg"))

    assert [linea.id for linea in editor.items] == [primera.id, segunda.id]
    assert primera.id.startswith("RX-")
    assert editor.edit_buffer == BorradorLinea()


def test_add_rejects_empty_drug_without_changes(editor: EditorReceta) -> None:
    with pytest.raises(ValidationError):
        editor.add(_borrador("   "))

    assert len(editor) == 0


def test_add_with_allergy_conflict_requires_confirmation(editor: EditorReceta) -> None:
    editor.set_alergias_paciente("Aspirin")

    with pytest.raises(AllergyConfirmationRequired) as info:
        editor.add(_borrador("Tab. Aspirin 75mg"))

    assert len(editor) == 0
    assert info.value.farmaco == "Tab. Aspirin 75mg"

    linea = editor.add(_borrador("Tab. Aspirin 75mg"), confirmar_alergia=True)
    assert editor.items == (linea,)


def test_add_without_allergies_never_asks_for_confirmation(editor: EditorReceta) -> None:
    editor.set_alergias_paciente("")

    editor.add(_borrador("Tab. Aspirin 75mg"))

    assert len(editor) == 1


def test_edit_updates_in_place_keeping_id_and_position(editor: EditorReceta) -> None:
    primera = editor.add(_borrador("Tab. A"))
    segunda = editor.add(_borrador("Tab. B"))
    tercera = editor.add(_borrador("Tab. C"))

    assert editor.begin_edit(segunda.id)
    assert editor.edit_buffer.farmaco == "Tab. B"
    actualizada = editor.add(_borrador("Tab. B 10mg", dosis="2 Tab"))

    assert actualizada.id == segunda.id
    assert [linea.id for linea in editor.items] == [primera.id, segunda.id, tercera.id]
    assert editor.items[1].farmaco == "Tab. B 10mg"
    assert editor.items[1].dosis == "2 Tab"
    assert editor.editing_id is None


def test_begin_edit_abandons_previous_buffer(editor: EditorReceta) -> None:
    primera = editor.add(_borrador("Tab. A"))
    segunda = editor.add(_borrador("Tab. B"))

    editor.begin_edit(primera.id)
    editor.edit_buffer.farmaco = "cambio sin confirmar"
    editor.begin_edit(segunda.id)

    assert editor.editing_id == segunda.id
    assert editor.edit_buffer.farmaco == "Tab. B"
    assert editor.items[0].farmaco == "Tab. A"


def test_cancel_edit_keeps_list_unchanged(editor: EditorReceta) -> None:
    linea = editor.add(_borrador("Tab. A"))
    editor.begin_edit(linea.id)
    editor.edit_buffer.farmaco = "Tab. Z"

    editor.cancel_edit()

    assert editor.editing_id is None
    assert editor.items[0].farmaco == "Tab. A"


def test_delete_of_edited_line_cancels_edit_and_next_add_appends(editor: EditorReceta) -> None:
    linea = editor.add(_borrador("Tab. A"))
    otra = editor.add(_borrador("Tab. B"))
    editor.begin_edit(linea.id)

    assert editor.delete(linea.id)
    assert editor.editing_id is None
    assert editor.items == (otra,)
    assert not editor.delete("RX-inexistente")

    nueva = editor.add(_borrador("Tab. C"))

    assert [item.farmaco for item in editor.items] == ["Tab. B", "Tab. C"]
    assert nueva.id not in (linea.id, otra.id)
    assert editor.items[0] == otra


def test_begin_edit_unknown_id_returns_false(editor: EditorReceta) -> None:
    assert not editor.begin_edit("RX-404")
    assert editor.editing_id is None


def test_append_template_bypasses_allergy_gate(editor: EditorReceta) -> None:
    editor.set_alergias_paciente("aspirin")

    nuevas = editor.append_template([LineaProtocolo("Tab. Aspirin 75mg", "1 Tab", "OD", "30 Days", "After lunch")])

    assert len(nuevas) == 1
    assert nuevas[0].id.startswith("AI-RX-")
    assert editor.items == tuple(nuevas)


def test_snapshot_is_independent_copy(editor: EditorReceta) -> None:
    editor.add(_borrador("Tab. A"))

    copia = editor.snapshot()
    copia[0].farmaco = "modificado"

    assert editor.items[0].farmaco == "Tab. A"


@pytest.mark.parametrize(
    ("actual", "forma", "esperado"),
    [
        ("Paracetamol 500mg", "Tab.", "Tab. Paracetamol 500mg"),
        ("Tab. Paracetamol 500mg", "Syr.", "Syr. Paracetamol 500mg"),
        ("", "Cap.", "Cap."),
    ],
)
def test_apply_dosage_form_prepends_or_replaces(editor: EditorReceta, actual: str, forma: str, esperado: str) -> None:
    editor.edit_buffer.farmaco = actual

    assert editor.apply_dosage_form(forma) == esperado
