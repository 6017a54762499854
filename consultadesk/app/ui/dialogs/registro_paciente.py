from __future__ import annotations

from typing import Optional

from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from consultadesk.app.application.pacientes.registro import RegistroPacientes
from consultadesk.app.domain.exceptions import ValidationError
from consultadesk.app.domain.personas import Paciente

SEXOS = ("", "M", "F", "O")


class RegistroPacienteDialog(QDialog):
    """Alta rápida de paciente; al aceptar, ``paciente`` contiene el registro creado."""

    def __init__(self, registro: RegistroPacientes, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._registro = registro
        self.paciente: Optional[Paciente] = None
        self.setWindowTitle("Nuevo paciente")
        self.setMinimumWidth(420)
        self._build_ui()

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        form = QFormLayout()

        self.txt_nombre = QLineEdit(self)
        self.txt_telefono = QLineEdit(self)
        self.txt_edad = QLineEdit(self)
        self.cmb_sexo = QComboBox(self)
        self.cmb_sexo.addItems(SEXOS)
        self.txt_alergias = QLineEdit(self)
        self.txt_alergias.setPlaceholderText("p. ej. Penicillin, Sulfa")
        self.txt_cronicos = QLineEdit(self)
        self.txt_cronicos.setPlaceholderText("p. ej. DM, HTN")

        form.addRow("Nombre *", self.txt_nombre)
        form.addRow("Teléfono", self.txt_telefono)
        form.addRow("Edad", self.txt_edad)
        form.addRow("Sexo", self.cmb_sexo)
        form.addRow("Alergias", self.txt_alergias)
        form.addRow("Enf. crónicas", self.txt_cronicos)
        root.addLayout(form)

        self.lbl_error = QLabel("")
        self.lbl_error.setStyleSheet("color:#b91c1c;")
        root.addWidget(self.lbl_error)

        botones = QHBoxLayout()
        botones.addStretch(1)
        self.btn_cancelar = QPushButton("Cancelar", self)
        self.btn_guardar = QPushButton("Registrar", self)
        self.btn_guardar.setObjectName("primario")
        self.btn_guardar.setDefault(True)
        botones.addWidget(self.btn_cancelar)
        botones.addWidget(self.btn_guardar)
        root.addLayout(botones)

        self.btn_cancelar.clicked.connect(self.reject)
        self.btn_guardar.clicked.connect(self._on_guardar)

    def _on_guardar(self) -> None:
        try:
            self.paciente = self._registro.register(
                nombre=self.txt_nombre.text(),
                telefono=self.txt_telefono.text(),
                edad=self.txt_edad.text(),
                sexo=self.cmb_sexo.currentText(),
                alergias=self.txt_alergias.text(),
                cronicos=self.txt_cronicos.text(),
            )
        except ValidationError as exc:
            self.lbl_error.setText(str(exc))
            self.txt_nombre.setFocus()
            return
        self.accept()
