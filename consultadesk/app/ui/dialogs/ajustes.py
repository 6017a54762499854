from __future__ import annotations

from typing import Optional

from PySide6.QtWidgets import (
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from consultadesk.app.application.services.ajustes_service import ServicioAjustes
from consultadesk.app.application.services.almacen_clinico import ResultadoGuardado


class AjustesDialog(QDialog):
    def __init__(self, servicio: ServicioAjustes, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._servicio = servicio
        self.resultado: Optional[ResultadoGuardado] = None
        self.setWindowTitle("Ajustes de la consulta")
        self.setMinimumWidth(460)
        self._build_ui()
        self._cargar()

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        form = QFormLayout()
        self.txt_clinica = QLineEdit(self)
        self.txt_medico = QLineEdit(self)
        self.txt_direccion = QPlainTextEdit(self)
        self.txt_direccion.setFixedHeight(70)
        self.txt_pie = QLineEdit(self)
        form.addRow("Clínica", self.txt_clinica)
        form.addRow("Médico", self.txt_medico)
        form.addRow("Dirección", self.txt_direccion)
        form.addRow("Pie de página", self.txt_pie)
        root.addLayout(form)

        botones = QHBoxLayout()
        botones.addStretch(1)
        self.btn_cancelar = QPushButton("Cancelar", self)
        self.btn_guardar = QPushButton("Guardar", self)
        self.btn_guardar.setObjectName("primario")
        botones.addWidget(self.btn_cancelar)
        botones.addWidget(self.btn_guardar)
        root.addLayout(botones)

        self.btn_cancelar.clicked.connect(self.reject)
        self.btn_guardar.clicked.connect(self._on_guardar)

    def _cargar(self) -> None:
        actuales = self._servicio.current()
        self.txt_clinica.setText(actuales.nombre_clinica)
        self.txt_medico.setText(actuales.nombre_medico)
        self.txt_direccion.setPlainText(actuales.direccion)
        self.txt_pie.setText(actuales.pie_pagina)

    def _on_guardar(self) -> None:
        self.resultado = self._servicio.update(
            nombre_clinica=self.txt_clinica.text().strip(),
            nombre_medico=self.txt_medico.text().strip(),
            direccion=self.txt_direccion.toPlainText().strip(),
            pie_pagina=self.txt_pie.text().strip(),
        )
        self.accept()
