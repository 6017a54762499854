from __future__ import annotations

from typing import List, Optional

from PySide6.QtWidgets import (
    QAbstractItemView,
    QDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from consultadesk.app.domain.visitas import Visita


class HistorialDialog(QDialog):
    """Visitas previas del paciente activo; al aceptar, ``seleccionada`` es la visita a cargar."""

    def __init__(self, visitas: List[Visita], parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._visitas = visitas
        self.seleccionada: Optional[Visita] = None
        self.setWindowTitle("Historial de visitas")
        self.setMinimumSize(720, 420)
        self._build_ui()
        self._render()

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        self.lbl_vacio = QLabel("Sin visitas previas.")
        root.addWidget(self.lbl_vacio)

        self.tabla = QTableWidget(0, 4, self)
        self.tabla.setHorizontalHeaderLabels(["Fecha", "Diagnóstico", "Motivo", "Rx"])
        self.tabla.horizontalHeader().setStretchLastSection(True)
        self.tabla.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.tabla.setSelectionMode(QAbstractItemView.SingleSelection)
        self.tabla.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.tabla.cellDoubleClicked.connect(lambda *_: self._on_cargar())
        root.addWidget(self.tabla)

        botones = QHBoxLayout()
        botones.addStretch(1)
        self.btn_cerrar = QPushButton("Cerrar", self)
        self.btn_cargar = QPushButton("Cargar visita", self)
        self.btn_cargar.setObjectName("primario")
        botones.addWidget(self.btn_cerrar)
        botones.addWidget(self.btn_cargar)
        root.addLayout(botones)

        self.btn_cerrar.clicked.connect(self.reject)
        self.btn_cargar.clicked.connect(self._on_cargar)

    def _render(self) -> None:
        self.lbl_vacio.setVisible(not self._visitas)
        self.btn_cargar.setEnabled(bool(self._visitas))
        self.tabla.setRowCount(len(self._visitas))
        for fila, visita in enumerate(self._visitas):
            self.tabla.setItem(fila, 0, QTableWidgetItem(visita.fecha[:10]))
            self.tabla.setItem(fila, 1, QTableWidgetItem(visita.notas.diagnostico or "--"))
            self.tabla.setItem(fila, 2, QTableWidgetItem(visita.notas.motivo or "Sin motivo registrado"))
            self.tabla.setItem(fila, 3, QTableWidgetItem(str(len(visita.rx))))
        self.tabla.resizeColumnsToContents()
        if self._visitas:
            self.tabla.selectRow(0)

    def _on_cargar(self) -> None:
        fila = self.tabla.currentRow()
        if fila < 0 or fila >= len(self._visitas):
            return
        self.seleccionada = self._visitas[fila]
        self.accept()
