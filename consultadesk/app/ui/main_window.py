# ui/main_window.py
"""
Cabina de consulta: paciente activo, notas, constantes, receta y CDSS.

Modelo pull: los widgets escriben en la sesión al editar y ``_refrescar``
vuelve a pintar todo desde la sesión y el editor de receta tras cada operación.
"""

from __future__ import annotations

from typing import Dict, Optional

from PySide6.QtCore import QDate, QStringListModel, Qt, Signal
from PySide6.QtGui import QBrush, QColor, QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QAbstractItemView,
    QCompleter,
    QDateEdit,
    QFormLayout,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMenu,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QSplitter,
    QTableWidget,
    QTableWidgetItem,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from consultadesk.app.application.protocolos.motor import ResultadoSugerencia, SolicitudSugerencia
from consultadesk.app.application.services.almacen_clinico import ResultadoGuardado
from consultadesk.app.bootstrap_logging import get_logger
from consultadesk.app.container import AppContainer
from consultadesk.app.domain.enums import CampoNota, EstadoSesion
from consultadesk.app.domain.exceptions import AllergyConfirmationRequired, DomainError
from consultadesk.app.domain.farmacia import FORMAS_FARMACEUTICAS
from consultadesk.app.domain.personas import Paciente
from consultadesk.app.ui.dialogs.ajustes import AjustesDialog
from consultadesk.app.ui.dialogs.historial import HistorialDialog
from consultadesk.app.ui.dialogs.registro_paciente import RegistroPacienteDialog
from consultadesk.app.ui.error_presenter import present_error
from consultadesk.app.ui.impresion import print_document
from consultadesk.app.ui.widgets.toast import GestorToasts

LOGGER = get_logger(__name__)

TITULOS_NOTAS: Dict[CampoNota, str] = {
    CampoNota.MOTIVO: "Chief Complaints",
    CampoNota.EXPLORACION: "Examination",
    CampoNota.DIAGNOSTICO: "Diagnosis",
    CampoNota.CONSEJOS: "Advice / Follow-up",
    CampoNota.PRUEBAS: "Investigations",
}

MACROS: Dict[CampoNota, tuple[str, ...]] = {
    CampoNota.MOTIVO: ("Fever since 3 days", "Cough with expectoration", "Chest pain on exertion"),
    CampoNota.EXPLORACION: (
        "CVS: S1 S2 heard, no murmur",
        "RS: B/L air entry equal, no added sounds",
        "P/A: Soft, non-tender",
    ),
    CampoNota.CONSEJOS: ("Review after 1 week", "Review SOS", "Low salt, low fat diet"),
    CampoNota.PRUEBAS: ("CBC", "ECG", "Lipid Profile"),
}

CONSTANTES = (
    ("tension", "BP (mmHg)"),
    ("pulso", "Pulse (/min)"),
    ("temperatura", "Temp (°F)"),
    ("spo2", "SpO2 (%)"),
    ("peso", "Weight (kg)"),
    ("talla", "Height (cm)"),
)

COLUMNAS_RX = ("#", "Medicine", "Dose", "Frequency", "Duration", "Instruction")


class MainWindow(QMainWindow):
    # Punto de entrada para un reconocedor de voz externo: (token, texto final).
    dictado_resultado = Signal(int, str)

    def __init__(self, container: AppContainer, toasts: Optional[GestorToasts] = None) -> None:
        super().__init__()
        self.container = container
        self.toasts = toasts or GestorToasts()
        self._solicitud: Optional[SolicitudSugerencia] = None
        self._notas: Dict[CampoNota, QPlainTextEdit] = {}
        self._microfonos: Dict[CampoNota, QPushButton] = {}
        self._constantes: Dict[str, QLineEdit] = {}

        self.setWindowTitle("ConsultaDesk")
        self.resize(1280, 860)

        root = QWidget()
        self.setCentralWidget(root)
        layout = QVBoxLayout(root)
        layout.addLayout(self._build_barra())
        layout.addWidget(self._build_contexto())

        splitter = QSplitter(Qt.Horizontal)
        splitter.addWidget(self._build_columna_clinica())
        splitter.addWidget(self._build_receta())
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 1)
        layout.addWidget(splitter, 1)

        self._build_atajos()
        self.toasts.subscribe(self._pintar_toast)
        self.dictado_resultado.connect(self._on_dictado_resultado)

        for aviso in container.avisos_carga:
            self.toasts.warning(aviso)
        self._refrescar()

    # ------------------------------------------------------------------
    # Construcción
    # ------------------------------------------------------------------

    def _build_barra(self) -> QVBoxLayout:
        barra = QVBoxLayout()
        fila = QHBoxLayout()
        self.txt_buscar = QLineEdit(self)
        self.txt_buscar.setPlaceholderText("Buscar paciente por nombre, teléfono o UHID (Alt+S)")
        self.btn_nuevo = QPushButton("Nuevo paciente", self)
        self.btn_historial = QPushButton("Historial", self)
        self.btn_ajustes = QPushButton("Ajustes", self)
        self.btn_guardar = QPushButton("Guardar", self)
        self.btn_guardar.setObjectName("primario")
        self.btn_imprimir = QPushButton("Imprimir", self)
        fila.addWidget(self.txt_buscar, 1)
        for boton in (self.btn_nuevo, self.btn_historial, self.btn_ajustes, self.btn_guardar, self.btn_imprimir):
            fila.addWidget(boton)
        barra.addLayout(fila)

        self.lst_resultados = QListWidget(self)
        self.lst_resultados.setMaximumHeight(160)
        self.lst_resultados.hide()
        barra.addWidget(self.lst_resultados)

        self.txt_buscar.textChanged.connect(self._on_buscar)
        self.lst_resultados.itemActivated.connect(self._on_resultado_elegido)
        self.lst_resultados.itemClicked.connect(self._on_resultado_elegido)
        self.btn_nuevo.clicked.connect(self._on_nuevo_paciente)
        self.btn_historial.clicked.connect(self._on_historial)
        self.btn_ajustes.clicked.connect(self._on_ajustes)
        self.btn_guardar.clicked.connect(self._on_guardar)
        self.btn_imprimir.clicked.connect(self._on_imprimir)
        return barra

    def _build_contexto(self) -> QWidget:
        caja = QGroupBox("Paciente", self)
        grid = QGridLayout(caja)
        self.lbl_paciente = QLabel("Sin paciente seleccionado")
        self.lbl_paciente.setObjectName("contextoPaciente")
        self.lbl_banner = QLabel("")
        self.lbl_banner.setObjectName("bannerAlergias")
        self.lbl_banner.hide()
        self.txt_alergias = QLineEdit(self)
        self.txt_cronicos = QLineEdit(self)
        self.date_visita = QDateEdit(self)
        self.date_visita.setCalendarPopup(True)
        self.date_visita.setDisplayFormat("yyyy-MM-dd")

        grid.addWidget(self.lbl_paciente, 0, 0, 1, 3)
        grid.addWidget(self.lbl_banner, 0, 3)
        grid.addWidget(QLabel("Alergias"), 1, 0)
        grid.addWidget(self.txt_alergias, 1, 1)
        grid.addWidget(QLabel("Enf. crónicas"), 1, 2)
        grid.addWidget(self.txt_cronicos, 1, 3)
        grid.addWidget(QLabel("Fecha de visita"), 2, 0)
        grid.addWidget(self.date_visita, 2, 1)

        sesion = self.container.sesion
        self.txt_alergias.textEdited.connect(lambda t: setattr(sesion, "alergias_snapshot", t))
        self.txt_cronicos.textEdited.connect(lambda t: setattr(sesion, "cronicos_snapshot", t))
        self.date_visita.dateChanged.connect(
            lambda d: sesion.set_visit_date(d.toString("yyyy-MM-dd"))
        )
        return caja

    def _build_columna_clinica(self) -> QWidget:
        columna = QWidget(self)
        layout = QVBoxLayout(columna)

        vitales = QGroupBox("Constantes", columna)
        grid = QGridLayout(vitales)
        for idx, (campo, etiqueta) in enumerate(CONSTANTES):
            editor = QLineEdit(vitales)
            editor.textEdited.connect(
                lambda texto, c=campo: setattr(self.container.sesion.constantes, c, texto)
            )
            self._constantes[campo] = editor
            grid.addWidget(QLabel(etiqueta), idx // 3 * 2, idx % 3)
            grid.addWidget(editor, idx // 3 * 2 + 1, idx % 3)
        self.btn_imc = QPushButton("Calcular IMC", vitales)
        self.btn_imc.clicked.connect(self._on_imc)
        grid.addWidget(self.btn_imc, 4, 2)
        layout.addWidget(vitales)

        for campo, titulo in TITULOS_NOTAS.items():
            layout.addWidget(self._build_nota(campo, titulo, columna))

        self.btn_sugerir = QPushButton("Sugerir protocolo (CDSS)", columna)
        self.btn_sugerir.setObjectName("primario")
        self.btn_sugerir.clicked.connect(self._on_sugerir)
        self.lbl_sugerencia = QLabel("")
        fila = QHBoxLayout()
        fila.addWidget(self.btn_sugerir)
        fila.addWidget(self.lbl_sugerencia, 1)
        layout.addLayout(fila)
        return columna

    def _build_nota(self, campo: CampoNota, titulo: str, parent: QWidget) -> QWidget:
        caja = QGroupBox(titulo, parent)
        layout = QVBoxLayout(caja)
        cabecera = QHBoxLayout()
        cabecera.addStretch(1)

        if campo in MACROS:
            boton_macro = QToolButton(caja)
            boton_macro.setText("+ Macro")
            boton_macro.setPopupMode(QToolButton.InstantPopup)
            menu = QMenu(boton_macro)
            for texto in MACROS[campo]:
                menu.addAction(texto, lambda t=texto, c=campo: self._on_macro(c, t))
            boton_macro.setMenu(menu)
            cabecera.addWidget(boton_macro)

        microfono = QPushButton("Mic", caja)
        microfono.setObjectName("microfono")
        microfono.setCheckable(True)
        microfono.toggled.connect(lambda activo, c=campo: self._on_microfono(c, activo))
        cabecera.addWidget(microfono)
        self._microfonos[campo] = microfono

        texto = QPlainTextEdit(caja)
        texto.setFixedHeight(64)
        texto.textChanged.connect(
            lambda c=campo, w=texto: setattr(self.container.sesion.notas, c.value, w.toPlainText())
        )
        self._notas[campo] = texto
        layout.addLayout(cabecera)
        layout.addWidget(texto)
        return caja

    def _build_receta(self) -> QWidget:
        caja = QGroupBox("Rx", self)
        layout = QVBoxLayout(caja)

        formas = QHBoxLayout()
        for forma in FORMAS_FARMACEUTICAS:
            chip = QPushButton(forma, caja)
            chip.clicked.connect(lambda _=False, f=forma: self._on_forma(f))
            formas.addWidget(chip)
        formas.addStretch(1)
        layout.addLayout(formas)

        form = QFormLayout()
        self.txt_farmaco = QLineEdit(caja)
        self._modelo_catalogo = QStringListModel(self)
        completer = QCompleter(self._modelo_catalogo, self)
        completer.setCaseSensitivity(Qt.CaseInsensitive)
        completer.setFilterMode(Qt.MatchContains)
        self.txt_farmaco.setCompleter(completer)
        self.txt_farmaco.textEdited.connect(self._on_farmaco_editado)
        self.txt_dosis = QLineEdit(caja)
        self.txt_frecuencia = QLineEdit(caja)
        self.txt_duracion = QLineEdit(caja)
        self.txt_observaciones = QLineEdit(caja)
        form.addRow("Medicine", self.txt_farmaco)
        form.addRow("Dose", self.txt_dosis)
        form.addRow("Frequency", self.txt_frecuencia)
        form.addRow("Duration", self.txt_duracion)
        form.addRow("Instruction", self.txt_observaciones)
        layout.addLayout(form)
        for linea, campo in (
            (self.txt_farmaco, "farmaco"),
            (self.txt_dosis, "dosis"),
            (self.txt_frecuencia, "frecuencia"),
            (self.txt_duracion, "duracion"),
            (self.txt_observaciones, "observaciones"),
        ):
            self._vincular_buffer(linea, campo)

        # Enter avanza de campo en campo; en el último confirma la línea.
        self.txt_farmaco.returnPressed.connect(self.txt_dosis.setFocus)
        self.txt_dosis.returnPressed.connect(self.txt_frecuencia.setFocus)
        self.txt_frecuencia.returnPressed.connect(self.txt_duracion.setFocus)
        self.txt_duracion.returnPressed.connect(self.txt_observaciones.setFocus)
        self.txt_observaciones.returnPressed.connect(self._on_anadir_rx)

        acciones = QHBoxLayout()
        self.btn_anadir = QPushButton("Añadir", caja)
        self.btn_cancelar_edicion = QPushButton("Cancelar edición", caja)
        self.btn_editar = QPushButton("Editar", caja)
        self.btn_borrar = QPushButton("Borrar", caja)
        for boton in (self.btn_anadir, self.btn_cancelar_edicion, self.btn_editar, self.btn_borrar):
            acciones.addWidget(boton)
        acciones.addStretch(1)
        layout.addLayout(acciones)

        self.tabla_rx = QTableWidget(0, len(COLUMNAS_RX), caja)
        self.tabla_rx.setHorizontalHeaderLabels(list(COLUMNAS_RX))
        self.tabla_rx.horizontalHeader().setStretchLastSection(True)
        self.tabla_rx.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.tabla_rx.setSelectionMode(QAbstractItemView.SingleSelection)
        self.tabla_rx.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.tabla_rx.cellDoubleClicked.connect(lambda *_: self._on_editar_rx())
        layout.addWidget(self.tabla_rx, 1)

        self.btn_anadir.clicked.connect(self._on_anadir_rx)
        self.btn_cancelar_edicion.clicked.connect(self._on_cancelar_edicion)
        self.btn_editar.clicked.connect(self._on_editar_rx)
        self.btn_borrar.clicked.connect(self._on_borrar_rx)
        return caja

    def _build_atajos(self) -> None:
        atajos = (
            (QKeySequence("Ctrl+S"), self._on_guardar),
            (QKeySequence("Ctrl+P"), self._on_imprimir),
            (QKeySequence("Alt+N"), self._on_nuevo_paciente),
            (QKeySequence("Alt+S"), self.txt_buscar.setFocus),
            (QKeySequence(Qt.Key_Escape), self._on_escape),
        )
        for secuencia, accion in atajos:
            QShortcut(secuencia, self).activated.connect(accion)

    # ------------------------------------------------------------------
    # Pintado
    # ------------------------------------------------------------------

    def _refrescar(self) -> None:
        sesion = self.container.sesion
        paciente = sesion.paciente
        hay_paciente = paciente is not None

        if paciente is None:
            self.lbl_paciente.setText("Sin paciente seleccionado")
            self.lbl_banner.hide()
        else:
            sufijo = "  (historial)" if sesion.estado == EstadoSesion.HISTORY else ""
            self.lbl_paciente.setText(
                f"{paciente.nombre}  |  {paciente.edad_sexo()}  |  UHID: {paciente.id}{sufijo}"
            )
            self.lbl_banner.setText(f"ALLERGY: {paciente.alergias}")
            self.lbl_banner.setVisible(paciente.tiene_alergias)

        self.txt_alergias.setText(sesion.alergias_snapshot)
        self.txt_cronicos.setText(sesion.cronicos_snapshot)
        self.date_visita.blockSignals(True)
        fecha = QDate.fromString(sesion.fecha_visita[:10], "yyyy-MM-dd")
        self.date_visita.setDate(fecha if fecha.isValid() else QDate.currentDate())
        self.date_visita.blockSignals(False)

        for campo, editor in self._constantes.items():
            editor.setText(getattr(sesion.constantes, campo))
        for campo, texto in self._notas.items():
            texto.blockSignals(True)
            texto.setPlainText(getattr(sesion.notas, campo.value))
            texto.blockSignals(False)

        for widget in (self.btn_guardar, self.btn_imprimir, self.btn_historial, self.btn_imc):
            widget.setEnabled(hay_paciente)
        self.btn_sugerir.setEnabled(hay_paciente and not self.container.motor.ocupado)
        self._refrescar_receta()

    def _refrescar_receta(self) -> None:
        editor = self.container.editor
        self.tabla_rx.setRowCount(len(editor))
        for fila, linea in enumerate(editor.items):
            valores = (
                str(fila + 1),
                linea.farmaco,
                linea.dosis,
                linea.frecuencia,
                linea.duracion,
                linea.observaciones,
            )
            for col, valor in enumerate(valores):
                item = QTableWidgetItem(valor)
                item.setData(Qt.UserRole, linea.id)
                if linea.id == editor.editing_id:
                    item.setBackground(QBrush(QColor("#fef9c3")))
                self.tabla_rx.setItem(fila, col, item)
        self.tabla_rx.resizeColumnsToContents()

        buffer = editor.edit_buffer
        self.txt_farmaco.setText(buffer.farmaco)
        self.txt_dosis.setText(buffer.dosis)
        self.txt_frecuencia.setText(buffer.frecuencia)
        self.txt_duracion.setText(buffer.duracion)
        self.txt_observaciones.setText(buffer.observaciones)
        editando = editor.editing_id is not None
        self.btn_anadir.setText("Actualizar" if editando else "Añadir")
        self.btn_cancelar_edicion.setEnabled(editando)

    def _pintar_toast(self, payload: dict) -> None:
        self.statusBar().showMessage(payload["message"], 5000)

    def _avisar_guardado(self, resultado: ResultadoGuardado, mensaje_ok: str) -> None:
        if resultado.persistido:
            self.toasts.success(mensaje_ok)
        else:
            self.toasts.warning(resultado.aviso or "No se pudo guardar.")

    # ------------------------------------------------------------------
    # Pacientes y visita
    # ------------------------------------------------------------------

    def _on_buscar(self, texto: str) -> None:
        self.lst_resultados.clear()
        resultados = self.container.registro.search(texto)
        for paciente in resultados:
            item = QListWidgetItem(f"{paciente.nombre}  ·  {paciente.telefono or '--'}  ·  {paciente.id}")
            item.setData(Qt.UserRole, paciente.id)
            self.lst_resultados.addItem(item)
        self.lst_resultados.setVisible(bool(resultados))

    def _on_resultado_elegido(self, item: QListWidgetItem) -> None:
        paciente = self.container.registro.get_by_id(item.data(Qt.UserRole))
        self.lst_resultados.hide()
        self.txt_buscar.clear()
        if paciente is not None:
            self._cargar_paciente(paciente)

    def _cargar_paciente(self, paciente: Paciente) -> None:
        self._cancelar_sugerencia()
        self.container.sesion.load_patient_context(paciente)
        self.toasts.info(f"Paciente cargado: {paciente.nombre}")
        self._refrescar()

    def _on_nuevo_paciente(self) -> None:
        dialogo = RegistroPacienteDialog(self.container.registro, self)
        if dialogo.exec() and dialogo.paciente is not None:
            self._cargar_paciente(dialogo.paciente)

    def _on_historial(self) -> None:
        sesion = self.container.sesion
        dialogo = HistorialDialog(sesion.history_for_current_patient(), self)
        if not dialogo.exec() or dialogo.seleccionada is None:
            return
        self._cancelar_sugerencia()
        try:
            sesion.load_history_visit(dialogo.seleccionada)
        except DomainError as exc:
            present_error(self, exc, "load_history")
            return
        self.toasts.info("Visita histórica cargada; guardar sobrescribe ese registro.")
        self._refrescar()

    def _on_ajustes(self) -> None:
        dialogo = AjustesDialog(self.container.ajustes, self)
        if dialogo.exec() and dialogo.resultado is not None:
            self._avisar_guardado(dialogo.resultado, "Ajustes guardados.")

    def _on_guardar(self) -> None:
        try:
            resultado = self.container.sesion.save()
        except DomainError as exc:
            present_error(self, exc, "save_visit")
            return
        self._avisar_guardado(resultado, "Visita guardada.")
        self._refrescar()

    def _on_imprimir(self) -> None:
        try:
            documento = self.container.documentos.generate()
        except DomainError as exc:
            present_error(self, exc, "print")
            return
        if documento.guardado is not None and not documento.guardado.persistido:
            self.toasts.warning(documento.guardado.aviso or "No se pudo guardar.")
        self._refrescar()
        print_document(self, documento)

    def _on_escape(self) -> None:
        self.lst_resultados.hide()
        self._on_cancelar_edicion()

    # ------------------------------------------------------------------
    # Notas, constantes y dictado
    # ------------------------------------------------------------------

    def _on_macro(self, campo: CampoNota, texto: str) -> None:
        self.container.sesion.insert_macro(campo, texto)
        self._refrescar()

    def _on_imc(self) -> None:
        try:
            resultado = self.container.sesion.apply_bmi()
        except DomainError as exc:
            present_error(self, exc, "bmi")
            return
        self.toasts.info(resultado.texto())
        self._refrescar()

    def _on_microfono(self, campo: CampoNota, activo: bool) -> None:
        dictado = self.container.dictado
        if activo:
            for otro, boton in self._microfonos.items():
                if otro != campo and boton.isChecked():
                    boton.blockSignals(True)
                    boton.setChecked(False)
                    boton.blockSignals(False)
            dictado.start(campo)
            self.toasts.info("Escuchando…")
        else:
            dictado.stop()

    def _on_dictado_resultado(self, token: int, texto: str) -> None:
        if self.container.dictado.deliver(token, texto):
            self._refrescar()

    # ------------------------------------------------------------------
    # Receta
    # ------------------------------------------------------------------

    def _vincular_buffer(self, editor_linea: QLineEdit, campo: str) -> None:
        # El buffer se sustituye tras cada add(): se resuelve en cada cambio.
        editor_linea.textChanged.connect(
            lambda texto: setattr(self.container.editor.edit_buffer, campo, texto)
        )

    def _on_farmaco_editado(self, texto: str) -> None:
        self._modelo_catalogo.setStringList(self.container.catalogo.search(texto))

    def _on_forma(self, forma: str) -> None:
        self.txt_farmaco.setText(self.container.editor.apply_dosage_form(forma))
        self.txt_farmaco.setFocus()

    def _on_anadir_rx(self) -> None:
        editor = self.container.editor
        try:
            editor.add()
        except AllergyConfirmationRequired as exc:
            respuesta = QMessageBox.question(
                self,
                "Alergia registrada",
                f"ATENCIÓN: el paciente tiene alergia a '{exc.alergias}'.\n"
                f"¿Seguro que quieres prescribir {exc.farmaco}?",
            )
            if respuesta != QMessageBox.Yes:
                return
            editor.add(confirmar_alergia=True)
        except DomainError as exc:
            present_error(self, exc, "rx_add")
            return
        self._refrescar_receta()
        self.txt_farmaco.setFocus()

    def _linea_seleccionada(self) -> Optional[str]:
        fila = self.tabla_rx.currentRow()
        item = self.tabla_rx.item(fila, 0) if fila >= 0 else None
        return None if item is None else item.data(Qt.UserRole)

    def _on_editar_rx(self) -> None:
        linea_id = self._linea_seleccionada()
        if linea_id and self.container.editor.begin_edit(linea_id):
            self._refrescar_receta()
            self.txt_farmaco.setFocus()

    def _on_cancelar_edicion(self) -> None:
        self.container.editor.cancel_edit()
        self._refrescar_receta()

    def _on_borrar_rx(self) -> None:
        linea_id = self._linea_seleccionada()
        if linea_id and self.container.editor.delete(linea_id):
            self._refrescar_receta()

    # ------------------------------------------------------------------
    # CDSS
    # ------------------------------------------------------------------

    def _on_sugerir(self) -> None:
        try:
            solicitud = self.container.motor.request_suggestion(
                self.container.sesion, on_done=self._on_sugerencia
            )
        except DomainError as exc:
            present_error(self, exc, "suggest")
            return
        if solicitud.pendiente:
            self._solicitud = solicitud
            self.btn_sugerir.setEnabled(False)
            self.lbl_sugerencia.setText("Analizando diagnóstico…")

    def _on_sugerencia(self, resultado: ResultadoSugerencia) -> None:
        self._solicitud = None
        self.lbl_sugerencia.setText(resultado.protocolo.condicion)
        if resultado.coincidencia:
            self.toasts.success("Protocolo encontrado y aplicado.")
        else:
            self.toasts.info("Sin protocolo específico; se cargó el tratamiento genérico.")
        self._refrescar()

    def _cancelar_sugerencia(self) -> None:
        if self._solicitud is not None and self._solicitud.cancel():
            self.lbl_sugerencia.setText("")
        self._solicitud = None
