import logging
from typing import Callable, List, Optional, Tuple

import config
from models.csv_model import CSVData
from models.table_model import AxisSelection, ChartPoint, TableModel
from services.csv_service import CSVService, CSVServiceError

logger = logging.getLogger(__name__)


class CSVController:
    """
    Única vía de mutación de la tabla. Después de cada cambio exitoso avisa
    a los suscriptores para que la vista vuelva a leer el modelo.
    """

    def __init__(self, model: TableModel | None = None):
        self.model = model or TableModel()
        self.source_path: str | None = None
        self.last_warning: str | None = None
        self._listeners: List[Callable[[], None]] = []

    # --- NOTIFICACIONES ---
    def subscribe(self, callback: Callable[[], None]):
        if callback not in self._listeners:
            self._listeners.append(callback)

    def unsubscribe(self, callback: Callable[[], None]):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self):
        for callback in list(self._listeners):
            callback()

    # --- LECTURA ---
    def load_csv(self, path: str) -> CSVData:
        data = CSVService.read_csv(path)
        self._apply(data)
        self.source_path = path
        logger.info("Cargado %s: %d columnas, %d filas (%s, delimitador %r)",
                    path, len(data.columns), len(data.rows), data.encoding, data.delimiter)
        self._notify()
        return data

    def _apply(self, data: CSVData):
        # ShapeError sube sin tocar la tabla anterior
        self.model.load(data.columns, data.rows)
        self.last_warning = None
        if data.is_empty():
            self.last_warning = "El archivo está vacío o no es un CSV válido."
            logger.warning(self.last_warning)

    # --- EDICIÓN ---
    def edit_cell(self, row_index: int, col_index: int, value: str):
        self.model.edit_cell(row_index, col_index, value)
        self._notify()

    def add_row(self):
        self.model.add_row()
        self._notify()

    def delete_row(self, row_index: int):
        self.model.delete_row(row_index)
        logger.info("Fila %d eliminada", row_index)
        self._notify()

    # --- CONSULTAS ---
    def has_data(self) -> bool:
        return not self.model.is_empty()

    def get_header(self) -> List[str]:
        return self.model.header

    def get_rows(self) -> List[List[str]]:
        return self.model.rows

    # --- GRÁFICA ---
    def get_axis_options(self) -> Tuple[List[str], List[str]]:
        x_options = []
        for name in self.model.header:
            if name not in x_options:
                x_options.append(name)
        return x_options, self.model.numeric_column_names()

    def set_axis(self, x: Optional[str] = None, y: Optional[str] = None):
        current = self.model.axis
        if x is None:
            x = current.x if current else y
        if y is None:
            y = current.y if current else x
        if x is None or y is None:
            return
        self.model.set_axis(x, y)
        self._notify()

    def get_chart_data(self) -> Tuple[AxisSelection, List[ChartPoint]] | None:
        axis = self.model.resolve_axis()
        if axis is None:
            return None
        return axis, self.model.derive_chart_data(axis.x, axis.y)

    # ========================================================
    #  EXPORTACIÓN
    # ========================================================
    def default_export_name(self) -> str:
        return config.EXPORT_FILENAME

    def export_csv(self, path: str):
        header, rows = self._export_snapshot()
        CSVService.write_csv(path, header, rows)
        logger.info("CSV exportado en %s (%d filas)", path, len(rows))

    def export_excel(self, path: str, figure=None):
        header, rows = self._export_snapshot()
        CSVService.write_excel(path, header, rows,
                               numeric_columns=self.model.numeric_columns(), figure=figure)
        logger.info("Excel exportado en %s (%d filas)", path, len(rows))

    def _export_snapshot(self):
        if self.model.is_empty():
            raise CSVServiceError("No hay datos para exportar.")
        return self.model.snapshot()
