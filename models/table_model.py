import math
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple


class TableModelError(Exception):
    pass

class ShapeError(TableModelError):
    pass

class TableIndexError(TableModelError, IndexError):
    pass

class NoHeaderError(TableModelError):
    pass

class UnknownColumnError(TableModelError):
    pass


_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(text) -> Optional[float]:
    """Devuelve el valor decimal de la celda, o None si no es un número finito."""
    if text is None:
        return None
    s = str(text).strip()
    if not _NUMBER_RE.fullmatch(s):
        return None
    value = float(s)
    return value if math.isfinite(value) else None


@dataclass(frozen=True)
class AxisSelection:
    x: str
    y: str


@dataclass(frozen=True)
class ChartPoint:
    x: str
    y: float


class TableModel:
    """
    Tabla editable en memoria: encabezado + filas de strings.
    Toda mutación pasa por los métodos de esta clase; si una operación
    falla, el estado previo queda intacto.
    """

    def __init__(self):
        self._header: List[str] = []
        self._rows: List[List[str]] = []
        self._axis: AxisSelection | None = None

    # =========================================================================
    #  ESTADO
    # =========================================================================
    @property
    def header(self) -> List[str]:
        return list(self._header)

    @property
    def rows(self) -> List[List[str]]:
        return [list(r) for r in self._rows]

    @property
    def axis(self) -> AxisSelection | None:
        return self._axis

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def column_count(self) -> int:
        return len(self._header)

    def is_empty(self) -> bool:
        return not self._header

    def column_index(self, name: str) -> int:
        # Con nombres repetidos gana la primera aparición
        try:
            return self._header.index(name)
        except ValueError:
            raise UnknownColumnError(f"La columna '{name}' no existe.") from None

    # =========================================================================
    #  CARGA Y EDICIÓN
    # =========================================================================
    def load(self, header: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
        new_header = [_cell(h) for h in header]
        new_rows = []
        for i, row in enumerate(rows):
            if not new_header:
                raise ShapeError("Hay filas pero el encabezado está vacío.")
            if len(row) != len(new_header):
                raise ShapeError(
                    f"La fila {i + 1} tiene {len(row)} celdas; se esperaban {len(new_header)}."
                )
            new_rows.append([_cell(c) for c in row])

        self._header = new_header
        self._rows = new_rows
        if len(new_header) >= 2:
            self._axis = AxisSelection(new_header[0], new_header[1])
        else:
            self._axis = None

    def edit_cell(self, row_index: int, col_index: int, value: str) -> None:
        self._check_row(row_index)
        if not 0 <= col_index < len(self._header):
            raise TableIndexError(f"Columna fuera de rango: {col_index}")
        self._rows[row_index][col_index] = value

    def add_row(self) -> None:
        if not self._header:
            raise NoHeaderError("No hay encabezado cargado; no se puede agregar una fila.")
        self._rows.append([""] * len(self._header))

    def delete_row(self, row_index: int) -> None:
        self._check_row(row_index)
        del self._rows[row_index]

    def set_axis(self, x: str, y: str) -> None:
        self.column_index(x)
        self.column_index(y)
        self._axis = AxisSelection(x, y)

    def _check_row(self, row_index: int):
        if not 0 <= row_index < len(self._rows):
            raise TableIndexError(f"Fila fuera de rango: {row_index}")

    # =========================================================================
    #  DERIVADOS
    # =========================================================================
    def numeric_columns(self) -> Set[str]:
        return set(self.numeric_column_names())

    def numeric_column_names(self) -> List[str]:
        """Columnas numéricas en el orden del encabezado (sin repetidos)."""
        names = []
        for name in self._header:
            if name in names:
                continue
            idx = self._header.index(name)
            if all(parse_number(row[idx]) is not None for row in self._rows):
                names.append(name)
        return names

    def derive_chart_data(self, x: str, y: str) -> List[ChartPoint]:
        x_idx = self.column_index(x)
        y_idx = self.column_index(y)
        points = []
        for row in self._rows:
            value = parse_number(row[y_idx])
            points.append(ChartPoint(row[x_idx], math.nan if value is None else value))
        return points

    def resolve_axis(self) -> AxisSelection | None:
        """Selección a graficar; None si no hay o si 'y' dejó de ser numérica."""
        if self._axis is None or self._axis.y not in self.numeric_columns():
            return None
        return self._axis

    def snapshot(self) -> Tuple[List[str], List[List[str]]]:
        return self.header, self.rows


def _cell(value) -> str:
    return "" if value is None else str(value)
