import csv
import io
import logging
import sys
from typing import Iterable, List, Sequence

import openpyxl
import pandas as pd
from openpyxl.drawing.image import Image as ExcelImage

import config
from models.csv_model import CSVData
from models.table_model import parse_number

logger = logging.getLogger(__name__)

# Sin límite de tamaño por campo (el de csv es 128 KiB); el tope evita OverflowError en Windows
csv.field_size_limit(min(sys.maxsize, 2**31 - 1))


class CSVServiceError(Exception):
    pass

class CSVService:
    """
    Lectura y escritura de tablas.
    - Soporta múltiples codificaciones (UTF-8, Latin-1, CP1252).
    - Detecta el delimitador a partir del encabezado.
    - Archivos vacíos o ilegibles se decodifican como tabla vacía.
    """

    # =========================================================================
    #  LECTURA
    # =========================================================================
    @staticmethod
    def read_csv(path: str) -> CSVData:
        try:
            with open(path, "rb") as f:
                raw = f.read()
        except OSError as e:
            raise CSVServiceError(f"Error de lectura: {e}") from e
        return CSVService.decode_bytes(raw)

    @staticmethod
    def decode_bytes(raw: bytes) -> CSVData:
        for enc in config.ENCODINGS:
            try:
                text = raw.decode(enc)
            except UnicodeDecodeError:
                logger.debug("Codificación %s descartada", enc)
                continue
            data = CSVService.decode_text(text)
            data.encoding = enc
            return data
        return CSVData()

    @staticmethod
    def decode_text(text: str) -> CSVData:
        text = text.lstrip("\ufeff")
        if not text.strip():
            return CSVData()

        first_line = next(line for line in text.splitlines() if line.strip())
        delimiter = CSVService.detect_delimiter(first_line)
        try:
            parsed = list(csv.reader(io.StringIO(text, newline=""), delimiter=delimiter))
        except csv.Error as e:
            logger.warning("CSV mal formado, se carga tabla vacía: %s", e)
            return CSVData()

        # El encabezado es la primera línea con contenido
        while parsed and not any(cell.strip() for cell in parsed[0]):
            parsed.pop(0)
        if not parsed:
            return CSVData()

        columns = [c.strip() for c in parsed[0]]
        rows = [CSVService._normalize_row(row, len(columns))
                for row in parsed[1:] if not CSVService._is_blank_line(row, len(columns))]
        return CSVData(columns=columns, rows=rows, delimiter=delimiter)

    @staticmethod
    def _is_blank_line(row: List[str], expected_cols: int) -> bool:
        # Una línea vacía llega como [] y una con solo espacios como ["  "].
        # Filas de celdas vacías explícitas ("","") son datos.
        if not row:
            return True
        return expected_cols > 1 and len(row) == 1 and not row[0].strip()

    @staticmethod
    def detect_delimiter(header_line: str) -> str:
        # Contar ocurrencias y elegir el ganador
        delimiter = max(config.DELIMITERS, key=lambda d: header_line.count(d))
        if header_line.count(delimiter) == 0:
            delimiter = ','
        return delimiter

    @staticmethod
    def _normalize_row(row: List[str], expected_cols: int) -> List[str]:
        current_cols = len(row)

        # CASO A: Fila perfecta
        if current_cols == expected_cols:
            return row

        # CASO B: Faltan columnas (rellenar)
        if current_cols < expected_cols:
            return row + [""] * (expected_cols - current_cols)

        # CASO C: Sobran columnas. Solo se recortan si están vacías;
        # si traen datos la fila queda irregular y el modelo la rechaza.
        if not any(cell.strip() for cell in row[expected_cols:]):
            return row[:expected_cols]
        return row

    # =========================================================================
    #  ESCRITURA
    # =========================================================================
    @staticmethod
    def encode(header: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
        buf = io.StringIO()
        writer = csv.writer(buf, delimiter=config.EXPORT_DELIMITER,
                            quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(header)
        writer.writerows(rows)
        return buf.getvalue()

    @staticmethod
    def write_csv(path: str, header: Sequence[str], rows: Iterable[Sequence[str]]) -> None:
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(CSVService.encode(header, rows))
        except OSError as e:
            raise CSVServiceError(f"No se pudo guardar el CSV: {e}") from e

    @staticmethod
    def write_excel(path: str, header: Sequence[str], rows: Sequence[Sequence[str]],
                    numeric_columns: Iterable[str] = (), figure=None) -> None:
        df = pd.DataFrame([list(r) for r in rows], columns=list(header), dtype=object)
        numeric = set(numeric_columns)
        for idx, name in enumerate(header):
            if name in numeric:
                df.iloc[:, idx] = [parse_number(v) for v in df.iloc[:, idx]]

        sheet_name = config.EXCEL_SHEET_NAME
        try:
            with pd.ExcelWriter(path, engine='openpyxl') as writer:
                df.to_excel(writer, sheet_name=sheet_name, index=False)
                sheet = writer.sheets[sheet_name]
                # openpyxl toma como fórmula todo texto que empieza con '='
                for row in sheet.iter_rows():
                    for cell in row:
                        if isinstance(cell.value, str) and cell.value.startswith("="):
                            cell.data_type = "s"
                for column in sheet.columns:
                    column = [cell for cell in column]
                    max_length = max((len(str(c.value)) for c in column if c.value is not None), default=0)
                    sheet.column_dimensions[column[0].column_letter].width = max_length + 2

            if figure is not None:
                wb = openpyxl.load_workbook(path)
                ws = wb[sheet_name]
                row_idx = len(df) + 4
                buf = io.BytesIO()
                figure.savefig(buf, format='png', dpi=config.CHART_DPI, bbox_inches='tight')
                buf.seek(0)
                img = ExcelImage(buf)
                img.anchor = f'B{row_idx}'
                ws.add_image(img)
                ws[f'B{row_idx - 1}'] = config.EXCEL_CHART_TITLE
                ws[f'B{row_idx - 1}'].font = openpyxl.styles.Font(bold=True)
                wb.save(path)
        except OSError as e:
            raise CSVServiceError(f"No se pudo guardar el Excel: {e}") from e
