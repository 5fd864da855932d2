class CSVData:
    """
    Resultado de decodificar un archivo CSV:
      - columns: lista de strings (encabezado)
      - rows: lista de listas de strings
      - delimiter / encoding: lo que se detectó al leer
    """
    def __init__(self, columns=None, rows=None, delimiter=",", encoding="utf-8"):
        self.columns = columns or []
        self.rows = rows or []
        self.delimiter = delimiter
        self.encoding = encoding

    def is_empty(self) -> bool:
        return not self.columns

    def __repr__(self):
        return f"CSVData(columns={len(self.columns)}, rows={len(self.rows)}, delimiter={self.delimiter!r})"
