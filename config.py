# Constantes de la aplicación. No hay archivo de configuración: nada se persiste.

APP_TITLE = "CSV Editor Pro"
WINDOW_GEOMETRY = "1200x850"

EXPORT_FILENAME = "edited_data.csv"
EXCEL_EXPORT_FILENAME = "edited_data.xlsx"
EXCEL_SHEET_NAME = "Datos"
EXCEL_CHART_TITLE = "Gráfica"

# Orden de prueba al decodificar bytes
ENCODINGS = ['utf-8-sig', 'utf-8', 'latin-1', 'cp1252']
DELIMITERS = [',', ';', '\t', '|']
EXPORT_DELIMITER = ','

CHART_FIGSIZE = (8, 3.5)
CHART_DPI = 100
CHART_MAX_XTICKS = 20

LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
