import zipfile

import openpyxl
import pytest
from matplotlib.figure import Figure

from services.csv_service import CSVService, CSVServiceError


def test_decode_simple_csv():
    data = CSVService.decode_text("name,score\na,1\nb,2\n")
    assert data.columns == ["name", "score"]
    assert data.rows == [["a", "1"], ["b", "2"]]
    assert data.delimiter == ","


def test_decode_empty_text_gives_empty_table():
    for text in ["", "   ", "\n\n"]:
        data = CSVService.decode_text(text)
        assert data.is_empty()
        assert data.rows == []


def test_decode_skips_blank_lines_and_trims_header():
    data = CSVService.decode_text("\n   \n name , score \n\na,1\n   \n")
    assert data.columns == ["name", "score"]
    assert data.rows == [["a", "1"]]


def test_decode_keeps_rows_of_empty_cells():
    data = CSVService.decode_text('"a","b"\n"1","2"\n"",""\n,\n')
    assert data.rows == [["1", "2"], ["", ""], ["", ""]]


def test_decode_single_column_keeps_quoted_empty_row():
    data = CSVService.decode_text('"v"\n"1"\n""\n')
    assert data.rows == [["1"], [""]]


def test_decode_field_larger_than_default_csv_limit():
    blob = "x" * 200_000
    data = CSVService.decode_text("name,blob\na," + blob + "\n")
    assert data.columns == ["name", "blob"]
    assert data.rows == [["a", blob]]


def test_decode_quoted_fields_with_delimiters_and_newlines():
    data = CSVService.decode_text('a,b\n"x, y","line1\nline2"\n')
    assert data.rows == [["x, y", "line1\nline2"]]


@pytest.mark.parametrize("delimiter", [";", "\t", "|"])
def test_decode_detects_delimiter(delimiter):
    text = delimiter.join(["a", "b", "c"]) + "\n" + delimiter.join(["1", "2", "3"]) + "\n"
    data = CSVService.decode_text(text)
    assert data.delimiter == delimiter
    assert data.rows == [["1", "2", "3"]]


def test_decode_single_column():
    data = CSVService.decode_text("value\n1\n2\n")
    assert data.columns == ["value"]
    assert data.rows == [["1"], ["2"]]


def test_decode_pads_short_rows():
    data = CSVService.decode_text("a,b,c\n1\n1,2\n")
    assert data.rows == [["1", "", ""], ["1", "2", ""]]


def test_decode_trims_empty_surplus_cells():
    data = CSVService.decode_text("a,b\n1,2,,\n")
    assert data.rows == [["1", "2"]]


def test_decode_keeps_long_rows_with_data():
    data = CSVService.decode_text("a,b\n1,2,3\n")
    assert data.rows == [["1", "2", "3"]]


def test_decode_bytes_with_bom():
    data = CSVService.decode_bytes("\ufeffnombre,valor\naño,3\n".encode("utf-8"))
    assert data.columns == ["nombre", "valor"]
    assert data.rows == [["año", "3"]]
    assert data.encoding == "utf-8-sig"


def test_decode_bytes_falls_back_to_latin1():
    data = CSVService.decode_bytes("ciudad,temp\nBogotá,18\n".encode("latin-1"))
    assert data.rows == [["Bogotá", "18"]]
    assert data.encoding == "latin-1"


def test_read_csv_missing_file(tmp_path):
    with pytest.raises(CSVServiceError):
        CSVService.read_csv(str(tmp_path / "missing.csv"))


def test_read_csv_empty_file(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_bytes(b"")
    assert CSVService.read_csv(str(path)).is_empty()


def test_encode_quotes_every_field():
    text = CSVService.encode(["name", "score"], [["a", "1"], ['say "hi"', ""]])
    assert text == '"name","score"\n"a","1"\n"say ""hi""",""\n'


def test_write_csv_then_read_back(tmp_path):
    path = tmp_path / "out.csv"
    header = ["name", "note"]
    rows = [["a", "x, y"], ["b", "multi\nline"], ["", ""]]
    CSVService.write_csv(str(path), header, rows)
    data = CSVService.read_csv(str(path))
    assert data.columns == header
    assert data.rows == rows


def test_write_excel_converts_numeric_columns(tmp_path):
    path = tmp_path / "out.xlsx"
    CSVService.write_excel(str(path), ["name", "score"], [["a", "1"], ["b", "2.5"]],
                           numeric_columns={"score"})
    ws = openpyxl.load_workbook(path)["Datos"]
    values = [[c.value for c in row] for row in ws.iter_rows()]
    assert values == [["name", "score"], ["a", 1], ["b", 2.5]]


def test_write_excel_embeds_figure(tmp_path):
    path = tmp_path / "chart.xlsx"
    fig = Figure(figsize=(2, 2))
    fig.add_subplot().plot([0, 1], [1, 2])
    CSVService.write_excel(str(path), ["x", "y"], [["a", "1"]], numeric_columns={"y"}, figure=fig)
    with zipfile.ZipFile(path) as zf:
        assert any(name.startswith("xl/media/") for name in zf.namelist())
    ws = openpyxl.load_workbook(path)["Datos"]
    assert ws["B4"].value == "Gráfica"


def test_write_excel_keeps_equals_text_as_string(tmp_path):
    path = tmp_path / "text.xlsx"
    CSVService.write_excel(str(path), ["name", "=calc"], [["a", "=1+1"], ["=HYPERLINK(\"x\")", "2"]])
    ws = openpyxl.load_workbook(path)["Datos"]
    for ref, value in [("B1", "=calc"), ("B2", "=1+1"), ("A3", "=HYPERLINK(\"x\")")]:
        assert ws[ref].value == value
        assert ws[ref].data_type == "s"


def test_write_excel_with_figure_keeps_equals_text_as_string(tmp_path):
    path = tmp_path / "text_chart.xlsx"
    fig = Figure(figsize=(2, 2))
    fig.add_subplot().plot([0, 1], [1, 2])
    CSVService.write_excel(str(path), ["x", "y"], [["=A1", "1"]], numeric_columns={"y"}, figure=fig)
    ws = openpyxl.load_workbook(path)["Datos"]
    assert ws["A2"].value == "=A1"
    assert ws["A2"].data_type == "s"
