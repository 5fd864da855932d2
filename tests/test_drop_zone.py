import pytest

pytest.importorskip("tkinterdnd2")

from ui.drop_zone import parse_drop_data


def test_single_path():
    assert parse_drop_data("/tmp/data.csv") == ["/tmp/data.csv"]


def test_braced_path_with_spaces():
    assert parse_drop_data("{/tmp/mis datos.csv}") == ["/tmp/mis datos.csv"]


def test_several_paths_keep_order():
    data = "{C:/Users/ana/hoja 1.csv} C:/Users/ana/otra.csv"
    assert parse_drop_data(data) == ["C:/Users/ana/hoja 1.csv", "C:/Users/ana/otra.csv"]


@pytest.mark.parametrize("data", ["", "   ", None])
def test_empty_drop(data):
    assert parse_drop_data(data) == []
