from types import SimpleNamespace

import pytest

pytest.importorskip("tkinterdnd2")

from controllers.csv_controller import CSVController
from ui import main_window
from ui.main_window import MainWindow


@pytest.fixture
def window(tmp_path):
    path = tmp_path / "scores.csv"
    path.write_text("name,score\na,1\nb,2\n", encoding="utf-8")
    controller = CSVController()
    controller.load_csv(str(path))
    # Sin Tk: run_task ejecuta la acción directamente
    return SimpleNamespace(controller=controller, run_task=lambda description, func: func())


def test_delete_row_asks_before_deleting(window, monkeypatch):
    asked = []
    monkeypatch.setattr(main_window.messagebox, "askyesno",
                        lambda title, msg: asked.append(msg) or True)
    MainWindow.delete_row_action(window, 0)
    assert asked == ["¿Eliminar la fila 1?"]
    assert window.controller.get_rows() == [["b", "2"]]


def test_delete_row_cancelled_keeps_row(window, monkeypatch):
    monkeypatch.setattr(main_window.messagebox, "askyesno", lambda title, msg: False)
    MainWindow.delete_row_action(window, 1)
    assert window.controller.get_rows() == [["a", "1"], ["b", "2"]]
