import logging
import tkinter as tk
from tkinter import ttk, filedialog, messagebox

from tkinterdnd2 import TkinterDnD

import config
from controllers.csv_controller import CSVController
from models.table_model import TableModelError
from services.csv_service import CSVServiceError
from ui.chart_view import ChartView
from ui.drop_zone import DropZone
from ui.dropdown_view import DropdownView
from ui.table_view import TableView

logger = logging.getLogger(__name__)


class MainWindow:
    def __init__(self, controller: CSVController | None = None):
        self.controller = controller or CSVController()

        self.window = TkinterDnD.Tk()
        self.window.title(config.APP_TITLE)
        self.window.geometry(config.WINDOW_GEOMETRY)
        self.window.protocol("WM_DELETE_WINDOW", self.on_closing)

        self.toolbar = ttk.Frame(self.window, relief=tk.RAISED, borderwidth=1)
        self.toolbar.pack(side="top", fill="x")
        ttk.Button(self.toolbar, text="📂 Cargar CSV", command=self.load_csv_action).pack(side="left", padx=5, pady=5)
        ttk.Separator(self.toolbar, orient="vertical").pack(side="left", fill="y", padx=10, pady=5)
        self.btn_download = ttk.Button(self.toolbar, text="💾 Descargar CSV", command=self.download_csv_action)
        self.btn_download.pack(side="left", padx=5, pady=5)
        self.btn_excel = ttk.Button(self.toolbar, text="📊 Exportar Excel", command=self.export_excel_action)
        self.btn_excel.pack(side="left", padx=5, pady=5)

        self.status_frame = ttk.Frame(self.window, relief=tk.SUNKEN, padding=(5, 2))
        self.status_frame.pack(side="bottom", fill="x")
        self.lbl_status = ttk.Label(self.status_frame, text="Listo", anchor="w")
        self.lbl_status.pack(side="left", fill="x")

        self._setup_drop_zone()

        self.panes = ttk.PanedWindow(self.window, orient="vertical")
        self.panes.pack(fill="both", expand=True, padx=10, pady=(0, 5))
        self.tab_table = ttk.Frame(self.panes)
        self.panes.add(self.tab_table, weight=3)
        self._setup_table_view()
        self.tab_chart = ttk.Frame(self.panes)
        self.panes.add(self.tab_chart, weight=2)
        self._setup_chart_view()

        self.controller.subscribe(self.refresh)
        self.refresh()

    def run_task(self, description, func):
        self.window.config(cursor="watch")
        self.lbl_status.config(text=f"⏳ {description}...")
        self.window.update_idletasks()
        self.controller.last_warning = None
        try:
            func()
            warning = self.controller.last_warning
            self.lbl_status.config(text=f"⚠️ {warning}" if warning else "✅ Listo")
        except (TableModelError, CSVServiceError) as e:
            logger.warning("%s rechazado: %s", description, e)
            self.lbl_status.config(text=f"❌ {e}")
        except Exception as e:
            logger.exception("Error inesperado: %s", description)
            self.lbl_status.config(text="❌ Error")
            messagebox.showerror("Error", str(e))
        finally:
            self.window.config(cursor="")

    # --- VISTAS ---
    def _setup_drop_zone(self):
        self.drop_zone = DropZone(self.window, on_file=self.load_path, on_browse=self.load_csv_action)
        self.drop_zone.pack(fill="x", padx=10, pady=10)

    def _setup_table_view(self):
        self.table = TableView(
            self.tab_table,
            on_edit=lambda r, c, v: self.run_task("Editando celda", lambda: self.controller.edit_cell(r, c, v)),
            on_delete=self.delete_row_action,
        )
        self.table.pack(fill="both", expand=True, pady=(5, 0))
        actions = ttk.Frame(self.tab_table)
        actions.pack(fill="x", pady=5)
        self.btn_add_row = ttk.Button(actions, text="➕ Agregar Fila",
                                      command=lambda: self.run_task("Agregando fila", self.controller.add_row))
        self.btn_add_row.pack(side="left")

    def _setup_chart_view(self):
        ctrl = ttk.Frame(self.tab_chart)
        ctrl.pack(fill="x", padx=5, pady=5)
        self.dd_x = DropdownView(ctrl, label="Eje X:",
                                 on_select=lambda col: self.run_task("Cambiando eje X", lambda: self.controller.set_axis(x=col)))
        self.dd_x.pack(side="left")
        self.dd_y = DropdownView(ctrl, label="Eje Y:",
                                 on_select=lambda col: self.run_task("Cambiando eje Y", lambda: self.controller.set_axis(y=col)))
        self.dd_y.pack(side="left", padx=(15, 0))
        self.chart = ChartView(self.tab_chart)
        self.chart.pack(fill="both", expand=True)

    # --- REFRESCO ---
    def refresh(self):
        has_data = self.controller.has_data()
        self.table.update_table(self.controller.get_header(), self.controller.get_rows())
        state = "normal" if has_data else "disabled"
        for btn in (self.btn_add_row, self.btn_download, self.btn_excel):
            btn.config(state=state)
        self._refresh_chart()

    def _refresh_chart(self):
        x_options, y_options = self.controller.get_axis_options()
        axis = self.controller.model.axis
        self.dd_x.update_options(x_options, axis.x if axis else None)
        self.dd_y.update_options(y_options, axis.y if axis else None)

        if not self.controller.has_data():
            self.chart.show_message("Cargue un CSV para graficar")
            return
        result = self.controller.get_chart_data()
        if result is None:
            self.chart.show_message("Seleccione una columna numérica para el eje Y")
            return
        axis, points = result
        self.chart.plot(points, axis.x, axis.y)

    # --- ACCIONES ---
    def load_csv_action(self):
        path = filedialog.askopenfilename(filetypes=[("CSV", "*.csv"), ("Todos", "*.*")])
        if not path: return
        self.load_path(path)

    def load_path(self, path):
        self.run_task("Cargando archivo", lambda: self.controller.load_csv(path))

    def delete_row_action(self, row_index):
        if not messagebox.askyesno("Eliminar fila", f"¿Eliminar la fila {row_index + 1}?"):
            return
        self.run_task("Eliminando fila", lambda: self.controller.delete_row(row_index))

    def download_csv_action(self):
        path = filedialog.asksaveasfilename(initialfile=self.controller.default_export_name(),
                                            defaultextension=".csv", filetypes=[("CSV", "*.csv")])
        if not path: return
        self.run_task("Guardando CSV", lambda: self.controller.export_csv(path))

    def export_excel_action(self):
        path = filedialog.asksaveasfilename(initialfile=config.EXCEL_EXPORT_FILENAME,
                                            defaultextension=".xlsx", filetypes=[("Excel", "*.xlsx")])
        if not path: return
        figure = self.chart.fig if self.controller.get_chart_data() else None
        self.run_task("Generando Excel", lambda: self.controller.export_excel(path, figure))

    def on_closing(self):
        if messagebox.askokcancel("Salir", "¿Seguro que quieres salir?"):
            self.controller.unsubscribe(self.refresh)
            self.chart.close()
            self.window.destroy()

    def run(self): self.window.mainloop()
