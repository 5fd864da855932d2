import tkinter as tk
from tkinter import ttk

ACTIONS_TEXT = "🗑️ Eliminar"


class TableView(ttk.Frame):
    """
    Grilla editable. Cada item del Treeview usa como iid el índice de la
    fila en el modelo, así el filtro de búsqueda no altera los índices.
      - on_edit(row_index, col_index, value)
      - on_delete(row_index)
    """

    def __init__(self, parent, on_edit=None, on_delete=None, *args, **kwargs):
        super().__init__(parent, *args, **kwargs)
        self.on_edit = on_edit
        self.on_delete = on_delete
        control_frame = ttk.Frame(self)
        control_frame.pack(fill="x", pady=(0, 5))
        ttk.Label(control_frame, text="Buscar:").pack(side="left", padx=(0, 5))
        self.search_var = tk.StringVar()
        self.search_entry = ttk.Entry(control_frame, textvariable=self.search_var, width=30)
        self.search_entry.pack(side="left", padx=(0, 10))
        self.search_entry.bind("<KeyRelease>", self._on_search)
        self.clear_search_btn = ttk.Button(control_frame, text="Limpiar", command=self._clear_search)
        self.clear_search_btn.pack(side="left")
        self.status_label = ttk.Label(control_frame, text="")
        self.status_label.pack(side="right")
        tree_frame = ttk.Frame(self)
        tree_frame.pack(fill="both", expand=True)
        self._tree = ttk.Treeview(tree_frame, show="headings", selectmode="browse")
        self._tree.pack(side="left", fill="both", expand=True)
        self._scroll_y = ttk.Scrollbar(tree_frame, orient="vertical", command=self._tree.yview)
        self._scroll_y.pack(side="right", fill="y")
        self._tree.configure(yscrollcommand=self._scroll_y.set)
        self._scroll_x = ttk.Scrollbar(self, orient="horizontal", command=self._tree.xview)
        self._scroll_x.pack(side="bottom", fill="x")
        self._tree.configure(xscrollcommand=self._scroll_x.set)
        self._tree.bind("<Double-1>", self._on_double_click)
        self._tree.bind("<ButtonRelease-1>", self._on_click)
        self._all_data = []
        self._current_columns = []
        self._editor = None

    # --- BÚSQUEDA ---
    def _on_search(self, event=None):
        self._display_data()

    def _clear_search(self):
        self.search_var.set("")
        self._display_data()

    def _visible_rows(self):
        search_term = self.search_var.get().lower()
        indexed = list(enumerate(self._all_data))
        if not search_term:
            return indexed
        return [(i, row) for i, row in indexed if any(search_term in str(cell).lower() for cell in row)]

    # --- DIBUJO ---
    def _display_data(self):
        self._close_editor(commit=False)
        y_pos = self._tree.yview()[0]
        self.clear()
        if not self._current_columns:
            self.status_label.config(text="")
            return
        col_ids = [f"c{i}" for i in range(len(self._current_columns))] + ["actions"]
        self._tree["columns"] = tuple(col_ids)
        for col_id, name in zip(col_ids, self._current_columns):
            self._tree.heading(col_id, text=name)
            self._tree.column(col_id, anchor="w", width=160)
        self._tree.heading("actions", text="Acciones")
        self._tree.column("actions", anchor="center", width=110, stretch=False)
        visible = self._visible_rows()
        for idx, row in visible:
            self._tree.insert("", "end", iid=str(idx), values=tuple(row) + (ACTIONS_TEXT,))
        self._tree.yview_moveto(y_pos)
        if len(visible) == len(self._all_data):
            self.status_label.config(text=f"Total: {len(self._all_data)} registros")
        else:
            self.status_label.config(text=f"Mostrando {len(visible)} de {len(self._all_data)} registros")

    def clear(self):
        for r in self._tree.get_children(): self._tree.delete(r)
        self._tree["columns"] = ()

    def update_table(self, columns, rows):
        self._current_columns = list(columns)
        self._all_data = [list(r) for r in rows]
        self._display_data()

    # --- EDICIÓN EN LÍNEA ---
    def _cell_at(self, event):
        if self._tree.identify("region", event.x, event.y) != "cell":
            return None, None
        item = self._tree.identify_row(event.y)
        col = self._tree.identify_column(event.x)
        if not item or not col:
            return None, None
        return item, int(col[1:]) - 1

    def _on_click(self, event):
        item, col_index = self._cell_at(event)
        if item is None or col_index != len(self._current_columns):
            return
        if self.on_delete:
            self.on_delete(int(item))

    def _on_double_click(self, event):
        item, col_index = self._cell_at(event)
        if item is None or not 0 <= col_index < len(self._current_columns):
            return
        self._open_editor(item, col_index)

    def _open_editor(self, item, col_index):
        self._close_editor(commit=False)
        bbox = self._tree.bbox(item, f"c{col_index}")
        if not bbox:
            return
        x, y, width, height = bbox
        row_index = int(item)
        entry = ttk.Entry(self._tree)
        entry.insert(0, self._all_data[row_index][col_index])
        entry.select_range(0, "end")
        entry.place(x=x, y=y, width=width, height=height)
        entry.focus_set()
        entry.bind("<Return>", lambda e: self._close_editor(commit=True))
        entry.bind("<FocusOut>", lambda e: self._close_editor(commit=True))
        entry.bind("<Escape>", lambda e: self._close_editor(commit=False))
        self._editor = (entry, row_index, col_index)

    def _close_editor(self, commit):
        if self._editor is None:
            return
        entry, row_index, col_index = self._editor
        self._editor = None
        value = entry.get()
        entry.destroy()
        if commit and self.on_edit and value != self._all_data[row_index][col_index]:
            self.on_edit(row_index, col_index, value)
