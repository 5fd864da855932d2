from tkinter import ttk

class DropdownView(ttk.Frame):
    """
    Combobox readonly con etiqueta; on_select recibe (selected_value: str)
    """

    def __init__(self, parent, label="", on_select=None, placeholder="Seleccione...", *args, **kwargs):
        super().__init__(parent, *args, **kwargs)
        self.on_select = on_select
        self.placeholder = placeholder

        if label:
            ttk.Label(self, text=label).pack(side="left", padx=(6, 0))
        self._combobox = ttk.Combobox(self, state="readonly", font=("Arial", 11), width=22)
        self._combobox.pack(side="left", fill="x", expand=True, padx=6, pady=6)
        self._combobox.bind("<<ComboboxSelected>>", self._handle_select)
        self._combobox.set(self.placeholder)
        self._options = []

    def update_options(self, options, selected=None):
        options = list(options or [])
        self._options = options
        self._combobox["values"] = options
        if selected in options:
            self._combobox.set(selected)
        elif options:
            self._combobox.set(self.placeholder)
        else:
            self._combobox.set("Sin columnas")

    def _handle_select(self, event):
        val = self.get_selected()
        if val is not None and self.on_select:
            self.on_select(val)

    def get_selected(self):
        val = self._combobox.get()
        if val in self._options:
            return val
        return None
