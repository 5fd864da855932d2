import re
import tkinter as tk

from tkinterdnd2 import DND_FILES

IDLE_BG = "#e5e7eb"
ACTIVE_BG = "#d1d5db"
IDLE_TEXT = "Arrastre un archivo CSV aquí, o haga clic para seleccionarlo"
ACTIVE_TEXT = "Suelte el archivo CSV aquí ..."

# tkdnd entrega una lista Tcl: rutas con espacios van entre llaves
_DROP_ITEM_RE = re.compile(r"\{([^}]*)\}|(\S+)")


def parse_drop_data(data):
    return [braced or plain for braced, plain in _DROP_ITEM_RE.findall(data or "")]


class DropZone(tk.Label):
    """
    Zona para soltar archivos (requiere que la raíz sea TkinterDnD.Tk).
    on_file recibe la ruta del primer archivo soltado o elegido en el diálogo.
    """

    def __init__(self, parent, on_file=None, on_browse=None, *args, **kwargs):
        super().__init__(parent, text=IDLE_TEXT, relief="ridge", borderwidth=2, bg=IDLE_BG,
                         fg="#374151", font=("Arial", 11), pady=18, cursor="hand2", *args, **kwargs)
        self.on_file = on_file
        self.on_browse = on_browse
        self.bind("<Button-1>", lambda e: self.on_browse and self.on_browse())
        self.bind("<Enter>", lambda e: self.config(bg=ACTIVE_BG))
        self.bind("<Leave>", lambda e: self.config(bg=IDLE_BG))
        self.drop_target_register(DND_FILES)
        self.dnd_bind("<<DropEnter>>", self._on_drag_enter)
        self.dnd_bind("<<DropLeave>>", self._on_drag_leave)
        self.dnd_bind("<<Drop>>", self._on_drop)

    def _on_drag_enter(self, event):
        self.config(bg=ACTIVE_BG, text=ACTIVE_TEXT)
        return event.action

    def _on_drag_leave(self, event):
        self.config(bg=IDLE_BG, text=IDLE_TEXT)
        return event.action

    def _on_drop(self, event):
        self.config(bg=IDLE_BG, text=IDLE_TEXT)
        paths = parse_drop_data(event.data)
        if paths and self.on_file:
            self.on_file(paths[0])
        return event.action
