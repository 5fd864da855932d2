import math
from tkinter import ttk

import matplotlib.pyplot as plt
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg

import config


class ChartView(ttk.Frame):
    """Gráfica de líneas de una sola serie, con grilla, leyenda y tooltip al pasar el mouse."""

    def __init__(self, parent, *args, **kwargs):
        super().__init__(parent, *args, **kwargs)
        self.fig, self.ax = plt.subplots(figsize=config.CHART_FIGSIZE, dpi=config.CHART_DPI)
        self.canvas = FigureCanvasTkAgg(self.fig, master=self)
        self.canvas.get_tk_widget().pack(fill="both", expand=True)
        self._labels = []
        self._annot = None
        self.canvas.mpl_connect("motion_notify_event", self._hover)
        self.show_message("Cargue un CSV para graficar")

    def _new_annotation(self):
        annot = self.ax.annotate("", xy=(0, 0), xytext=(10, 10), textcoords="offset points",
                                 bbox=dict(boxstyle="round", fc="w", alpha=0.9), arrowprops=dict(arrowstyle="->"))
        annot.set_visible(False)
        return annot

    def show_message(self, text):
        self.ax.clear()
        self._labels = []
        self._annot = None
        self.ax.set_xticks([])
        self.ax.set_yticks([])
        self.ax.text(0.5, 0.5, text, ha='center', va='center', transform=self.ax.transAxes)
        self.canvas.draw_idle()

    def plot(self, points, x_label, y_label):
        if not points:
            self.show_message("Sin datos")
            return
        self.ax.clear()
        # Eje x categórico: posición = orden de fila
        positions = list(range(len(points)))
        self._labels = [p.x for p in points]
        values = [p.y for p in points]
        self.ax.plot(positions, values, label=y_label, color="tab:blue", marker="o",
                     markersize=4, linewidth=1.5, picker=5)
        self.ax.grid(True, linestyle='--', alpha=0.5)
        self.ax.set_xlabel(x_label)
        self.ax.set_ylabel(y_label)
        self.ax.set_title(f"{y_label} vs {x_label}")

        step = max(1, math.ceil(len(positions) / config.CHART_MAX_XTICKS))
        ticks = positions[::step]
        self.ax.set_xticks(ticks)
        self.ax.set_xticklabels([self._labels[i] for i in ticks], rotation=45, ha="right", fontsize=8)
        self.ax.legend(loc='upper left', fontsize='small')
        self._annot = self._new_annotation()
        self.fig.tight_layout()
        self.canvas.draw_idle()

    def _hover(self, event):
        annot = self._annot
        if annot is None:
            return
        vis = annot.get_visible()
        if event.inaxes == self.ax:
            for line in self.ax.lines:
                cont, ind = line.contains(event)
                if cont:
                    x, y = line.get_data()
                    idx = ind["ind"][0]
                    annot.xy = (x[idx], y[idx])
                    annot.set_text(f"{self._labels[idx]}\n{line.get_label()}: {y[idx]:g}")
                    annot.set_visible(True)
                    self.canvas.draw_idle()
                    return
        if vis:
            annot.set_visible(False)
            self.canvas.draw_idle()

    def close(self):
        plt.close(self.fig)
