"""Tkinter GUI for ferrydeck.

This is the main application file: it wires the deck session, the renderer
and the pointer controller into a desktop window. The major classes are:

  * ``TooltipOverlay``: the hover tooltip, a borderless ``Toplevel`` that
    fades in next to the cursor. It is the ``Overlay`` the
    ``InteractionController`` drives.
  * ``AddItemForm``: the sidebar form for a new container's dimensions and
    weight.
  * ``StatsPanel``: cargo totals and deck information for the current load.
  * ``App``: the top-level window, with the deck canvas on the left and the
    form, the stats and the Load/Export buttons on the right.

Every change of state goes through ``DeckSession`` (load, add, delete) and
ends in a full redraw through ``DeckView``: the snapshot, or the load error,
is rendered onto a ``PillowSurface`` and the new item bounds are handed to
the ``InteractionController``. The image is shrunk to fit the canvas if
needed, and the on-screen viewport lets pointer positions map back to
surface pixels. A failed reload after a successful add or delete is shown
as a load error, never as a failed add or delete.
"""

import logging
import time
import tkinter as tk
from tkinter import filedialog, messagebox, ttk

from PIL import Image, ImageTk

from ..config import Settings, load_settings
from ..engine.api import DeckApiClient
from ..engine.errors import CapacityError, DeckError
from ..engine.session import DeckSession
from ..engine.types import NewItem, Viewport
from ..logging_config import setup_logging
from .interaction import InteractionController
from .plan_io import save_plan_png
from .renderer import DeckRenderer
from .stats import LOADING_TEXT, stats_text
from .surface import PillowSurface
from .view import DeckView

logger = logging.getLogger(__name__)

# -- Visual constants --

CANVAS_BG = "#ffffff"
CANVAS_MARGIN = 10
TOOLTIP_BG = "#333333"
TOOLTIP_FG = "#ffffff"
FADE_STEPS = 5
FADE_STEP_MS = 20


# ---------------------------------------------------------------------------
# Tooltip overlay
# ---------------------------------------------------------------------------


class TooltipOverlay:
    """Hover tooltip positioned relative to a widget's top-left corner."""

    def __init__(self, widget):
        self.widget = widget
        self._tip_window = None
        self._fading_window = None

    def _screen_pos(self, position):
        x = self.widget.winfo_rootx() + int(position[0])
        y = self.widget.winfo_rooty() + int(position[1])
        return x, y

    def create(self, content, position):
        self.destroy()
        # Only one tooltip may exist, fading or not.
        self._drop_fading()
        x, y = self._screen_pos(position)
        tw = tk.Toplevel(self.widget)
        tw.wm_overrideredirect(True)
        tw.wm_geometry(f"+{x}+{y}")
        self._set_alpha(tw, 0.0)
        label = tk.Label(
            tw,
            text=content,
            justify=tk.LEFT,
            background=TOOLTIP_BG,
            foreground=TOOLTIP_FG,
            relief="solid",
            borderwidth=1,
            padx=6,
            pady=4,
        )
        label.pack()
        self._tip_window = tw
        self._fade(tw, 1)

    def reposition(self, position):
        if self._tip_window is None:
            return
        x, y = self._screen_pos(position)
        self._tip_window.wm_geometry(f"+{x}+{y}")

    def destroy(self):
        tw = self._tip_window
        if tw is None:
            return
        self._tip_window = None
        self._drop_fading()
        self._fading_window = tw
        self._fade(tw, -1)

    def _drop_fading(self):
        if self._fading_window is not None:
            self._fading_window.destroy()
            self._fading_window = None

    def _fade(self, tw, direction, step=0):
        if not tw.winfo_exists():
            return
        step += 1
        if direction > 0:
            self._set_alpha(tw, step / FADE_STEPS)
        else:
            self._set_alpha(tw, 1.0 - step / FADE_STEPS)
        if step < FADE_STEPS:
            tw.after(FADE_STEP_MS, self._fade, tw, direction, step)
        elif direction < 0 and tw is self._fading_window:
            self._drop_fading()

    @staticmethod
    def _set_alpha(tw, alpha):
        try:
            tw.wm_attributes("-alpha", alpha)
        except tk.TclError:
            # Window managers without compositing cannot fade.
            pass


# ---------------------------------------------------------------------------
# Sidebar panels
# ---------------------------------------------------------------------------


class AddItemForm(ttk.Frame):
    """Sidebar form for adding a container."""

    def __init__(self, parent, on_submit):
        super().__init__(parent, padding=10)
        self.on_submit = on_submit

        self.width_var = tk.StringVar(value="2.5")
        self.height_var = tk.StringVar(value="2.6")
        self.length_var = tk.StringVar(value="6.0")
        self.weight_var = tk.StringVar(value="10.0")
        self._build()

    def _build(self):
        ttk.Label(self, text="Add container", font=("", 11, "bold")).grid(
            row=0, column=0, columnspan=2, pady=(0, 4), sticky="w"
        )
        row = 1
        row = self._field(row, "Width (m):", self.width_var)
        row = self._field(row, "Height (m):", self.height_var)
        row = self._field(row, "Length (m):", self.length_var)
        row = self._field(row, "Weight (t):", self.weight_var)
        btn = ttk.Button(self, text="Add", command=self._submit)
        btn.grid(row=row, column=0, columnspan=2, sticky="ew", pady=(8, 0))

    def _field(self, row, label, var):
        ttk.Label(self, text=label).grid(row=row, column=0, sticky="w", pady=2)
        entry = ttk.Entry(self, textvariable=var, width=10)
        entry.grid(row=row, column=1, sticky="w", pady=2, padx=(5, 0))
        return row + 1

    def get_item(self):
        """Return the form as a ``NewItem``; raises ValueError on bad input."""
        values = []
        for name, var in (
            ("width", self.width_var),
            ("height", self.height_var),
            ("length", self.length_var),
            ("weight", self.weight_var),
        ):
            try:
                value = float(var.get().strip().replace(",", "."))
            except ValueError:
                raise ValueError(f"Invalid {name}: {var.get()!r}") from None
            if value <= 0:
                raise ValueError(f"{name.capitalize()} must be positive")
            values.append(value)
        width, height, length, weight = values
        return NewItem(
            width=width, height=height, length=length, weight=weight
        )

    def _submit(self):
        self.on_submit()


class StatsPanel(ttk.Frame):
    """Cargo totals and deck information."""

    def __init__(self, parent):
        super().__init__(parent, padding=10)
        self._label = ttk.Label(self, text="", justify=tk.LEFT)
        self._label.pack(anchor="nw")

    def show_loading(self):
        self._label.config(text=LOADING_TEXT)

    def show(self, snapshot):
        self._label.config(text=stats_text(snapshot))


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


class App:
    def __init__(self, settings=None):
        self.settings = settings or Settings.from_env()

        self.root = tk.Tk()
        self.root.title("ferrydeck")
        self.root.geometry("1100x750")
        self.root.resizable(True, True)

        style = ttk.Style()
        style.theme_use("clam")

        self.canvas = tk.Canvas(self.root, bg=CANVAS_BG, highlightthickness=0)
        self.canvas.pack(
            side=tk.LEFT, fill=tk.BOTH, expand=True, padx=5, pady=5
        )

        self.right_panel = ttk.Frame(self.root)
        self.right_panel.pack(side=tk.RIGHT, fill=tk.Y, pady=5, padx=(0, 5))

        btn_frame = ttk.Frame(self.right_panel, padding=10)
        btn_frame.pack(side=tk.TOP, fill=tk.X)
        btn_frame.columnconfigure(0, weight=1)
        btn_frame.columnconfigure(1, weight=1)
        ttk.Button(
            btn_frame, text="Load / Optimize", command=self._on_load
        ).grid(row=0, column=0, sticky="ew", padx=(0, 2))
        ttk.Button(btn_frame, text="Export", command=self._on_export).grid(
            row=0, column=1, sticky="ew", padx=(2, 0)
        )

        self.form = AddItemForm(self.right_panel, on_submit=self._on_add_item)
        self.form.pack(side=tk.TOP, fill=tk.X)
        ttk.Separator(self.right_panel, orient="horizontal").pack(
            side=tk.TOP, fill=tk.X, pady=8
        )
        self.stats = StatsPanel(self.right_panel)
        self.stats.pack(side=tk.TOP, fill=tk.BOTH, expand=True)

        self.surface = PillowSurface()
        self.session = DeckSession(
            DeckApiClient(self.settings.api_config()),
            on_snapshot=self._on_snapshot,
            on_load_error=self._on_load_error,
        )
        self.controller = InteractionController(
            TooltipOverlay(self.canvas),
            confirm=lambda msg: messagebox.askyesno("Delete", msg),
            on_delete=self.session.delete_item,
            notify=lambda msg: messagebox.showerror("Error", msg),
            set_cursor=lambda cursor: self.canvas.config(cursor=cursor),
        )
        self.view = DeckView(DeckRenderer(self.surface), self.controller)

        self._photo = None  # prevent GC

        self.canvas.bind("<Configure>", self._on_canvas_configure)
        self.canvas.bind("<Motion>", self._on_motion)
        self.canvas.bind("<Leave>", self._on_leave)
        self.canvas.bind("<Button-1>", self._on_click)

        self.root.after(50, self._on_load)

    # -- rendering --

    def _on_snapshot(self, snapshot):
        self.view.show(snapshot)
        self.stats.show(snapshot)
        self._display()

    def _on_load_error(self, error):
        self.view.show_load_error(str(error))
        self.stats.show(None)
        self._display()
        messagebox.showerror("Load Error", str(error))

    def _display(self):
        """Show the surface on the canvas, shrunk to fit if necessary."""
        cw = self.canvas.winfo_width()
        ch = self.canvas.winfo_height()
        if cw < 20 or ch < 20:
            return

        img = self.surface.flattened(CANVAS_BG)
        w, h = img.size
        fit = min(
            1.0,
            (cw - 2 * CANVAS_MARGIN) / w,
            (ch - 2 * CANVAS_MARGIN) / h,
        )
        if fit <= 0:
            return
        disp_w = max(1, int(w * fit))
        disp_h = max(1, int(h * fit))
        if (disp_w, disp_h) != (w, h):
            img = img.resize((disp_w, disp_h), Image.Resampling.LANCZOS)

        self._photo = ImageTk.PhotoImage(img)
        self.canvas.delete("all")
        left = CANVAS_MARGIN
        top = CANVAS_MARGIN
        self.canvas.create_image(left, top, image=self._photo, anchor="nw")
        self.controller.viewport = Viewport(left, top, disp_w, disp_h)

    def _on_canvas_configure(self, _event):
        self._display()

    # -- pointer events --

    def _on_motion(self, event):
        self.controller.on_pointer_move(event.x, event.y)

    def _on_leave(self, _event):
        self.controller.on_pointer_leave()

    def _on_click(self, event):
        self.controller.on_click(event.x, event.y)

    # -- actions --

    def _on_load(self):
        self.controller.on_pointer_leave()
        self.stats.show_loading()
        self.root.update_idletasks()
        self.session.refresh()

    def _on_add_item(self):
        try:
            new_item = self.form.get_item()
        except ValueError as e:
            messagebox.showerror("Invalid input", str(e))
            return
        try:
            created = self.session.add_item(new_item)
        except CapacityError as e:
            messagebox.showwarning("No space", str(e))
            return
        except DeckError as e:
            logger.error("Adding item failed: %s", e)
            messagebox.showerror("Add Error", str(e))
            return
        messagebox.showinfo("Added", f"Container #{created.id} added.")

    def _on_export(self):
        snapshot = self.session.snapshot
        if snapshot is None or snapshot.deck is None:
            messagebox.showwarning("Export", "Nothing to export yet.")
            return
        path = filedialog.asksaveasfilename(
            defaultextension=".png",
            filetypes=[("PNG files", "*.png")],
            initialfile=f"deck_{time.strftime('%Y-%m-%d_%H-%M-%S')}.png",
        )
        if not path:
            return
        export_surface = PillowSurface()
        DeckRenderer(export_surface).render(snapshot)
        try:
            save_plan_png(export_surface.flattened(), snapshot, path)
        except OSError as e:
            messagebox.showerror("Export Error", str(e))
            return
        logger.info("Exported deck plan to %s", path)

    def run(self):
        self.root.mainloop()


def main(argv=None):
    settings = load_settings(argv)
    setup_logging(settings.log_level_value, settings.log_file)
    logger.info("Using optimizer API at %s", settings.api_base_url)
    App(settings).run()


if __name__ == "__main__":
    main()
