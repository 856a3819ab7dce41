"""Tk user interface: region overlay, preview dialog, settings dialog and main window."""

from __future__ import annotations

import logging
import os
import tkinter as tk
from pathlib import Path
from tkinter import filedialog, messagebox, ttk
from typing import Callable, Optional, Tuple

from PIL import Image, ImageGrab, ImageOps, ImageTk

from .files import FileManager
from .selection import RegionSelection, crop, dimension_label
from .settings import (
    APP_NAME,
    APP_VERSION,
    DEFAULT_WINDOW_SIZE,
    MIN_WINDOW_SIZE,
    PREVIEW_WINDOW_PADDING,
    default_save_path,
)
from .theme import ThemeManager

log = logging.getLogger(__name__)

DIM_OPACITY = 120
PREVIEW_MIN_SIZE = 300
SETTINGS_WIDTH = 400
SETTINGS_HEIGHT = 200


def square_size(width: int, height: int) -> int:
    """Return the side of the square a window of this size is shrunk to."""
    return min(width, height)


def preview_size(width: int, height: int, padding: int = PREVIEW_WINDOW_PADDING) -> Tuple[int, int]:
    """Return the square area a preview image may fill inside a window."""
    side = square_size(width, height) - padding * 2
    return (side, side)


class RegionSelector:
    """Full-screen overlay on which the user drags out a square region."""

    def __init__(
        self,
        root: tk.Misc,
        on_selected: Callable[[Image.Image], None],
        on_cancelled: Callable[[], None],
    ) -> None:
        self._root = root
        self._on_selected = on_selected
        self._on_cancelled = on_cancelled
        self._selection = RegionSelection()
        self._screenshot: Optional[Image.Image] = None
        self._top = None
        self._canvas = None
        self._background = None
        self._region_photo = None

    def start(self) -> None:
        """Grab the screen and show the selection overlay over it."""
        try:
            shot = ImageGrab.grab(all_screens=True)
        except (OSError, ValueError) as exc:
            log.warning("Failed to grab the screen: %s", exc)
            return

        self._screenshot = shot.convert("RGB")
        width, height = self._screenshot.size
        black = Image.new("RGB", self._screenshot.size, "black")
        dimmed = Image.blend(self._screenshot, black, DIM_OPACITY / 255)
        self._selection.reset()
        self._close()

        top = tk.Toplevel(self._root)
        top.overrideredirect(True)
        top.attributes("-topmost", True)
        top.geometry(f"{width}x{height}+0+0")
        canvas = tk.Canvas(top, width=width, height=height, highlightthickness=0, cursor="crosshair")
        canvas.pack(fill="both", expand=True)
        canvas.bind("<ButtonPress-1>", self._on_press)
        canvas.bind("<B1-Motion>", self._on_motion)
        canvas.bind("<ButtonRelease-1>", self._on_release)
        top.bind("<Escape>", self._on_escape)

        self._background = ImageTk.PhotoImage(dimmed)
        canvas.create_image(0, 0, anchor="nw", image=self._background)
        self._top = top
        self._canvas = canvas
        top.focus_force()
        self._redraw()

    def _close(self) -> None:
        if self._top is not None:
            self._top.destroy()
        self._top = None
        self._canvas = None
        self._region_photo = None

    def _redraw(self) -> None:
        canvas = self._canvas
        if canvas is None or self._screenshot is None:
            return
        canvas.delete("selection")
        rect = self._selection.rect
        region = crop(self._screenshot, rect)
        if region is None:
            return

        self._region_photo = ImageTk.PhotoImage(region)
        canvas.create_image(rect.x, rect.y, anchor="nw", image=self._region_photo, tags="selection")
        canvas.create_rectangle(
            rect.x, rect.y, rect.x + rect.width, rect.y + rect.height,
            outline="white", width=2, tags="selection",
        )
        right, bottom = rect.bottom_right()
        text_id = canvas.create_text(
            right + 10, bottom + 20, anchor="sw", text=dimension_label(rect),
            fill="white", font=("TkDefaultFont", 10, "bold"), tags="selection",
        )
        box = canvas.bbox(text_id)
        if box and len(box) == 4:
            x1, y1, x2, y2 = box
            backdrop = canvas.create_rectangle(
                x1 - 5, y1 - 5, x2 + 5, y2 + 5,
                fill="#000000", stipple="gray75", outline="", tags="selection",
            )
            canvas.tag_lower(backdrop, text_id)

    def _on_press(self, event) -> None:
        self._selection.press(event.x, event.y)
        self._redraw()

    def _on_motion(self, event) -> None:
        if self._selection.move(event.x, event.y) is not None:
            self._redraw()

    def _on_release(self, event) -> None:
        rect = self._selection.release(event.x, event.y)
        if rect is not None and self._screenshot is not None:
            image = crop(self._screenshot, rect)
            self._close()
            self._on_selected(image)
            return
        self._redraw()

    def _on_escape(self, _event=None) -> None:
        self._close()
        self._on_cancelled()


class PreviewWindow:
    """Modal dialog that shows a captured image with Save and Cancel buttons."""

    def __init__(self, root: tk.Misc, image: Image.Image) -> None:
        self.image = image
        self.result: Optional[bool] = None
        self._photo = None
        self._size = (DEFAULT_WINDOW_SIZE, DEFAULT_WINDOW_SIZE)

        top = tk.Toplevel(root)
        top.title(f"{APP_NAME} - Preview")
        top.minsize(PREVIEW_MIN_SIZE, PREVIEW_MIN_SIZE)
        top.geometry(f"{DEFAULT_WINDOW_SIZE}x{DEFAULT_WINDOW_SIZE}")
        top.transient(root)
        self._top = top

        self._label = tk.Label(
            top, background="#222222", highlightbackground="#444444", highlightthickness=1,
        )
        self._label.pack(fill="both", expand=True, padx=8, pady=(8, 4))

        buttons = ttk.Frame(top)
        buttons.pack(fill="x", padx=8, pady=(4, 8))
        save = ttk.Button(buttons, text="Save", command=self._on_save, default="active")
        cancel = ttk.Button(buttons, text="Cancel", command=self._on_cancel)
        save.pack(side="left", expand=True, fill="x", padx=(0, 4))
        cancel.pack(side="left", expand=True, fill="x", padx=(4, 0))

        top.bind("<Control-s>", lambda _event: self._on_save())
        top.bind("<Return>", lambda _event: self._on_save())
        top.bind("<Escape>", lambda _event: self._on_cancel())
        top.bind("<Configure>", self._on_configure)
        top.protocol("WM_DELETE_WINDOW", top.destroy)
        save.focus_set()
        self._update_preview()

    def run(self) -> Optional[bool]:
        """Show the dialog until it closes.

        Returns True if saving was requested, False if cancelled, and None if
        the window was closed some other way.
        """
        self._top.grab_set()
        self._top.wait_window()
        return self.result

    def _on_configure(self, event) -> None:
        if event.widget is not self._top:
            return
        if event.width != event.height:
            side = square_size(event.width, event.height)
            self._top.geometry(f"{side}x{side}")
            return
        if (event.width, event.height) != self._size:
            self._size = (event.width, event.height)
            self._update_preview()

    def _update_preview(self) -> None:
        if self.image is None:
            return
        width, height = preview_size(*self._size)
        if width <= 0 or height <= 0:
            return
        scaled = ImageOps.contain(self.image, (width, height), Image.Resampling.LANCZOS)
        self._photo = ImageTk.PhotoImage(scaled)
        self._label.configure(image=self._photo)

    def _on_save(self) -> None:
        self.result = True
        self._top.destroy()

    def _on_cancel(self) -> None:
        self.result = False
        self._top.destroy()


class SettingsDialog:
    """Modal dialog for the save directory and the dark-mode switch."""

    def __init__(
        self,
        root: tk.Misc,
        save_path: str | os.PathLike[str],
        dark_mode: bool,
        on_save_path: Callable[[str], None],
        on_dark_mode: Callable[[bool], None],
    ) -> None:
        self._on_save_path = on_save_path
        self._on_dark_mode = on_dark_mode
        self.accepted = False

        top = tk.Toplevel(root)
        top.title(f"{APP_NAME} - Settings")
        top.geometry(f"{SETTINGS_WIDTH}x{SETTINGS_HEIGHT}")
        top.resizable(False, False)
        top.transient(root)
        self._top = top

        self._path_var = tk.StringVar(top, value=str(save_path))
        self._dark_var = tk.BooleanVar(top, value=bool(dark_mode))

        path_row = ttk.Frame(top)
        path_row.pack(fill="x", padx=10, pady=(10, 5))
        ttk.Label(path_row, text="Save Path:").pack(side="left")
        entry = ttk.Entry(path_row, textvariable=self._path_var)
        entry.pack(side="left", fill="x", expand=True, padx=5)
        ttk.Button(path_row, text="Browse...", command=self._on_browse).pack(side="left")

        ttk.Checkbutton(
            top, text="Dark Mode", variable=self._dark_var, command=self._on_dark_toggled,
        ).pack(anchor="w", padx=10, pady=5)

        buttons = ttk.Frame(top)
        buttons.pack(side="bottom", fill="x", padx=10, pady=10)
        ttk.Button(buttons, text="Cancel", command=self._on_cancel).pack(side="right")
        ttk.Button(buttons, text="OK", command=self._on_ok, default="active").pack(side="right", padx=5)

        top.bind("<Return>", lambda _event: self._on_ok())
        top.bind("<Escape>", lambda _event: self._on_cancel())
        top.protocol("WM_DELETE_WINDOW", self._on_cancel)

    def run(self) -> bool:
        """Show the dialog until it closes; return True if it was confirmed."""
        self._top.grab_set()
        self._top.wait_window()
        return self.accepted

    def _on_browse(self) -> None:
        current = self._path_var.get()
        chosen = filedialog.askdirectory(
            parent=self._top,
            title="Select Save Directory",
            initialdir=current or str(default_save_path()),
        )
        if chosen:
            self._path_var.set(chosen)
            self._on_save_path(chosen)

    def _on_ok(self) -> None:
        self._on_save_path(self._path_var.get())
        self.accepted = True
        self._top.destroy()

    def _on_cancel(self) -> None:
        self._top.destroy()

    def _on_dark_toggled(self) -> None:
        self._on_dark_mode(bool(self._dark_var.get()))


class MainWindow:
    """The square main window: capture button, menus and a status line."""

    def __init__(self, root: tk.Misc, file_manager: FileManager, theme_manager: ThemeManager) -> None:
        self.root = root
        self.file_manager = file_manager
        self.theme_manager = theme_manager
        self.current_image: Optional[Image.Image] = None
        self.status = ""

        root.title(APP_NAME)
        root.minsize(MIN_WINDOW_SIZE, MIN_WINDOW_SIZE)
        root.geometry(f"{DEFAULT_WINDOW_SIZE}x{DEFAULT_WINDOW_SIZE}")

        self._build_menu()
        self._build_body()
        self._selector = RegionSelector(root, self.on_region_selected, self.on_selection_cancelled)

        root.bind_all("<Control-n>", lambda _event: self.capture())
        root.bind_all("<Control-p>", lambda _event: self.open_settings())
        root.bind_all("<Control-q>", lambda _event: root.destroy())
        root.bind("<Configure>", self._on_configure)
        self.set_status("Ready")

    def _build_menu(self) -> None:
        menubar = tk.Menu(self.root)
        file_menu = tk.Menu(menubar, tearoff=False)
        file_menu.add_command(label="Capture", underline=0, accelerator="Ctrl+N", command=self.capture)
        file_menu.add_separator()
        file_menu.add_command(label="Settings", underline=0, accelerator="Ctrl+P", command=self.open_settings)
        file_menu.add_separator()
        file_menu.add_command(label="Exit", underline=1, accelerator="Ctrl+Q", command=self.root.destroy)
        menubar.add_cascade(label="File", underline=0, menu=file_menu)

        help_menu = tk.Menu(menubar, tearoff=False)
        help_menu.add_command(label="About", underline=0, command=self._show_about)
        menubar.add_cascade(label="Help", underline=0, menu=help_menu)
        self.root.config(menu=menubar)

    def _build_body(self) -> None:
        body = ttk.Frame(self.root)
        body.pack(fill="both", expand=True)
        button = tk.Button(
            body, text="Take Screenshot", font=("TkDefaultFont", 16, "bold"),
            height=2, command=self.capture,
        )
        button.place(relx=0.5, rely=0.5, anchor="center")
        self._status_label = ttk.Label(self.root, anchor="w", relief="sunken")
        self._status_label.pack(side="bottom", fill="x")

    def _show_about(self) -> None:
        messagebox.showinfo(
            f"About {APP_NAME}",
            f"{APP_NAME} {APP_VERSION}\n\n{APP_NAME} is a square screen capture tool for Linux.",
            parent=self.root,
        )

    def _show_saved_image(self, path: Path) -> None:
        """Open a saved image in a simple viewer window."""
        try:
            with Image.open(path) as loaded:
                image = loaded.copy()
        except (OSError, ValueError) as exc:
            log.warning("Failed to open image %s: %s", path, exc)
            return
        top = tk.Toplevel(self.root)
        top.title(path.name)
        photo = ImageTk.PhotoImage(image)
        label = tk.Label(top, image=photo)
        label.image = photo
        label.pack(fill="both", expand=True)
        top.bind("<Escape>", lambda _event: top.destroy())

    def _on_configure(self, event) -> None:
        if event.widget is not self.root:
            return
        if event.width != event.height:
            side = square_size(event.width, event.height)
            self.root.geometry(f"{side}x{side}")

    def capture(self) -> None:
        """Start selecting a square region of the screen."""
        self.set_status("Select a square region...")
        self._selector.start()

    def on_region_selected(self, image: Optional[Image.Image]) -> None:
        """Show a captured image for review, then save or discard it."""
        if image is None:
            self.set_status("Capture failed")
            return
        self.current_image = image
        outcome = PreviewWindow(self.root, image).run()
        if outcome is True:
            self.save_current()
        elif outcome is False:
            self.cancel_current()

    def on_selection_cancelled(self) -> None:
        self.set_status("Capture cancelled")

    def save_current(self) -> Optional[Path]:
        """Save the current image; return its path, or None if nothing was saved."""
        if self.current_image is None:
            self.set_status("No image to save")
            return None
        try:
            saved = self.file_manager.save_image(self.current_image)
        except (OSError, ValueError) as exc:
            log.warning("Failed to save image: %s", exc)
            self.set_status("Failed to save image")
            return None

        self.set_status(f"Image saved to: {saved.name}")
        if messagebox.askyesno(
            "Open Image",
            "Image saved successfully. Would you like to open it?",
            parent=self.root,
        ):
            self._show_saved_image(Path(saved))
        return saved

    def cancel_current(self) -> None:
        """Discard the current image."""
        self.current_image = None
        self.set_status("Ready")

    def open_settings(self) -> bool:
        """Show the settings dialog; return True if it was confirmed."""
        dialog = SettingsDialog(
            self.root,
            self.file_manager.save_path,
            self.theme_manager.dark_mode,
            self.on_save_path_changed,
            self.on_dark_mode_changed,
        )
        return dialog.run()

    def on_save_path_changed(self, path: str | os.PathLike[str]) -> None:
        if path and str(path):
            self.file_manager.save_path = path
            self.set_status("Save path updated")

    def on_dark_mode_changed(self, dark_mode: bool) -> None:
        self.theme_manager.set_dark_mode(dark_mode)

    def set_status(self, message: str = "") -> None:
        """Show ``message`` in the status line."""
        self.status = message
        self._status_label.configure(text=message)