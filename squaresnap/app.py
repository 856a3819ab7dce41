"""Command-line entry point that starts the capture window."""

from __future__ import annotations

import argparse
import sys
import tkinter as tk
from pathlib import Path
from tkinter import ttk
from typing import Callable, Optional, Sequence

from .files import FileManager
from .gui import MainWindow
from .settings import APP_NAME, APP_VERSION, Settings
from .theme import RGB, ColorGroup, ColorRole, Palette, ThemeManager


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse the command line."""
    parser = argparse.ArgumentParser(
        prog=APP_NAME.lower(),
        description="Capture square regions of the screen.",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        metavar="FILE",
        help="settings file to use instead of the per-user one",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    return parser.parse_args(argv)


def _hex(color: RGB) -> str:
    return "#{:02x}{:02x}{:02x}".format(*color)


def _palette_applier(root: tk.Misc) -> Callable[[Palette], None]:
    """Return a function that applies a palette to ``root`` and its ttk style."""
    style = ttk.Style(root)
    style.theme_use("clam")
    default_background = root.cget("background")
    default_style = {
        option: style.lookup(".", option)
        for option in ("background", "foreground", "fieldbackground", "selectbackground", "selectforeground")
    }
    default_button = {option: style.lookup("TButton", option) for option in ("background", "foreground")}

    def apply(palette: Palette) -> None:
        if not palette:
            root.tk_setPalette(default_background)
            style.configure(".", **default_style)
            style.configure("TButton", **default_button)
            return

        def color(role: ColorRole, group: ColorGroup = ColorGroup.INACTIVE) -> str:
            return _hex(palette[group, role])

        root.tk_setPalette(
            background=color(ColorRole.WINDOW),
            foreground=color(ColorRole.WINDOW_TEXT),
            activeBackground=color(ColorRole.BUTTON, ColorGroup.ACTIVE),
            activeForeground=color(ColorRole.BUTTON_TEXT),
            selectBackground=color(ColorRole.HIGHLIGHT),
            selectForeground=color(ColorRole.HIGHLIGHTED_TEXT),
            insertBackground=color(ColorRole.TEXT),
            highlightBackground=color(ColorRole.WINDOW),
            disabledForeground=color(ColorRole.TEXT, ColorGroup.DISABLED),
        )
        style.configure(
            ".",
            background=color(ColorRole.WINDOW),
            foreground=color(ColorRole.WINDOW_TEXT),
            fieldbackground=color(ColorRole.BASE),
            selectbackground=color(ColorRole.HIGHLIGHT),
            selectforeground=color(ColorRole.HIGHLIGHTED_TEXT),
        )
        style.configure(
            "TButton",
            background=color(ColorRole.BUTTON),
            foreground=color(ColorRole.BUTTON_TEXT),
        )
        style.map(
            "TButton",
            background=[("active", color(ColorRole.BUTTON, ColorGroup.ACTIVE))],
            foreground=[("disabled", color(ColorRole.BUTTON_TEXT, ColorGroup.DISABLED))],
        )

    return apply


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the application; return the process exit status."""
    args = parse_args(argv)
    settings = Settings(args.settings)
    try:
        root = tk.Tk(className=APP_NAME)
    except tk.TclError as exc:
        print(f"{APP_NAME}: failed to initialize application: {exc}", file=sys.stderr)
        return 1

    file_manager = FileManager(settings)
    theme_manager = ThemeManager(settings, apply=_palette_applier(root))
    MainWindow(root, file_manager, theme_manager)
    root.mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())