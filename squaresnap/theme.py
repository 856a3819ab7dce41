"""Light and dark colour palettes and the persisted theme choice."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from .settings import DARK_MODE_KEY, DEFAULT_DARK_MODE, Settings

log = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


class ColorGroup(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DISABLED = "disabled"


class ColorRole(Enum):
    WINDOW = "window"
    WINDOW_TEXT = "window_text"
    BASE = "base"
    ALTERNATE_BASE = "alternate_base"
    TOOL_TIP_BASE = "tool_tip_base"
    TOOL_TIP_TEXT = "tool_tip_text"
    TEXT = "text"
    BUTTON = "button"
    BUTTON_TEXT = "button_text"
    LINK = "link"
    HIGHLIGHT = "highlight"
    HIGHLIGHTED_TEXT = "highlighted_text"
    LIGHT = "light"


Palette = Dict[Tuple[ColorGroup, ColorRole], RGB]

WHITE: RGB = (255, 255, 255)
BLACK: RGB = (0, 0, 0)


def _darker(color: RGB, factor: int = 200) -> RGB:
    """Scale a colour's brightness (HSV value) down by ``factor`` percent."""
    value = max(color)
    if value == 0:
        return color
    new_value = value * 100 // factor
    return tuple(round(channel * new_value / value) for channel in color)  # type: ignore[return-value]


def dark_palette() -> Palette:
    """Return the dark colour scheme."""
    dark = (45, 45, 45)
    dark_gray = (53, 53, 53)
    gray = (128, 128, 128)
    blue = (42, 130, 218)

    every_group = {
        ColorRole.WINDOW: dark,
        ColorRole.WINDOW_TEXT: WHITE,
        ColorRole.BASE: (18, 18, 18),
        ColorRole.ALTERNATE_BASE: dark_gray,
        ColorRole.TOOL_TIP_BASE: blue,
        ColorRole.TOOL_TIP_TEXT: WHITE,
        ColorRole.TEXT: WHITE,
        ColorRole.BUTTON: dark_gray,
        ColorRole.BUTTON_TEXT: WHITE,
        ColorRole.LINK: blue,
        ColorRole.HIGHLIGHT: blue,
        ColorRole.HIGHLIGHTED_TEXT: BLACK,
    }
    palette: Palette = {
        (group, role): color for group in ColorGroup for role, color in every_group.items()
    }
    palette[ColorGroup.ACTIVE, ColorRole.BUTTON] = _darker(dark_gray)
    palette[ColorGroup.DISABLED, ColorRole.BUTTON_TEXT] = gray
    palette[ColorGroup.DISABLED, ColorRole.WINDOW_TEXT] = gray
    palette[ColorGroup.DISABLED, ColorRole.TEXT] = gray
    palette[ColorGroup.DISABLED, ColorRole.LIGHT] = dark_gray
    return palette


def light_palette() -> Palette:
    """Return the light scheme: no overrides, the toolkit's defaults apply."""
    return {}


class ThemeManager:
    """Holds the dark/light choice, persists it and hands palettes to ``apply``."""

    def __init__(
        self,
        settings: Settings,
        apply: Optional[Callable[[Palette], None]] = None,
    ) -> None:
        self._settings = settings
        self._apply = apply
        self._dark_mode = bool(settings.get(DARK_MODE_KEY, DEFAULT_DARK_MODE))
        self.apply_theme()

    @property
    def dark_mode(self) -> bool:
        """Whether the dark theme is selected."""
        return self._dark_mode

    def apply_theme(self) -> Palette:
        """Build the palette for the current choice, pass it to ``apply`` and return it."""
        palette = dark_palette() if self._dark_mode else light_palette()
        if self._apply is not None:
            self._apply(palette)
        return palette

    def toggle_theme(self) -> None:
        """Switch between dark and light, then apply and persist the choice."""
        self._dark_mode = not self._dark_mode
        self.apply_theme()
        self._save()

    def set_dark_mode(self, dark_mode: bool) -> None:
        """Select the dark or light theme; nothing happens if it is already selected."""
        dark_mode = bool(dark_mode)
        if dark_mode != self._dark_mode:
            self._dark_mode = dark_mode
            self.apply_theme()
            self._save()

    def _save(self) -> None:
        self._settings.set(DARK_MODE_KEY, self._dark_mode)