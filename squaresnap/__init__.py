"""Square screen capture: select, preview and save square screenshots as numbered PNGs."""

__version__ = "1.0.0"