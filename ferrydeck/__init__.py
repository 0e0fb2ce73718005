"""ferrydeck: ferry deck loading viewer and editor."""

__version__ = "0.1.0"
