"""YamaCTRL: menu bar control for Yamaha Extended Control receivers."""

__version__ = "0.1.0"
