"""Save, search and re-run frequently used shell commands."""

__version__ = "0.1.0"
