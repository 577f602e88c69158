"""VerseCue: live scripture detection for worship projection."""

__version__ = "0.1.0"
