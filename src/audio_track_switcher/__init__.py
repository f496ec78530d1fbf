"""Audio track switcher: drive the external media worker and stream its progress."""

__version__ = "0.1.0"
