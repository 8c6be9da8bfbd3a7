"""Show numeric codes by blinking a single LED through a callback."""

__version__ = "0.1.0"
__all__ = ["code", "constants", "digits"]