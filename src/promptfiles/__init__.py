"""Generate source files from a natural-language prompt."""

__version__ = "0.1.0"
