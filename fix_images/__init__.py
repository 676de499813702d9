"""Content-based image extension fixer."""

__version__ = '1.0.0'
