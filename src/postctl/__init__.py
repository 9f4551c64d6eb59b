"""postctl: check, query, and scaffold a dated Markdown post collection."""

__version__ = "0.3.0"
