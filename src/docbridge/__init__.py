"""docbridge: translate a documentation tree into a mirrored target tree."""

__version__ = "0.1.0"
