class DocbridgeError(Exception):
    """Base class for docbridge errors."""


class TranslationError(DocbridgeError):
    """The translation backend failed to return usable text."""


class PreflightError(DocbridgeError):
    """A run cannot start (missing API key, missing source root, ...)."""
