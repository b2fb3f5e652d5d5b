"""Custom exception types for bibfixer operations."""


class BibfixerError(Exception):
    """Base exception for all bibfixer operations."""


class InvalidBibliographyError(BibfixerError):
    """Raised when a bibliography file cannot be parsed back."""
