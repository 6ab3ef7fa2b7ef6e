"""Custom exception hierarchy for puzzle conversion."""


class CrosswordConversionError(Exception):
    """Base exception for conversion failures."""


class MalformedInputError(CrosswordConversionError):
    """Raised when a source document lacks required structure."""


class MalformedClueError(MalformedInputError):
    """Raised when a clue has no usable text variant or direction."""


class DateFormatError(MalformedInputError):
    """Raised when a publication date is not an ISO ``YYYY-MM-DD`` string."""


class SourceFetchError(CrosswordConversionError):
    """Raised when an upstream puzzle service cannot be reached or errors."""


class StoreError(CrosswordConversionError):
    """Raised when a stored IPUZ document cannot be read back."""
