"""
Exceptions raised by filmtag.
"""


class FilmtagError(Exception):
    """Base class for all filmtag errors."""


class ExifToolError(FilmtagError, RuntimeError):
    """Raised when exiftool is missing or a call to it fails."""


class GearLookupError(FilmtagError, LookupError):
    """Raised when a camera, lens or film stock is not in the gear database."""


class GearConfigError(FilmtagError):
    """Raised when the gear file cannot be read or parsed."""


class UnsupportedFileError(FilmtagError, ValueError):
    """Raised for files that are not JPEGs."""


class NoFilesError(FilmtagError):
    """Raised when there is nothing to process."""
