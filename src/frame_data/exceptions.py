from typing import Optional


class FrameDataError(Exception):
    """Base exception for frame data service."""


class ConfigurationError(FrameDataError):
    """Raised when configuration is missing or invalid."""


class ServiceNotInitializedError(FrameDataError):
    """Raised when the service is queried before data has been loaded."""


class ValidationError(FrameDataError):
    """Raised when input fails validation."""


class CatalogValidationError(ValidationError):
    """
    Raised when source rows cannot be imported.

    Carries the sheet name and 1-based row number of the offending row
    when they are known.
    """

    def __init__(self, message: str, sheet: Optional[str] = None, row: Optional[int] = None):
        self.sheet = sheet
        self.row = row
        if sheet is not None and row is not None:
            message = f"{message} (sheet '{sheet}', row {row})"
        elif sheet is not None:
            message = f"{message} (sheet '{sheet}')"
        super().__init__(message)


class InvalidQueryError(ValidationError):
    """Raised when a query is empty after normalization."""


class ConstraintViolationError(FrameDataError):
    """Raised when a table insert breaks a uniqueness or foreign key constraint."""


class UnknownCharacterError(FrameDataError):
    """Raised when a lookup names a character that is not in the catalog."""


class CatalogIntegrityError(FrameDataError):
    """Raised when catalog state contradicts itself (e.g. alias without its move)."""
