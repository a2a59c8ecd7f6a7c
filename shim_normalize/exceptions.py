"""Custom exceptions for the mapping framework."""


class MappingError(Exception):
    """Base exception for all mapping errors."""

    def __init__(self, message: str, provider: str | None = None, path: str | None = None):
        self.message = message
        self.provider = provider
        self.path = path
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert exception to a diagnostic record."""
        return {
            "error": {
                "code": self.__class__.__name__.replace("Error", "").lower(),
                "message": self.message,
                "provider": self.provider,
                "path": self.path,
            }
        }


class RecordError(MappingError):
    """Errors that invalidate a single raw record but not the batch."""


class MissingRequiredFieldError(RecordError):
    """A required field is absent (or JSON null)."""


class TypeMismatchError(RecordError):
    """A field is present but cannot be coerced to the requested type."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        path: str | None = None,
        expected: str | None = None,
    ):
        super().__init__(message, provider, path)
        self.expected = expected


class UnsupportedUnitError(RecordError):
    """A declared unit code is not one the provider is known to send."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        path: str | None = None,
        unit_code: object = None,
    ):
        super().__init__(message, provider, path)
        self.unit_code = unit_code


class InvalidTimestampError(RecordError):
    """A timestamp cannot be resolved to an offset-aware time frame."""


class MappingConfigurationError(MappingError):
    """The mapping rules themselves are incomplete (always raised)."""
