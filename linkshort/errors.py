"""Exceptions raised by the link shortener service."""


class LinkShortenerError(Exception):
    """Base class for link shortener errors."""


class ValidationError(LinkShortenerError, ValueError):
    """Malformed long URL or custom alias, rejected before any store access."""


class ConflictError(LinkShortenerError, ValueError):
    """The requested or generated short code is already in use."""

    def __init__(self, short_code: str, message: str = None):
        self.short_code = short_code
        super().__init__(
            message
            or f'Short code "{short_code}" is already in use. Please choose another alias.'
        )


class NotFoundError(LinkShortenerError, LookupError):
    """No link exists for the given short code."""

    def __init__(self, short_code: str, message: str = None):
        self.short_code = short_code
        super().__init__(message or f'Short link "{short_code}" not found.')
