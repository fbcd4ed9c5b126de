class MarkpressError(Exception):
    """Base exception for markpress errors."""

    pass


class RenderError(MarkpressError):
    """Raised when a document cannot be read or converted."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class SlugValidationError(MarkpressError):
    """Raised after a pre-flight slug check found invalid documents."""

    def __init__(self, message: str, violations: list | None = None) -> None:
        super().__init__(message)
        self.violations = violations or []


class WordPressApiError(MarkpressError):
    """Raised when a WordPress create/update/delete call does not succeed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MarkpressAuthenticationError(WordPressApiError):
    """Raised when WordPress rejects the credentials (401/403)."""

    pass
