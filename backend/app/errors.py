"""Error taxonomy for request handlers.

Every error carries a short user-facing message and the HTTP status it maps
to. Handlers raise these; the handlers in ``api.errors`` turn them into
``{"error": message}`` responses. Internal detail (raw completions, causes)
stays in the server log.
"""


class AppError(Exception):
    """Base class for errors that map to an HTTP error response."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingParameterError(AppError):
    """A required request field is absent or empty."""

    status_code = 400


class InvalidParameterError(AppError):
    """A request field is present but not acceptable."""

    status_code = 400


class InvalidFileTypeError(AppError):
    """Uploaded file is not a PDF."""

    status_code = 400


class FileTooLargeError(AppError):
    """Uploaded file exceeds the configured size limit."""

    status_code = 400


class EmptyExtractedTextError(AppError):
    """The document yielded no text after trimming."""

    status_code = 400


class UnparsableCompletionError(AppError):
    """Completion text could not be parsed as JSON.

    ``raw`` holds the original completion for diagnostic logging only.
    """

    def __init__(self, message: str, raw: str | None = None) -> None:
        super().__init__(message)
        self.raw = raw


class EmptyCompletionError(UnparsableCompletionError):
    """Completion was empty or absent."""


class SchemaMismatchError(AppError):
    """Parsed completion does not match the expected structure."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class ProviderError(AppError):
    """Transport, auth or quota failure from an external collaborator."""


class TextExtractionError(ProviderError):
    """PDF bytes could not be read."""
