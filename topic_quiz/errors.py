class QuizError(Exception):
    """Base error carrying the HTTP status it is reported with."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(QuizError):
    status_code = 400


class ProviderError(QuizError):
    """The model provider failed or produced no content."""

    status_code = 502


class UpstreamError(QuizError):
    status_code = 502


class ParseError(QuizError):
    """Model output could not be coerced into a list of questions."""

    status_code = 502


class SessionStateError(Exception):
    """An action was requested that the session's current phase does not accept."""
