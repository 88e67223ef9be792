"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """User input is malformed; blocks the current wizard step"""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class SubmissionError(DomainException):
    """Create-application call failed (transport, timeout or server error)"""

    pass


class UploadError(DomainException):
    """Attach-documents call failed; the user may retry"""

    def __init__(self, message: str, retryable: bool = True):
        super().__init__(message)
        self.message = message
        self.retryable = retryable
