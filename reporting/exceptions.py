"""Common exceptions for the report generator."""


class ReportError(RuntimeError):
    """Base error for report generation; carries the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class EmptyInputError(ReportError):
    """Raised when no export criteria were supplied at all."""

    status_code = 400

    def __init__(self, message: str = "Missing required fields"):
        super().__init__(message)


class EmptyResultError(ReportError):
    """Raised when filtering leaves no organization with a qualifying task."""

    status_code = 400

    def __init__(self, message: str = "No organizations with valid task criteria found"):
        super().__init__(message)


class SerializationError(ReportError):
    """Raised when the workbook cannot be written out."""

    pass
