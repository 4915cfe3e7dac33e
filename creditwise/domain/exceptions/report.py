"""Report-related domain exceptions."""

from .base import DomainException


class ReportNotFoundException(DomainException):
    """Raised when a report cannot be found."""

    def __init__(self, report_id: str):
        super().__init__(
            message=f"Report not found: {report_id}",
            code="REPORT_NOT_FOUND",
        )
        self.report_id = report_id


class ReportAccessDeniedException(DomainException):
    """Raised when a user requests a report owned by someone else."""

    def __init__(self, report_id: str):
        super().__init__(
            message=f"Access denied to report: {report_id}",
            code="REPORT_ACCESS_DENIED",
        )
        self.report_id = report_id


class InvalidReportRequestException(DomainException):
    """Raised when a report request is invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_REPORT_REQUEST",
        )
