from __future__ import annotations


class OverviewError(Exception):
    """Base error for the overview server."""


class ValidationError(OverviewError):
    """Raised when user input is invalid."""


class AccessDeniedError(OverviewError):
    """Raised when an operation tries to access data outside allowed scope."""


class ExternalServiceError(OverviewError):
    """Raised when an external service (GitHub/Gemini) fails."""


class NotFoundError(OverviewError):
    """Raised when a requested resource is not found."""


class EmptyInputError(OverviewError):
    """Raised when aggregation produced no readable files."""
