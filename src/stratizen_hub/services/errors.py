"""Domain exceptions raised by the service layer.

Idempotent outcomes (already completed, already voted) are not errors; they
are reported through the status enums on service result objects.
"""
from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class for failures the API layer translates into HTTP responses."""

    code = "service_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(ServiceError):
    """A referenced row does not exist."""

    code = "not_found"


class UnauthorizedError(ServiceError):
    """The requester is not allowed to perform the operation."""

    code = "unauthorized"


class AuthenticationError(ServiceError):
    """Credentials or session token were rejected."""

    code = "authentication_failed"


class InvalidOperationError(ServiceError):
    """The request is well-formed but breaks a domain rule."""

    code = "invalid_operation"


class BackendUnavailableError(ServiceError):
    """Database or object storage could not complete the request."""

    code = "backend_unavailable"

    def __init__(self, message: str = "The service is temporarily unavailable, please retry") -> None:
        super().__init__(message)
        logger.error("Backend unavailable: %s", message)
