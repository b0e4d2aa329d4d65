"""
Core Exceptions
================

Custom exceptions for the application following clean architecture principles.

Every exception carries the HTTP status the API layer answers with, so
controllers can raise them directly and a single handler renders
``{"error": message}``.
"""

from typing import Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationException(ApplicationException):
    """Missing or invalid input; raised before any I/O."""

    status_code = 400


class InvalidStateException(ApplicationException):
    """The resource exists but is not in a state that allows the operation."""

    status_code = 400


class AuthenticationException(ApplicationException):
    """Credentials did not match."""

    status_code = 401


class ResourceNotFoundException(ApplicationException):
    """Exception when a requested resource is not found (or not owned)."""

    status_code = 404


class RepositoryException(ApplicationException):
    """Base exception for repository/data access errors."""


class ServiceException(ApplicationException):
    """Generic server-side failure reported to the client without detail."""


class ConfigurationException(ApplicationException):
    """Exception for configuration errors."""


class ExternalServiceException(ApplicationException):
    """Base exception for external service failures."""

    def __init__(
        self,
        service_name: str,
        message: str,
        details: Optional[dict] = None
    ):
        self.service_name = service_name
        super().__init__(f"{service_name}: {message}", details)


class LLMException(ExternalServiceException):
    """Exception for LLM API failures."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__("LLM Service", message, details)
