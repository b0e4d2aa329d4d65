"""
Core Module
============

Shared core utilities and abstractions used across the application.

This module contains framework-agnostic code that defines the fundamental
building blocks of the system.
"""

from src.core.exceptions import (
    ApplicationException,
    ValidationException,
    InvalidStateException,
    AuthenticationException,
    ResourceNotFoundException,
    RepositoryException,
    ServiceException,
    ConfigurationException,
    ExternalServiceException,
    LLMException,
)

__all__ = [
    "ApplicationException",
    "ValidationException",
    "InvalidStateException",
    "AuthenticationException",
    "ResourceNotFoundException",
    "RepositoryException",
    "ServiceException",
    "ConfigurationException",
    "ExternalServiceException",
    "LLMException",
]
