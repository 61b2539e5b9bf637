"""
Custom Exception Classes for the Language Mode Switch service

This module defines custom exceptions for consistent error handling and
error responses. Every exception carries a machine-readable ``error_code``
that the exception handlers put into the JSON error envelope.
"""

import enum
from typing import Any

from fastapi import status


class ErrorCode(str, enum.Enum):
    """Machine-readable error codes returned to API clients."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"

    VALIDATION_FAILED = "VALIDATION_FAILED"
    AUTH_FAILED = "AUTH_FAILED"
    AUTH_PERMISSION_DENIED = "AUTH_PERMISSION_DENIED"

    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RESOURCE_PAGE_NOT_FOUND = "RESOURCE_PAGE_NOT_FOUND"

    DATABASE_ERROR = "DATABASE_ERROR"
    STORAGE_ERROR = "STORAGE_ERROR"
    CACHE_ERROR = "CACHE_ERROR"


class CMSError(Exception):
    """Base exception class for all service exceptions"""

    default_error_code = ErrorCode.UNKNOWN_ERROR

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
        error_code: ErrorCode | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.default_error_code
        super().__init__(self.message)


# ============================================================================
# Resource Not Found Exceptions
# ============================================================================


class ResourceNotFoundError(CMSError):
    """Base class for resource not found errors"""

    default_error_code = ErrorCode.RESOURCE_NOT_FOUND

    def __init__(self, resource_type: str, resource_id: Any | None = None):
        message = f"{resource_type} not found"
        if resource_id is not None:
            message = f"{resource_type} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class PageNotFoundError(ResourceNotFoundError):
    """Raised when a page translation record is not found"""

    default_error_code = ErrorCode.RESOURCE_PAGE_NOT_FOUND

    def __init__(self, page_id: Any | None = None, language_id: int | None = None):
        super().__init__(resource_type="Page", resource_id=page_id)
        if language_id is not None:
            self.message = f"Page with id '{page_id}' has no translation for language {language_id}"
            self.details["language_id"] = language_id
            self.args = (self.message,)


# ============================================================================
# Validation Exceptions
# ============================================================================


class ValidationError(CMSError):
    """Raised when input validation fails"""

    default_error_code = ErrorCode.VALIDATION_FAILED

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=error_details)


# ============================================================================
# Database & Cache Exceptions
# ============================================================================


class DatabaseError(CMSError):
    """Raised when a database operation fails"""

    default_error_code = ErrorCode.DATABASE_ERROR

    def __init__(self, message: str = "A database error occurred", operation: str | None = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, details=details)


class StorageError(DatabaseError):
    """Raised when a language mode query cannot be executed.

    Never swallowed by the resolver: the request fails instead of silently
    falling back to a mode that may be wrong.
    """

    default_error_code = ErrorCode.STORAGE_ERROR

    def __init__(self, message: str = "Language mode storage query failed", operation: str | None = None):
        super().__init__(message=message, operation=operation)


class CacheError(CMSError):
    """Raised by cache backends when the cache store is unreachable"""

    default_error_code = ErrorCode.CACHE_ERROR

    def __init__(self, message: str = "Cache backend error", operation: str | None = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message=message, status_code=status.HTTP_503_SERVICE_UNAVAILABLE, details=details)
