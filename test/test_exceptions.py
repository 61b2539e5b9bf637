"""
Tests for custom exception classes

Tests exception initialization, messages, status codes, and details.
"""

from fastapi import status

from app.exceptions import (
    CacheError,
    CMSError,
    DatabaseError,
    ErrorCode,
    PageNotFoundError,
    ResourceNotFoundError,
    StorageError,
    ValidationError,
)


class TestCMSError:
    """Test base CMSError class"""

    def test_cms_exception_default(self):
        exc = CMSError("Test error")
        assert str(exc) == "Test error"
        assert exc.message == "Test error"
        assert exc.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert exc.details == {}
        assert exc.error_code is ErrorCode.UNKNOWN_ERROR

    def test_cms_exception_with_custom_status(self):
        exc = CMSError("Test error", status_code=status.HTTP_400_BAD_REQUEST)
        assert exc.status_code == status.HTTP_400_BAD_REQUEST

    def test_cms_exception_with_details(self):
        details = {"key": "value", "count": 42}
        exc = CMSError("Test error", details=details)
        assert exc.details == details


class TestStorageExceptions:
    def test_storage_error_is_database_error(self):
        exc = StorageError(operation="load_override")
        assert isinstance(exc, DatabaseError)
        assert exc.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert exc.error_code is ErrorCode.STORAGE_ERROR
        assert exc.details == {"operation": "load_override"}

    def test_database_error_default_message(self):
        exc = DatabaseError()
        assert exc.message == "A database error occurred"
        assert exc.error_code is ErrorCode.DATABASE_ERROR

    def test_cache_error(self):
        exc = CacheError("down", operation="get")
        assert exc.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert exc.error_code is ErrorCode.CACHE_ERROR


class TestNotFoundExceptions:
    def test_resource_not_found(self):
        exc = ResourceNotFoundError("Page", 5)
        assert exc.message == "Page with id '5' not found"
        assert exc.status_code == status.HTTP_404_NOT_FOUND

    def test_page_not_found(self):
        exc = PageNotFoundError(5)
        assert exc.message == "Page with id '5' not found"
        assert exc.error_code is ErrorCode.RESOURCE_PAGE_NOT_FOUND

    def test_page_translation_not_found(self):
        exc = PageNotFoundError(5, language_id=2)
        assert str(exc) == "Page with id '5' has no translation for language 2"
        assert exc.details == {"resource_type": "Page", "resource_id": 5, "language_id": 2}


class TestValidationError:
    def test_with_field(self):
        exc = ValidationError("bad", field="language_id")
        assert exc.status_code == status.HTTP_400_BAD_REQUEST
        assert exc.details == {"field": "language_id"}
