"""
Product Catalog Backend: Custom Exception Hierarchy
===================================================

What:  Application-specific exceptions for the failure cases of the service.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by the record store, the asset service and the product routes.

Exception Hierarchy:
    CatalogError (base)
    ├── ValidationError          → 400 Bad Request
    ├── NotFoundError            → 404 Not Found
    └── StorageError             → 500 Internal Server Error
        ├── DatabaseError        → query or commit failed
        └── FileStorageError     → upload could not be written

StorageError messages are the raw message of the underlying failure and are
returned to the caller as-is.
"""

from typing import Any, Dict, Optional


class CatalogError(Exception):
    """
    Base exception for all catalog application errors.

    Attributes:
        message:  Error description returned in the API response
        context:  Additional debug info (logged, returned only as `details`
                  for validation errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CatalogError):
    """
    Raised when client input cannot be used.

    When:    Required product fields are missing (when the presence check is
             enabled), the body is not a JSON object, or `price` is not a number.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Missing required product fields: image_url",
            "details": {"field": "image_url", "missing": ["image_url"]}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(CatalogError):
    """
    Raised when a requested resource does not exist.

    When:    GET /products/{id} with an id that matches no row.
    HTTP:    404 Not Found

    Update and delete never raise this; a zero-row match is reported as
    `{"changes": 0}`.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StorageError(CatalogError):
    """
    Raised when the database or the upload directory fails.

    HTTP:    500 Internal Server Error, with the underlying message echoed.
    """

    def __init__(
        self,
        message: str = "Storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(StorageError):
    """
    Raised when a statement against the products table fails.

    When:    Connection lost, locked database file, constraint violation, etc.
    """


class FileStorageError(StorageError):
    """
    Raised when an uploaded image cannot be written to the upload directory.

    When:    Disk full, permission denied, directory not writable, I/O error.
    No cleanup of a partially written file is attempted.
    """
