from typing import Any, Dict, List, Optional
from fastapi import status


class AppException(Exception):
    """Base application exception class."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code to return
            details: Additional error details
        """
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(AppException):
    """Exception for data validation errors."""

    def __init__(
        self,
        message: str = "Validation error",
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize validation exception.

        Args:
            message: Error message
            details: Validation error details
        """
        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details
        )


class NotFoundException(AppException):
    """Exception for resource not found errors."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        message: Optional[str] = None
    ):
        """
        Initialize not found exception.

        Args:
            resource_type: Type of resource not found
            resource_id: ID of the resource
            message: Custom error message
        """
        super().__init__(
            message=message or f"{resource_type} with ID {resource_id} not found",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class UnauthorizedException(AppException):
    """Exception for authentication errors."""

    def __init__(
        self,
        message: str = "Authentication required",
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize unauthorized exception."""
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details
        )


class ForbiddenException(AppException):
    """Exception for authorization errors."""

    def __init__(
        self,
        message: str = "Insufficient permissions",
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize forbidden exception."""
        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details
        )


class ConflictException(AppException):
    """Exception for requests that clash with existing data."""

    def __init__(
        self,
        message: str = "Resource already exists",
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize conflict exception."""
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=details
        )


class StoreError(AppException):
    """Exception for failed document store calls (network, permission, driver)."""

    def __init__(
        self,
        message: str = "Document store error",
        path: Optional[str] = None,
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize store exception.

        Args:
            message: Error message
            path: Store path the failing call targeted
            status_code: HTTP status code
            details: Additional error details
        """
        error_details = details or {}
        if path:
            error_details["path"] = path

        super().__init__(
            message=message,
            status_code=status_code,
            details=error_details
        )


class DocumentNotFoundError(StoreError):
    """Raised by the store when a write targets a document that does not exist."""

    def __init__(self, path: str, message: Optional[str] = None):
        super().__init__(
            message=message or f"No document to update at {path}",
            path=path,
            status_code=status.HTTP_404_NOT_FOUND
        )


class AmbiguousResolutionError(AppException):
    """Raised in strict mode when several service records claim the same key."""

    def __init__(self, service_key: str, candidates: List[str]):
        super().__init__(
            message=f"Service key '{service_key}' matches {len(candidates)} records",
            status_code=status.HTTP_409_CONFLICT,
            details={"service_key": service_key, "candidates": candidates}
        )
