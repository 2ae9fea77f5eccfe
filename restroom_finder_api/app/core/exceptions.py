"""
Error taxonomy shared by services and the HTTP layer.

Every failure a client can observe is described by an ``ErrorStatus``
member: the status tag returned in the response body, a two-digit
envelope code and the HTTP status.  Services raise ``ApiException``
subclasses; ``core.responses`` renders them into the standard envelope.
"""

from enum import Enum
from typing import Optional

from fastapi import status


class ErrorStatus(Enum):
    """Status tag -> (envelope code, HTTP status, default message)."""

    INTERNAL_SERVER_ERROR = ("01", status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
    NEED_MORE_PARAMETER = ("02", status.HTTP_400_BAD_REQUEST, "A required parameter is missing")
    INVALID_PARAMETER = ("03", status.HTTP_400_BAD_REQUEST, "Invalid parameter value")
    INVALID_JSON = ("04", status.HTTP_400_BAD_REQUEST, "Malformed JSON body")
    AUTH_EXCEPTION = ("05", status.HTTP_403_FORBIDDEN, "Permission denied")
    INVALID_TOKEN_EXCEPTION = ("06", status.HTTP_401_UNAUTHORIZED, "Invalid or expired token")
    DUPLICATE_USER = ("07", status.HTTP_409_CONFLICT, "Email is already registered")
    USER_NOT_FOUND_EXCEPTION = ("08", status.HTTP_404_NOT_FOUND, "User not found")
    LOGIN_FAILED = ("09", status.HTTP_401_UNAUTHORIZED, "Invalid credentials")
    REVIEW_NOT_FOUND = ("16", status.HTTP_404_NOT_FOUND, "Review not found")
    RESTROOM_NOT_FOUND = ("17", status.HTTP_404_NOT_FOUND, "Restroom not found")
    SEARCH_NOT_FOUND = ("18", status.HTTP_404_NOT_FOUND, "Search history not found")
    PRODUCT_NOT_FOUND = ("19", status.HTTP_404_NOT_FOUND, "Product not found")
    DUPLICATE_PURCHASE = ("20", status.HTTP_409_CONFLICT, "Purchase token was already used")
    INSUFFICIENT_POINTS = ("21", status.HTTP_400_BAD_REQUEST, "Not enough points")
    EXTERNAL_SERVICE_FAILURE = ("22", status.HTTP_502_BAD_GATEWAY, "External service failure")
    VALIDATION_EXCEPTION = ("23", status.HTTP_400_BAD_REQUEST, "Validation failed")
    RESOURCE_NOT_FOUND = ("24", status.HTTP_404_NOT_FOUND, "Resource not found")
    METHOD_NOT_ALLOWED = ("25", status.HTTP_405_METHOD_NOT_ALLOWED, "Method not allowed")

    def __init__(self, code: str, http_status: int, default_message: str) -> None:
        self.code = code
        self.http_status = http_status
        self.default_message = default_message


class ApiException(Exception):
    """Base class for errors surfaced to API clients."""

    error_status: ErrorStatus = ErrorStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: Optional[str] = None, error_status: Optional[ErrorStatus] = None):
        if error_status is not None:
            self.error_status = error_status
        self.message = message or self.error_status.default_message
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.error_status.name}: {self.message}"


# ---------------------------------------------------------------------------
# Not found
# ---------------------------------------------------------------------------

class NotFoundError(ApiException):
    """A referenced record does not exist."""


class UserNotFoundError(NotFoundError):
    error_status = ErrorStatus.USER_NOT_FOUND_EXCEPTION


class ReviewNotFoundError(NotFoundError):
    error_status = ErrorStatus.REVIEW_NOT_FOUND


class RestroomNotFoundError(NotFoundError):
    error_status = ErrorStatus.RESTROOM_NOT_FOUND


class SearchNotFoundError(NotFoundError):
    error_status = ErrorStatus.SEARCH_NOT_FOUND


class ProductNotFoundError(NotFoundError):
    error_status = ErrorStatus.PRODUCT_NOT_FOUND


# ---------------------------------------------------------------------------
# Authentication and authorization
# ---------------------------------------------------------------------------

class AuthError(ApiException):
    """The caller is authenticated but not allowed to act on the resource."""

    error_status = ErrorStatus.AUTH_EXCEPTION


class InvalidTokenError(ApiException):
    error_status = ErrorStatus.INVALID_TOKEN_EXCEPTION


class LoginFailedError(ApiException):
    error_status = ErrorStatus.LOGIN_FAILED


# ---------------------------------------------------------------------------
# Validation and business rules
# ---------------------------------------------------------------------------

class ValidationError(ApiException):
    error_status = ErrorStatus.VALIDATION_EXCEPTION


class MissingParameterError(ValidationError):
    error_status = ErrorStatus.NEED_MORE_PARAMETER


class DuplicateUserError(ApiException):
    error_status = ErrorStatus.DUPLICATE_USER


class DuplicatePurchaseError(ApiException):
    error_status = ErrorStatus.DUPLICATE_PURCHASE


class InsufficientPointsError(ApiException):
    error_status = ErrorStatus.INSUFFICIENT_POINTS


# ---------------------------------------------------------------------------
# External collaborators
# ---------------------------------------------------------------------------

class ExternalServiceError(ApiException):
    """The address search or receipt validation provider failed."""

    error_status = ErrorStatus.EXTERNAL_SERVICE_FAILURE
