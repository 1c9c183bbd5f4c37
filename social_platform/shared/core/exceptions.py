# 📄 File: social_platform/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# Defines all the special error types the social platform uses to say exactly
# what went wrong (bad input, missing post, not your comment) instead of generic errors.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy providing specific error types with HTTP status codes,
# error details, and serialization so the transport layer can map each kind to a response.
# 🔗 Dependencies:
# FastAPI HTTPException, typing, HTTP status constants
# 🔄 Connected Modules / Calls From:
# Domain models (invariant checks), domain services, repository implementations, session manager

from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class SocialPlatformException(Exception):
    """
    Base exception class for the social platform.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
                "status_code": self.status_code
            }
        }

    def to_http_exception(self) -> HTTPException:
        """Convert to FastAPI HTTPException."""
        return HTTPException(
            status_code=self.status_code,
            detail=self.to_dict()["error"]
        )


# =============================================================================
# AUTHENTICATION & AUTHORIZATION EXCEPTIONS
# =============================================================================

class AuthenticationError(SocialPlatformException):
    """
    Exception raised for authentication failures.
    Used when credentials are invalid or a token can no longer be used.
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None,
        user_id: Optional[str] = None
    ):
        if not details:
            details = {}
        if user_id:
            details["user_id"] = user_id

        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
            error_code="AUTHENTICATION_ERROR"
        )


class AuthorizationError(SocialPlatformException):
    """
    Exception raised when the acting user does not own the resource
    they are trying to change or remove.
    """

    def __init__(
        self,
        message: str = "Access denied",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        required_action: Optional[str] = None,
        user_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id
        if required_action:
            details["required_action"] = required_action
        if user_id:
            details["user_id"] = user_id

        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
            error_code="AUTHORIZATION_ERROR"
        )


class AccountLockedException(SocialPlatformException):
    """
    Exception raised when a user account is temporarily locked
    after too many failed login attempts.
    """

    def __init__(
        self,
        message: str = "Account is locked",
        user_id: Optional[str] = None,
        locked_until: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if user_id:
            details["user_id"] = user_id
        if locked_until:
            details["locked_until"] = locked_until

        super().__init__(
            message=message,
            status_code=status.HTTP_423_LOCKED,
            details=details,
            error_code="ACCOUNT_LOCKED"
        )


# =============================================================================
# VALIDATION & DATA EXCEPTIONS
# =============================================================================

class ValidationError(SocialPlatformException):
    """
    Exception raised for invalid arguments.
    ``field`` always names the offending parameter.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        if constraint:
            details["constraint"] = constraint

        self.field = field

        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
            error_code="VALIDATION_ERROR"
        )


class NotFoundError(SocialPlatformException):
    """
    Exception raised when a referenced entity is absent from storage.
    Keeps the resource type and identifier that could not be resolved.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id
        if field:
            details["field"] = field

        self.resource_type = resource_type
        self.resource_id = resource_id
        self.field = field

        if message is None:
            message = f"{resource_type or 'Resource'} not found"
            if resource_id:
                message = f"{message}: {resource_id}"

        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            error_code="NOT_FOUND"
        )


class DuplicateResourceError(SocialPlatformException):
    """
    Exception raised when a uniqueness rule is violated
    (email or username taken, post already liked, user already followed).
    """

    def __init__(
        self,
        message: Optional[str] = None,
        resource_type: Optional[str] = None,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        self.resource_type = resource_type
        self.field = field

        if message is None:
            message = f"{resource_type or 'Resource'} already exists"

        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
            error_code="DUPLICATE_RESOURCE"
        )


class BusinessRuleViolationError(SocialPlatformException):
    """
    Exception raised when a domain business rule is violated.
    """

    def __init__(
        self,
        message: str,
        rule: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "BUSINESS_RULE_VIOLATION"
    ):
        if not details:
            details = {}

        if rule:
            details["rule"] = rule
        if context:
            details["context"] = context

        self.rule = rule

        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
            error_code=error_code
        )


class InvalidOperationError(BusinessRuleViolationError):
    """
    Exception raised for a state transition the entity does not allow,
    e.g. accepting an accepted follow or editing a deleted message.
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        entity_type: Optional[str] = None,
        entity_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation
        if entity_type:
            details["entity_type"] = entity_type
        if entity_id:
            details["entity_id"] = entity_id

        self.operation = operation

        super().__init__(
            message=message,
            rule=operation,
            details=details,
            error_code="INVALID_OPERATION"
        )
        self.status_code = status.HTTP_409_CONFLICT


# =============================================================================
# INFRASTRUCTURE EXCEPTIONS
# =============================================================================

class DatabaseError(SocialPlatformException):
    """
    Exception raised for database operation failures.
    """

    def __init__(
        self,
        message: str = "Database operation failed",
        operation: Optional[str] = None,
        table: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation
        if table:
            details["table"] = table

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="DATABASE_ERROR"
        )


class RepositoryError(DatabaseError):
    """
    Exception raised by repository implementations when the storage
    collaborator fails for a reason other than a uniqueness conflict.
    """

    def __init__(
        self,
        message: str = "Repository operation failed",
        repository: Optional[str] = None,
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if repository:
            details["repository"] = repository

        super().__init__(message=message, operation=operation, details=details)
        self.error_code = "REPOSITORY_ERROR"


class TransactionError(DatabaseError):
    """
    Exception raised when a unit of work cannot be committed.
    """

    def __init__(
        self,
        message: str = "Transaction failed",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, operation="transaction", details=details)
        self.error_code = "TRANSACTION_ERROR"


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def exception_to_dict(exc: Exception) -> Dict[str, Any]:
    """
    Convert any exception to the platform error dictionary format.

    Args:
        exc: Exception to convert

    Returns:
        Dict[str, Any]: Serializable error payload
    """
    if isinstance(exc, SocialPlatformException):
        return exc.to_dict()

    return {
        "error": {
            "code": "INTERNAL_SERVER_ERROR",
            "message": str(exc) or "An unexpected error occurred",
            "details": {"type": exc.__class__.__name__},
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR
        }
    }
