# 📄 File: social_platform/shared/core/__init__.py
# 🧭 Purpose (Layman Explanation):
# The platform's core rules: the kinds of errors it reports, password safety, and how pages of
# results are sized.
# 🧪 Purpose (Technical Summary):
# Core package. Re-exports exceptions, password hashing, pagination and the repository contract.
# The dependency wiring module is imported directly since it pulls in every bounded context.
# 🔗 Dependencies:
# exceptions.py, security.py, pagination.py, repository.py
# 🔄 Connected Modules / Calls From:
# Domain services, repositories, infrastructure layer

"""
Core utilities package for the social platform.
Provides exceptions, security helpers, pagination and the base repository contract.
"""

from .exceptions import (
    SocialPlatformException,
    AuthenticationError,
    AuthorizationError,
    AccountLockedException,
    ValidationError,
    NotFoundError,
    DuplicateResourceError,
    BusinessRuleViolationError,
    InvalidOperationError,
    DatabaseError,
    RepositoryError,
    TransactionError,
    exception_to_dict,
)
from .security import generate_secure_token, get_password_hash, verify_password
from .pagination import PageRequest, normalize_pagination, page_to_offset
from .repository import Repository

__all__ = [
    # Exceptions
    "SocialPlatformException",
    "AuthenticationError",
    "AuthorizationError",
    "AccountLockedException",
    "ValidationError",
    "NotFoundError",
    "DuplicateResourceError",
    "BusinessRuleViolationError",
    "InvalidOperationError",
    "DatabaseError",
    "RepositoryError",
    "TransactionError",
    "exception_to_dict",
    # Security
    "get_password_hash",
    "verify_password",
    "generate_secure_token",
    # Pagination
    "PageRequest",
    "normalize_pagination",
    "page_to_offset",
    # Repository
    "Repository",
]
