"""
Tests for the error payloads handed to the transport layer.
"""

from fastapi import HTTPException, status

from social_platform.shared.core.exceptions import (
    BusinessRuleViolationError,
    InvalidOperationError,
    NotFoundError,
    ValidationError,
    exception_to_dict,
)


class TestErrorPayloads:
    """Each error kind maps to a stable code and HTTP status."""

    def test_not_found_builds_its_own_message(self):
        exc = NotFoundError(resource_type="Post", resource_id="p-1", field="post_id")

        payload = exc.to_dict()["error"]

        assert payload["code"] == "NOT_FOUND"
        assert payload["message"] == "Post not found: p-1"
        assert payload["status_code"] == status.HTTP_404_NOT_FOUND
        assert payload["details"] == {"resource_type": "Post", "resource_id": "p-1", "field": "post_id"}

    def test_validation_error_converts_to_http_exception(self):
        exc = ValidationError("username is required", field="username")

        http_exc = exc.to_http_exception()

        assert isinstance(http_exc, HTTPException)
        assert http_exc.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert http_exc.detail["details"]["field"] == "username"

    def test_invalid_operation_is_a_business_rule_violation(self):
        exc = InvalidOperationError("Already accepted", operation="accept", entity_type="Follow")

        assert isinstance(exc, BusinessRuleViolationError)
        assert exc.to_dict()["error"]["code"] == "INVALID_OPERATION"

    def test_unexpected_exceptions_become_internal_errors(self):
        payload = exception_to_dict(RuntimeError("boom"))["error"]

        assert payload["code"] == "INTERNAL_SERVER_ERROR"
        assert payload["message"] == "boom"
        assert payload["details"] == {"type": "RuntimeError"}
