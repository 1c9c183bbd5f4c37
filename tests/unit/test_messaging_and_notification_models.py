"""
Tests for direct messages, notifications and authentication tokens.
"""
from datetime import timedelta

import pytest

from social_platform.modules.messaging.domain.models import Message, MessageType
from social_platform.modules.notifications.domain.models import (
    Notification,
    NotificationStatus,
    NotificationType,
)
from social_platform.modules.user_management.domain.models import PasswordResetToken, RefreshToken, UserSession
from social_platform.shared.core.exceptions import InvalidOperationError, ValidationError
from social_platform.shared.utils.helpers import generate_uuid, utc_now


def make_message(**overrides) -> Message:
    values = {"sender_id": generate_uuid(), "recipient_id": generate_uuid(), "content": "hi"}
    values.update(overrides)
    return Message(**values)


def make_notification(**overrides) -> Notification:
    values = {
        "user_id": generate_uuid(),
        "type": NotificationType.LIKE,
        "title": "New Like",
        "message": "Someone liked your post",
    }
    values.update(overrides)
    return Notification(**values)


class TestMessage:
    """Test the Message entity."""

    def test_self_message_rejected(self):
        user_id = generate_uuid()
        with pytest.raises(ValidationError) as exc_info:
            Message.create(user_id, user_id, "hello me")
        assert exc_info.value.field == "recipient_id"

    def test_text_message_requires_content(self):
        with pytest.raises(ValidationError) as exc_info:
            make_message(content="   ")
        assert exc_info.value.field == "content"

    def test_image_message_without_text(self):
        message = Message.create(generate_uuid(), generate_uuid(), None, MessageType.IMAGE)
        message.set_attachment("https://cdn/a.jpg", "a.jpg", 2048)

        assert message.content == ""
        assert message.has_attachment is True

    def test_partial_attachment_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            make_message(attachment_url="https://cdn/a.jpg")
        assert exc_info.value.field == "attachment_file_name"

    def test_mark_as_read_keeps_first_read_time(self):
        message = make_message()
        message.mark_as_read()
        first_read_at = message.read_at

        message.mark_as_read()

        assert message.is_read is True
        assert message.read_at == first_read_at

    def test_edit_marks_edited(self):
        message = make_message()
        message.update_content("  hello again ")

        assert message.content == "hello again"
        assert message.is_edited is True

    def test_deleted_message_cannot_be_edited(self):
        message = make_message()
        message.delete()

        with pytest.raises(InvalidOperationError):
            message.update_content("too late")
        assert message.content == "hi"


class TestNotification:
    """Test the Notification lifecycle."""

    def test_new_notification_is_unread(self):
        notification = make_notification()
        assert notification.status == NotificationStatus.UNREAD
        assert notification.is_unread is True
        assert notification.metadata == {}

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            make_notification(title=" ")
        assert exc_info.value.field == "title"

    def test_mark_as_read_is_idempotent(self):
        notification = make_notification()
        notification.mark_as_read()
        first_read_at = notification.read_at

        notification.mark_as_read()

        assert notification.status == NotificationStatus.READ
        assert notification.read_at == first_read_at

    def test_archive_unread_stamps_read_at(self):
        notification = make_notification()
        notification.archive()

        assert notification.status == NotificationStatus.ARCHIVED
        assert notification.read_at is not None
        assert notification.archived_at is not None

    def test_archived_notification_stays_archived(self):
        notification = make_notification()
        notification.archive()
        notification.mark_as_read()
        assert notification.status == NotificationStatus.ARCHIVED

    def test_expiry(self):
        assert make_notification().is_expired() is False
        assert make_notification(expires_at=utc_now() - timedelta(minutes=1)).is_expired() is True
        assert make_notification(expires_at=utc_now() + timedelta(days=1)).is_expired() is False

    def test_metadata(self):
        notification = make_notification(metadata=None)
        notification.add_metadata("post_id", "p1")

        assert notification.get_metadata("post_id") == "p1"
        assert notification.get_metadata("missing", "default") == "default"


class TestAuthTokens:
    """Test refresh tokens, password reset tokens and sessions."""

    def test_refresh_token_must_expire_in_future(self):
        with pytest.raises(ValidationError) as exc_info:
            RefreshToken.issue(generate_uuid(), "token", "jwt", utc_now() - timedelta(seconds=1))
        assert exc_info.value.field == "expires_at"

    def test_refresh_token_single_use(self):
        token = RefreshToken.issue(generate_uuid(), "token", "jwt", utc_now() + timedelta(days=7))
        assert token.is_active() is True

        token.mark_as_used()
        assert token.is_active() is False

        with pytest.raises(InvalidOperationError):
            token.mark_as_used()

    def test_revoked_refresh_token_cannot_be_used(self):
        token = RefreshToken.issue(generate_uuid(), "token", "jwt", utc_now() + timedelta(days=7))
        token.revoke("127.0.0.1", "logout")

        assert token.is_revoked is True
        assert token.revoked_reason == "logout"
        with pytest.raises(InvalidOperationError):
            token.mark_as_used()

    def test_password_reset_token_single_use(self):
        token = PasswordResetToken.issue(generate_uuid(), "reset", utc_now() + timedelta(hours=1))
        assert token.is_valid() is True

        token.mark_as_used()
        assert token.is_valid() is False
        assert token.used_at is not None

    def test_terminated_session_rejects_activity(self):
        session = UserSession(
            user_id=generate_uuid(),
            session_id="session",
            expires_at=utc_now() + timedelta(hours=1),
        )
        session.terminate()

        assert session.is_active is False
        with pytest.raises(InvalidOperationError):
            session.update_activity()
