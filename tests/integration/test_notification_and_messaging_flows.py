"""
Integration tests for notifications and direct messages against SQLite.
"""

from datetime import timedelta

import pytest
import pytest_asyncio

from social_platform.modules.notifications.application.dto.notification_dto import (
    BulkNotificationRequest,
    CreateNotificationRequest,
    NotificationQuery,
)
from social_platform.modules.notifications.domain.models.notification import NotificationStatus, NotificationType
from social_platform.shared.core.exceptions import AuthorizationError, NotFoundError
from social_platform.shared.utils.helpers import utc_now


@pytest_asyncio.fixture
async def people(services):
    created = {}
    for username in ("alice", "bob", "carol"):
        created[username] = await services.user_service.create_user(
            f"{username}@example.com", username, username.title()
        )
    return created


def _announcement(user_ids):
    return BulkNotificationRequest(
        user_ids=user_ids,
        type=NotificationType.SYSTEM,
        title="Maintenance",
        message="We will be back soon",
    )


class TestNotificationFlow:
    """Notifications through the service and the SQL repository."""

    async def test_bulk_notification_reaches_every_user(self, services, people):
        user_ids = [user.id for user in people.values()]

        created = await services.notification_service.create_bulk_notification(_announcement(user_ids))

        assert [n.user_id for n in created] == user_ids
        for user_id in user_ids:
            assert await services.notification_service.get_unread_count(user_id) == 1

    async def test_mark_all_as_read_then_archive_all(self, services, people):
        alice = people["alice"]
        for _ in range(3):
            await services.notification_service.create_bulk_notification(_announcement([alice.id]))

        marked = await services.notification_service.mark_all_as_read(alice.id)

        assert marked == 3
        assert await services.notification_service.get_unread_count(alice.id) == 0
        read = await services.notification_service.get_user_notifications(
            alice.id, NotificationQuery(status=NotificationStatus.READ)
        )
        assert read.total_count == 3
        assert all(n.read_at is not None for n in read.notifications)

        archived = await services.notification_service.archive_all(alice.id)

        assert archived == 3
        stats = await services.notification_service.get_user_notification_stats(alice.id)
        assert stats.archived_count == 3
        assert stats.read_count == 0
        assert stats.count_by_type == {NotificationType.SYSTEM: 3}

    async def test_listing_is_paginated(self, services, people):
        alice = people["alice"]
        for _ in range(5):
            await services.notification_service.create_bulk_notification(_announcement([alice.id]))

        page = await services.notification_service.get_user_notifications(
            alice.id, NotificationQuery(page=2, page_size=2)
        )

        assert len(page.notifications) == 2
        assert page.total_count == 5
        assert page.total_pages == 3
        assert page.has_next is True
        assert page.has_previous is True

    async def test_expired_notifications_are_cleaned_up(self, services, people):
        alice = people["alice"]
        await services.notification_service.create_notification(
            CreateNotificationRequest(
                user_id=alice.id,
                type=NotificationType.SYSTEM,
                title="Flash sale",
                message="Ends soon",
                expires_at=utc_now() + timedelta(hours=1),
            )
        )

        listed = await services.notification_service.get_user_notifications(
            alice.id, NotificationQuery(include_expired=True)
        )
        assert listed.total_count == 1

        removed = await services.notification_repository.delete_expired(utc_now() + timedelta(hours=2))
        await services.notification_repository.save_changes()

        assert removed == 1
        assert await services.notification_service.get_unread_count(alice.id) == 0

    async def test_only_the_owner_can_touch_a_notification(self, services, people):
        alice, bob = people["alice"], people["bob"]
        [notification] = await services.notification_service.create_bulk_notification(_announcement([alice.id]))

        with pytest.raises(AuthorizationError):
            await services.notification_service.mark_as_read(notification.id, bob.id)

        read = await services.notification_service.mark_as_read(notification.id, alice.id)
        assert read.status == NotificationStatus.READ

        assert await services.notification_service.delete_notification(notification.id, alice.id) is True
        with pytest.raises(NotFoundError):
            await services.notification_service.delete_notification(notification.id, alice.id)


class TestMessagingFlow:
    """Direct messages between two users."""

    async def test_conversation_and_unread_count(self, services, people):
        alice, bob, carol = people["alice"], people["bob"], people["carol"]
        first = await services.message_service.send_message(alice.id, bob.id, "hi bob")
        second = await services.message_service.send_message(bob.id, alice.id, "hi alice")
        await services.message_service.send_message(carol.id, bob.id, "unrelated")

        conversation = await services.message_service.get_conversation(alice.id, bob.id)

        assert {m.id for m in conversation} == {first.id, second.id}
        assert await services.message_service.get_unread_count(bob.id) == 2

        await services.message_service.mark_as_read(first.id, bob.id)

        assert await services.message_service.get_unread_count(bob.id) == 1

    async def test_deleted_messages_leave_the_conversation(self, services, people):
        alice, bob = people["alice"], people["bob"]
        message = await services.message_service.send_message(alice.id, bob.id, "oops")

        with pytest.raises(AuthorizationError):
            await services.message_service.delete_message(message.id, bob.id)
        await services.message_service.delete_message(message.id, alice.id)

        assert await services.message_service.get_conversation(alice.id, bob.id) == []
        assert await services.message_service.get_unread_count(bob.id) == 0

    async def test_edit_is_persisted(self, services, people):
        alice, bob = people["alice"], people["bob"]
        message = await services.message_service.send_message(alice.id, bob.id, "helo")

        await services.message_service.edit_message(message.id, alice.id, "hello")

        [stored] = await services.message_service.get_conversation(bob.id, alice.id)
        assert stored.content == "hello"
