"""
Tests for post, comment, like and share services with mocked repositories.
"""
from unittest.mock import AsyncMock

import pytest

from social_platform.modules.content.application.dto import MediaAttachmentInput
from social_platform.modules.content.domain.models import Comment, Like, PostType, PostVisibility, Share
from social_platform.modules.content.domain.services import CommentService, LikeService, PostService, ShareService
from social_platform.modules.user_management.domain.models import Follow
from social_platform.shared.core.exceptions import (
    AuthorizationError,
    BusinessRuleViolationError,
    DuplicateResourceError,
    NotFoundError,
    ValidationError,
)
from social_platform.shared.utils.helpers import generate_uuid
from tests.conftest import make_post, make_user, mock_repository


@pytest.fixture
def post_service(post_repository, user_repository, follow_repository):
    return PostService(post_repository, user_repository, follow_repository)


class TestPostService:
    """Test post creation, ownership and visibility."""

    async def test_create_text_post(self, post_service, post_repository, user_repository):
        author = make_user()
        user_repository.get_by_id.return_value = author

        post = await post_service.create_text_post(author.id, "  hello  ")

        assert post.content == "hello"
        assert post.type == PostType.TEXT
        post_repository.create.assert_awaited_once()
        post_repository.save_changes.assert_awaited_once()

    async def test_create_text_post_unknown_author(self, post_service, post_repository, user_repository):
        user_repository.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await post_service.create_text_post(generate_uuid(), "hello")
        post_repository.create.assert_not_awaited()

    async def test_media_post_requires_attachments(self, post_service):
        with pytest.raises(ValidationError) as exc_info:
            await post_service.create_media_post(generate_uuid(), "caption", [])
        assert exc_info.value.field == "attachments"

    async def test_media_post_type_derived(self, post_service, user_repository):
        user_repository.get_by_id.return_value = make_user()
        attachments = [
            MediaAttachmentInput(url="https://cdn/a.jpg", file_name="a.jpg", content_type="image/jpeg", file_size=10),
            MediaAttachmentInput(url="https://cdn/b.mp3", file_name="b.mp3", content_type="audio/mpeg", file_size=10),
        ]

        post = await post_service.create_media_post(generate_uuid(), None, attachments)

        assert post.type == PostType.MIXED
        assert len(post.media_attachments) == 2

    async def test_reply_joins_parent_thread(self, post_service, post_repository, user_repository):
        user_repository.get_by_id.return_value = make_user()
        root_id = generate_uuid()
        parent = make_post(parent_post_id=root_id, root_post_id=root_id)
        post_repository.get_by_id.return_value = parent

        reply = await post_service.create_reply(generate_uuid(), parent.id, "agreed")

        assert reply.parent_post_id == parent.id
        assert reply.root_post_id == root_id

    async def test_reply_to_hidden_parent(self, post_service, post_repository, user_repository):
        user_repository.get_by_id.return_value = make_user()
        post_repository.get_by_id.return_value = make_post(visibility=PostVisibility.PRIVATE)

        with pytest.raises(NotFoundError):
            await post_service.create_reply(generate_uuid(), generate_uuid(), "hello?")
        post_repository.create.assert_not_awaited()

    async def test_update_by_non_author(self, post_service, post_repository):
        post = make_post()
        post_repository.get_by_id.return_value = post

        with pytest.raises(AuthorizationError):
            await post_service.update_post_content(post.id, generate_uuid(), "hijacked")

        assert post.content == "hello"
        post_repository.update.assert_not_awaited()

    async def test_add_media_attachment_updates_type(self, post_service, post_repository):
        post = make_post()
        post_repository.get_by_id.return_value = post

        updated = await post_service.add_media_attachment(
            post.id,
            post.author_id,
            MediaAttachmentInput(url="https://cdn/v.mp4", file_name="v.mp4", content_type="video/mp4", file_size=99),
        )

        assert updated.type == PostType.VIDEO
        post_repository.update.assert_awaited_once()

    async def test_followers_post_visibility(self, post_service, post_repository, follow_repository):
        post = make_post(visibility=PostVisibility.FOLLOWERS)
        viewer_id = generate_uuid()
        post_repository.get_by_id.return_value = post

        follow_repository.get_by_pair.return_value = Follow.create(viewer_id, post.author_id, requires_approval=True)
        assert await post_service.get_post_by_id(post.id, viewer_id) is None

        follow_repository.get_by_pair.return_value = Follow.create(viewer_id, post.author_id)
        assert await post_service.get_post_by_id(post.id, viewer_id) == post

    async def test_get_post_by_empty_id(self, post_service, post_repository):
        assert await post_service.get_post_by_id("") is None
        post_repository.get_by_id.assert_not_awaited()

    async def test_listings_hand_the_viewer_to_the_query(self, post_service, post_repository):
        author_id = generate_uuid()
        viewer_id = generate_uuid()
        post_repository.get_by_author.return_value = []
        post_repository.get_replies.return_value = []

        await post_service.get_posts_by_author(author_id, viewer_id, limit=5, offset=10)
        await post_service.get_post_replies(author_id, None, limit=0)

        post_repository.get_by_author.assert_awaited_once_with(author_id, viewer_id, 5, 10)
        post_repository.get_replies.assert_awaited_once_with(author_id, None, 20, 0)

    async def test_listing_pagination_defaults(self, post_service, post_repository):
        post_repository.get_public_timeline.return_value = []

        await post_service.get_public_timeline(limit=0, offset=-5)

        post_repository.get_public_timeline.assert_awaited_once_with(20, 0)

    async def test_search_blank_term(self, post_service, post_repository):
        assert await post_service.search_posts("   ") == []
        post_repository.search.assert_not_awaited()

    async def test_post_stats(self, post_repository, user_repository, follow_repository):
        like_repository = mock_repository()
        like_repository.count_by_post.return_value = 4
        comment_repository = mock_repository()
        comment_repository.count_by_post.return_value = 2
        share_repository = mock_repository()
        share_repository.count_by_post.return_value = 1
        post_repository.get_by_id.return_value = make_post()
        post_repository.count_replies.return_value = 3
        service = PostService(
            post_repository, user_repository, follow_repository,
            like_repository, comment_repository, share_repository,
        )

        stats = await service.get_post_stats(generate_uuid())

        assert (stats.likes_count, stats.comments_count, stats.shares_count, stats.replies_count) == (4, 2, 1, 3)
        assert stats.total_engagement == 10

    async def test_post_stats_hidden_from_viewer(self, post_service, post_repository):
        post_repository.get_by_id.return_value = make_post(visibility=PostVisibility.PRIVATE)

        with pytest.raises(NotFoundError) as exc_info:
            await post_service.get_post_stats(generate_uuid(), generate_uuid())

        assert exc_info.value.field == "post_id"
        post_repository.count_replies.assert_not_awaited()


class TestCommentService:
    """Test comment ownership, notifications and pagination."""

    @pytest.fixture
    def comment_repository(self):
        return mock_repository()

    @pytest.fixture
    def notification_service(self):
        return AsyncMock()

    @pytest.fixture
    def service(self, comment_repository, post_repository, user_repository, follow_repository, notification_service):
        return CommentService(
            comment_repository, post_repository, user_repository, follow_repository, notification_service
        )

    async def test_comment_notifies_post_author(
        self, service, comment_repository, post_repository, user_repository, notification_service
    ):
        post = make_post()
        commenter_id = generate_uuid()
        user_repository.get_by_id.return_value = make_user()
        post_repository.get_by_id.return_value = post

        comment = await service.create_comment(commenter_id, post.id, "  great post ")

        assert comment.content == "great post"
        notification_service.create_comment_notification.assert_awaited_once_with(
            post.author_id, post.id, comment.id, commenter_id, commit=False
        )
        comment_repository.save_changes.assert_awaited_once()

    async def test_own_comment_not_notified(self, service, post_repository, user_repository, notification_service):
        post = make_post()
        user_repository.get_by_id.return_value = make_user()
        post_repository.get_by_id.return_value = post

        await service.create_comment(post.author_id, post.id, "adding context")

        notification_service.create_comment_notification.assert_not_awaited()

    async def test_comment_on_missing_post(self, service, comment_repository, post_repository, user_repository):
        user_repository.get_by_id.return_value = make_user()
        post_repository.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await service.create_comment(generate_uuid(), generate_uuid(), "hello")
        comment_repository.create.assert_not_awaited()

    async def test_reply_lands_on_parent_post(self, service, comment_repository, post_repository, user_repository):
        post = make_post()
        parent = Comment(user_id=generate_uuid(), post_id=post.id, content="first")
        user_repository.get_by_id.return_value = make_user()
        comment_repository.get_by_id.return_value = parent
        post_repository.get_by_id.return_value = post

        reply = await service.create_reply(generate_uuid(), parent.id, "second")

        assert reply.post_id == post.id

    async def test_comment_on_hidden_post(self, service, comment_repository, post_repository, user_repository):
        user_repository.get_by_id.return_value = make_user()
        post_repository.get_by_id.return_value = make_post(visibility=PostVisibility.PRIVATE)

        with pytest.raises(NotFoundError) as exc_info:
            await service.create_comment(generate_uuid(), generate_uuid(), "let me in")

        assert exc_info.value.field == "post_id"
        comment_repository.create.assert_not_awaited()

    async def test_reply_under_hidden_post(self, service, comment_repository, post_repository, user_repository):
        post = make_post(visibility=PostVisibility.FOLLOWERS)
        user_repository.get_by_id.return_value = make_user()
        comment_repository.get_by_id.return_value = Comment(user_id=post.author_id, post_id=post.id, content="first")
        post_repository.get_by_id.return_value = post

        with pytest.raises(NotFoundError):
            await service.create_reply(generate_uuid(), generate_uuid(), "second")
        comment_repository.create.assert_not_awaited()

    async def test_accepted_follower_comments_on_followers_post(
        self, service, comment_repository, post_repository, user_repository, follow_repository
    ):
        post = make_post(visibility=PostVisibility.FOLLOWERS)
        follower_id = generate_uuid()
        user_repository.get_by_id.return_value = make_user()
        post_repository.get_by_id.return_value = post
        follow_repository.get_by_pair.return_value = Follow.create(follower_id, post.author_id)

        comment = await service.create_comment(follower_id, post.id, "nice")

        assert comment.post_id == post.id
        follow_repository.get_by_pair.assert_awaited_once_with(follower_id, post.author_id)

    async def test_comments_of_hidden_post_are_not_listed(self, service, comment_repository, post_repository):
        post_repository.get_by_id.return_value = make_post(visibility=PostVisibility.PRIVATE)

        assert await service.get_post_comments(generate_uuid(), generate_uuid()) == []
        comment_repository.get_by_post.assert_not_awaited()

    async def test_update_by_non_author(self, service, comment_repository):
        comment = Comment(user_id=generate_uuid(), post_id=generate_uuid(), content="original")
        comment_repository.get_by_id.return_value = comment

        with pytest.raises(AuthorizationError):
            await service.update_comment(comment.id, generate_uuid(), "changed")

        assert comment.content == "original"
        assert comment.is_edited is False
        comment_repository.update.assert_not_awaited()

    async def test_update_by_author(self, service, comment_repository):
        comment = Comment(user_id=generate_uuid(), post_id=generate_uuid(), content="original")
        comment_repository.get_by_id.return_value = comment

        updated = await service.update_comment(comment.id, comment.user_id, "changed")

        assert updated.content == "changed"
        assert updated.is_edited is True
        comment_repository.update.assert_awaited_once()

    @pytest.mark.parametrize("limit, offset", [(0, 0), (-1, -5)])
    async def test_comment_pagination_defaults(self, service, comment_repository, post_repository, limit, offset):
        comment_repository.get_by_post.return_value = []
        post_repository.get_by_id.return_value = make_post()
        post_id = generate_uuid()

        await service.get_post_comments(post_id, None, limit, offset)

        comment_repository.get_by_post.assert_awaited_once_with(post_id, 50, 0)

    async def test_empty_ids_return_nothing(self, service, comment_repository):
        assert await service.get_post_comments("") == []
        assert await service.get_comment_by_id("") is None
        assert await service.get_user_comment_count("") == 0
        comment_repository.get_by_post.assert_not_awaited()


class TestLikeService:
    """Test like uniqueness and notifications."""

    @pytest.fixture
    def like_repository(self):
        repository = mock_repository()
        repository.exists.return_value = False
        return repository

    @pytest.fixture
    def notification_service(self):
        return AsyncMock()

    @pytest.fixture
    def service(self, like_repository, post_repository, user_repository, follow_repository, notification_service):
        return LikeService(like_repository, post_repository, user_repository, follow_repository, notification_service)

    async def test_like_post(self, service, like_repository, post_repository, user_repository, notification_service):
        post = make_post()
        liker_id = generate_uuid()
        user_repository.get_by_id.return_value = make_user()
        post_repository.get_by_id.return_value = post

        like = await service.like_post(liker_id, post.id)

        assert like.user_id == liker_id
        assert like.post_id == post.id
        notification_service.create_like_notification.assert_awaited_once_with(
            post.author_id, post.id, liker_id, commit=False
        )
        like_repository.save_changes.assert_awaited_once()

    async def test_duplicate_like(self, service, like_repository, post_repository, user_repository):
        user_repository.get_by_id.return_value = make_user()
        post_repository.get_by_id.return_value = make_post()
        like_repository.exists.return_value = True

        with pytest.raises(DuplicateResourceError):
            await service.like_post(generate_uuid(), generate_uuid())
        like_repository.create.assert_not_awaited()

    async def test_self_like(self, service, like_repository, post_repository, user_repository):
        post = make_post()
        user_repository.get_by_id.return_value = make_user()
        post_repository.get_by_id.return_value = post

        with pytest.raises(BusinessRuleViolationError) as exc_info:
            await service.like_post(post.author_id, post.id)

        assert exc_info.value.rule == "no_self_like"
        like_repository.create.assert_not_awaited()

    async def test_like_hidden_post(self, service, like_repository, post_repository, user_repository):
        user_repository.get_by_id.return_value = make_user()
        post_repository.get_by_id.return_value = make_post(visibility=PostVisibility.PRIVATE)

        with pytest.raises(NotFoundError) as exc_info:
            await service.like_post(generate_uuid(), generate_uuid())

        assert exc_info.value.field == "post_id"
        like_repository.exists.assert_not_awaited()
        like_repository.create.assert_not_awaited()

    async def test_pending_follower_cannot_like_followers_post(
        self, service, like_repository, post_repository, user_repository, follow_repository
    ):
        post = make_post(visibility=PostVisibility.FOLLOWERS)
        liker_id = generate_uuid()
        user_repository.get_by_id.return_value = make_user()
        post_repository.get_by_id.return_value = post
        follow_repository.get_by_pair.return_value = Follow.create(liker_id, post.author_id, requires_approval=True)

        with pytest.raises(NotFoundError):
            await service.like_post(liker_id, post.id)
        like_repository.create.assert_not_awaited()

    async def test_unlike_after_post_was_hidden(self, service, like_repository, post_repository, user_repository):
        like = Like(user_id=generate_uuid(), post_id=generate_uuid())
        user_repository.get_by_id.return_value = make_user()
        post_repository.get_by_id.return_value = make_post(visibility=PostVisibility.PRIVATE)
        like_repository.get_by_user_and_post.return_value = like

        assert await service.unlike_post(like.user_id, like.post_id) is True
        like_repository.delete.assert_awaited_once_with(like.id)

    async def test_likes_of_hidden_post_are_not_listed(self, service, like_repository, post_repository):
        post_repository.get_by_id.return_value = make_post(visibility=PostVisibility.PRIVATE)

        assert await service.get_post_likes(generate_uuid()) == []
        like_repository.get_by_post.assert_not_awaited()

    async def test_unlike_without_like(self, service, like_repository, post_repository, user_repository):
        user_repository.get_by_id.return_value = make_user()
        post_repository.get_by_id.return_value = make_post()
        like_repository.get_by_user_and_post.return_value = None

        with pytest.raises(NotFoundError):
            await service.unlike_post(generate_uuid(), generate_uuid())
        like_repository.delete.assert_not_awaited()

    async def test_unlike(self, service, like_repository, post_repository, user_repository):
        like = Like(user_id=generate_uuid(), post_id=generate_uuid())
        user_repository.get_by_id.return_value = make_user()
        post_repository.get_by_id.return_value = make_post()
        like_repository.get_by_user_and_post.return_value = like

        assert await service.unlike_post(like.user_id, like.post_id) is True
        like_repository.delete.assert_awaited_once_with(like.id)

    async def test_has_user_liked_post_empty_ids(self, service, like_repository):
        assert await service.has_user_liked_post("", generate_uuid()) is False
        like_repository.exists.assert_not_awaited()

    async def test_like_pagination_defaults(self, service, like_repository):
        like_repository.get_by_user.return_value = []
        user_id = generate_uuid()

        await service.get_user_likes(user_id, limit=-3, offset=-1)

        like_repository.get_by_user.assert_awaited_once_with(user_id, 50, 0)


class TestShareService:
    """Test sharing visible posts and owner-only share edits."""

    @pytest.fixture
    def share_repository(self):
        repository = mock_repository()
        repository.exists.return_value = False
        return repository

    @pytest.fixture
    def service(self, share_repository, post_service, user_repository):
        user_repository.get_by_id.return_value = make_user()
        return ShareService(share_repository, post_service, user_repository)

    async def test_share_visible_post(self, service, post_repository, share_repository):
        post = make_post()
        post_repository.get_by_id.return_value = post

        share = await service.share_post(generate_uuid(), post.id, "  worth a read ")

        assert share.comment == "worth a read"
        share_repository.save_changes.assert_awaited_once()

    async def test_share_hidden_post(self, service, post_repository, share_repository):
        post_repository.get_by_id.return_value = make_post(visibility=PostVisibility.PRIVATE)

        with pytest.raises(NotFoundError) as exc_info:
            await service.share_post(generate_uuid(), generate_uuid())

        assert exc_info.value.field == "post_id"
        share_repository.create.assert_not_awaited()

    async def test_share_by_unknown_user(self, service, post_repository, user_repository, share_repository):
        user_repository.get_by_id.return_value = None
        post_repository.get_by_id.return_value = make_post()

        with pytest.raises(NotFoundError) as exc_info:
            await service.share_post(generate_uuid(), generate_uuid())

        assert exc_info.value.field == "user_id"
        share_repository.create.assert_not_awaited()

    async def test_duplicate_share(self, service, post_repository, share_repository):
        post_repository.get_by_id.return_value = make_post()
        share_repository.exists.return_value = True

        with pytest.raises(DuplicateResourceError) as exc_info:
            await service.share_post(generate_uuid(), generate_uuid())

        assert exc_info.value.resource_type == "Share"
        share_repository.create.assert_not_awaited()

    async def test_blank_share_comment_is_stored_as_none(self, service, post_repository):
        post_repository.get_by_id.return_value = make_post()

        share = await service.share_post(generate_uuid(), generate_uuid(), "   ")

        assert share.comment is None

    async def test_update_comment_by_owner(self, service, share_repository):
        share = Share(user_id=generate_uuid(), post_id=generate_uuid(), comment="first take")
        share_repository.get_by_id.return_value = share

        updated = await service.update_share_comment(share.id, share.user_id, " second take ")

        assert updated.comment == "second take"
        share_repository.update.assert_awaited_once()
        share_repository.save_changes.assert_awaited_once()

    async def test_none_comment_clears_the_share_comment(self, service, share_repository):
        share = Share(user_id=generate_uuid(), post_id=generate_uuid(), comment="first take")
        share_repository.get_by_id.return_value = share

        updated = await service.update_share_comment(share.id, share.user_id, None)

        assert updated.comment is None

    async def test_update_comment_by_non_owner(self, service, share_repository):
        share = Share(user_id=generate_uuid(), post_id=generate_uuid(), comment="first take")
        share_repository.get_by_id.return_value = share

        with pytest.raises(AuthorizationError) as exc_info:
            await service.update_share_comment(share.id, generate_uuid(), "hijacked")

        assert exc_info.value.to_dict()["error"]["details"]["required_action"] == "update"
        assert share.comment == "first take"
        share_repository.update.assert_not_awaited()

    async def test_delete_by_non_owner(self, service, share_repository):
        share = Share(user_id=generate_uuid(), post_id=generate_uuid())
        share_repository.get_by_id.return_value = share

        with pytest.raises(AuthorizationError):
            await service.delete_share(share.id, generate_uuid())
        share_repository.delete.assert_not_awaited()

    async def test_delete_by_owner(self, service, share_repository):
        share = Share(user_id=generate_uuid(), post_id=generate_uuid())
        share_repository.get_by_id.return_value = share

        assert await service.delete_share(share.id, share.user_id) is True
        share_repository.delete.assert_awaited_once_with(share.id)

    async def test_delete_missing_share(self, service, share_repository):
        share_repository.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await service.delete_share(generate_uuid(), generate_uuid())
