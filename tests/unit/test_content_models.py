"""
Tests for posts, media attachments, comments and shares.
"""
import pytest

from social_platform.modules.content.domain.models import (
    Comment,
    MediaAttachment,
    Post,
    PostType,
    PostVisibility,
    Share,
    derive_post_type_from_content_types,
)
from social_platform.modules.user_management.domain.models import Follow, User
from social_platform.shared.core.exceptions import ValidationError
from social_platform.shared.utils.helpers import generate_uuid
from tests.conftest import make_post


class TestPostCreation:
    """Test post construction and editing."""

    def test_create_text_post(self):
        """Scenario: a plain post is a public, unedited text post."""
        author = User.create_new_user("a@x.com", "a", "A", "hash")
        post = Post.create(author.id, "hello")

        assert post.type == PostType.TEXT
        assert post.visibility == PostVisibility.PUBLIC
        assert post.is_edited is False
        assert post.content == "hello"

    def test_content_is_trimmed(self):
        post = make_post(content="  hello world  ")
        assert post.content == "hello world"

    @pytest.mark.parametrize("content", ["", "   ", None])
    def test_text_post_requires_content(self, content):
        with pytest.raises(ValidationError) as exc_info:
            Post.create(generate_uuid(), content)
        assert exc_info.value.field == "content"

    def test_blank_author_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Post.create("  ", "hello")
        assert exc_info.value.field == "author_id"

    def test_update_content_marks_edited(self):
        post = make_post()
        previous_updated_at = post.updated_at

        post.update_content("  changed ")

        assert post.content == "changed"
        assert post.is_edited is True
        assert post.updated_at > previous_updated_at

    def test_update_content_blank_rejected_for_text_post(self):
        post = make_post()
        with pytest.raises(ValidationError):
            post.update_content("  ")
        assert post.content == "hello"
        assert post.is_edited is False

    def test_reply_defaults_root_to_parent(self):
        parent_id = generate_uuid()
        reply = Post.create_reply(generate_uuid(), "me too", parent_post_id=parent_id)

        assert reply.is_reply is True
        assert reply.parent_post_id == parent_id
        assert reply.root_post_id == parent_id


class TestPostMedia:
    """Test media attachments and post type derivation."""

    def test_post_type_follows_attachments(self):
        post = make_post()
        assert post.type == PostType.TEXT

        post.add_media_attachment("https://cdn/a.jpg", "a.jpg", "image/jpeg", 1024)
        assert post.type == PostType.IMAGE

        post.add_media_attachment("https://cdn/b.png", "b.png", "image/png", 2048)
        assert post.type == PostType.IMAGE

        post.add_media_attachment("https://cdn/c.mp4", "c.mp4", "video/mp4", 4096)
        assert post.type == PostType.MIXED
        assert len(post.media_attachments) == 3
        assert all(attachment.post_id == post.id for attachment in post.media_attachments)

    @pytest.mark.parametrize(
        "content_types, expected",
        [
            ([], PostType.TEXT),
            (["video/mp4"], PostType.VIDEO),
            (["audio/mpeg", "audio/ogg"], PostType.AUDIO),
            (["image/png", "audio/mpeg"], PostType.MIXED),
        ],
    )
    def test_derive_post_type(self, content_types, expected):
        assert derive_post_type_from_content_types(content_types) == expected

    def test_media_post_without_caption(self):
        class Upload:
            url = "https://cdn/a.jpg"
            file_name = "a.jpg"
            content_type = "image/jpeg"
            file_size = 100

        post = Post.create_with_media(generate_uuid(), None, [Upload()])

        assert post.type == PostType.IMAGE
        assert post.content == ""
        assert len(post.media_attachments) == 1

    def test_attachment_requires_positive_size(self):
        with pytest.raises(ValidationError) as exc_info:
            MediaAttachment(
                post_id=generate_uuid(),
                url="https://cdn/a.jpg",
                file_name="a.jpg",
                content_type="image/jpeg",
                file_size=0,
            )
        assert exc_info.value.field == "file_size"

    def test_attachment_dimensions_set_together(self):
        attachment = MediaAttachment(
            post_id=generate_uuid(),
            url="https://cdn/a.jpg",
            file_name="a.jpg",
            content_type="image/jpeg",
            file_size=1536,
        )

        with pytest.raises(ValidationError):
            attachment.set_dimensions(640, 0)

        attachment.set_dimensions(640, 480)
        assert (attachment.width, attachment.height) == (640, 480)
        assert attachment.is_image is True
        assert attachment.file_size_formatted == "1.5 KB"


class TestPostVisibility:
    """Test Post.can_be_viewed_by."""

    def test_private_post_only_visible_to_author(self):
        """Scenario: a private post is hidden from everybody but its author."""
        author_id = generate_uuid()
        post = Post.create(author_id, "secret", visibility=PostVisibility.PRIVATE)

        assert post.can_be_viewed_by(generate_uuid()) is False
        assert post.can_be_viewed_by(author_id) is True

    def test_public_post_visible_to_anonymous(self):
        post = make_post()
        assert post.can_be_viewed_by(None) is True

    def test_followers_post_needs_accepted_follow(self):
        author_id = generate_uuid()
        viewer_id = generate_uuid()
        post = Post.create(author_id, "friends only", visibility=PostVisibility.FOLLOWERS)

        pending = Follow.create(viewer_id, author_id, requires_approval=True)
        assert post.can_be_viewed_by(viewer_id, [pending]) is False

        pending.accept()
        assert post.can_be_viewed_by(viewer_id, [pending]) is True
        assert post.can_be_viewed_by(None, [pending]) is False

    def test_followers_post_ignores_other_followers(self):
        author_id = generate_uuid()
        viewer_id = generate_uuid()
        post = Post.create(author_id, "friends only", visibility=PostVisibility.FOLLOWERS)
        someone_else = Follow.create(generate_uuid(), author_id)

        assert post.can_be_viewed_by(viewer_id, [someone_else]) is False


class TestCommentAndShare:
    """Test comments and shares."""

    def test_comment_content_trimmed(self):
        comment = Comment(user_id=generate_uuid(), post_id=generate_uuid(), content="  nice  ")
        assert comment.content == "nice"
        assert comment.is_edited is False

    def test_comment_blank_content_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Comment(user_id=generate_uuid(), post_id=generate_uuid(), content="   ")
        assert exc_info.value.field == "content"

    def test_comment_update(self):
        comment = Comment(user_id=generate_uuid(), post_id=generate_uuid(), content="first")
        comment.update_content(" second ")

        assert comment.content == "second"
        assert comment.is_edited is True
        assert comment.updated_at > comment.created_at

    def test_share_comment_optional(self):
        share = Share(user_id=generate_uuid(), post_id=generate_uuid(), comment="  look  ")
        assert share.comment == "look"

        share.update_comment(None)
        assert share.comment is None

    @pytest.mark.parametrize("comment", ["", "   ", "\n\t"])
    def test_blank_share_comment_is_dropped(self, comment):
        share = Share(user_id=generate_uuid(), post_id=generate_uuid(), comment=comment)
        assert share.comment is None

        share.update_comment("fair point")
        share.update_comment(comment)
        assert share.comment is None
