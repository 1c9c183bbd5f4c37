# 📄 File: social_platform/modules/content/domain/models/post.py
# 🧭 Purpose (Layman Explanation):
# Defines a post: what someone wrote, who may see it (everyone, followers, only them),
# whether it answers another post, and which photos, videos or sounds are attached.
# 🧪 Purpose (Technical Summary):
# Post aggregate with its MediaAttachment collection. Enforces author/content invariants,
# derives PostType from attachment content types (pure function), threads replies through
# parent/root ids, and decides visibility from already-loaded follow data.
# 🔗 Dependencies:
# pydantic, enum, media_attachment.py, user_management Follow model, shared validators/helpers
# 🔄 Connected Modules / Calls From:
# post_service.py, share_service.py, post_repository.py, post_repository_impl.py

"""
Post domain model.

Visibility rules (``Post.can_be_viewed_by``):
- PUBLIC posts are visible to everyone, including anonymous viewers
- the author always sees their own post
- PRIVATE posts are visible to nobody else
- FOLLOWERS posts need an *accepted* follow from the viewer to the author
"""

from datetime import datetime
from enum import Enum
from typing import Any, Iterable, List, Optional, Sequence

from pydantic import BaseModel, Field, field_validator, model_validator

from social_platform.modules.content.domain.models.media_attachment import MediaAttachment
from social_platform.modules.user_management.domain.models.follow import Follow
from social_platform.shared.core.exceptions import ValidationError
from social_platform.shared.utils.helpers import generate_uuid, next_timestamp, utc_now
from social_platform.shared.utils.validators import require_id


class PostType(str, Enum):
    """Post type, derived from attached media"""
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    MIXED = "mixed"  # attachments span more than one media category


class PostVisibility(str, Enum):
    """Who may view a post"""
    PUBLIC = "public"
    FOLLOWERS = "followers"
    PRIVATE = "private"


def media_category(content_type: str) -> PostType:
    """Map a MIME content type to the post type it contributes."""
    if content_type.startswith("image/"):
        return PostType.IMAGE
    if content_type.startswith("video/"):
        return PostType.VIDEO
    if content_type.startswith("audio/"):
        return PostType.AUDIO
    return PostType.TEXT


def derive_post_type(attachments: Iterable[MediaAttachment]) -> PostType:
    """
    Derive a post's type from its attachments.

    No attachments gives TEXT, a single media category gives that category,
    and more than one distinct category gives MIXED.
    """
    return derive_post_type_from_content_types(attachment.content_type for attachment in attachments)


def derive_post_type_from_content_types(content_types: Iterable[str]) -> PostType:
    categories = {media_category(content_type) for content_type in content_types}
    if not categories:
        return PostType.TEXT
    if len(categories) > 1:
        return PostType.MIXED
    return categories.pop()


class Post(BaseModel):
    """
    Post domain model.

    Content is required (non-blank) only while the post type is TEXT.
    ``root_post_id`` points at the first post of a reply thread and
    ``parent_post_id`` at the post being answered directly.
    """

    id: str = Field(default_factory=generate_uuid)
    author_id: str
    content: str = ""
    type: PostType = PostType.TEXT
    visibility: PostVisibility = PostVisibility.PUBLIC
    is_edited: bool = False
    parent_post_id: Optional[str] = None
    root_post_id: Optional[str] = None
    media_attachments: List[MediaAttachment] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("id", "author_id", mode="before")
    @classmethod
    def validate_ids(cls, v, info):
        return require_id(v, info.field_name)

    @field_validator("content", mode="before")
    @classmethod
    def normalize_content(cls, v):
        return (v or "").strip()

    @model_validator(mode="after")
    def validate_content_for_type(self):
        self._check_content(self.content, self.type)
        return self

    @staticmethod
    def _check_content(content: str, post_type: PostType) -> None:
        if not content and post_type == PostType.TEXT:
            raise ValidationError(
                "Content is required for text posts",
                field="content",
                constraint="required_for_text",
            )

    # =========================================================================
    # FACTORIES
    # =========================================================================

    @classmethod
    def create(
        cls,
        author_id: str,
        content: Optional[str],
        post_type: PostType = PostType.TEXT,
        visibility: PostVisibility = PostVisibility.PUBLIC,
    ) -> "Post":
        return cls(author_id=author_id, content=content, type=post_type, visibility=visibility)

    @classmethod
    def create_reply(
        cls,
        author_id: str,
        content: Optional[str],
        parent_post_id: str,
        root_post_id: Optional[str] = None,
        visibility: PostVisibility = PostVisibility.PUBLIC,
    ) -> "Post":
        """
        Create a text reply.

        Args:
            author_id: Reply author
            content: Reply text
            parent_post_id: Post being answered
            root_post_id: Thread root; the parent becomes the root when omitted
            visibility: Reply visibility

        Returns:
            Post: Reply post
        """
        parent_post_id = require_id(parent_post_id, "parent_post_id")
        return cls(
            author_id=author_id,
            content=content,
            visibility=visibility,
            parent_post_id=parent_post_id,
            root_post_id=root_post_id or parent_post_id,
        )

    @classmethod
    def create_with_media(
        cls,
        author_id: str,
        content: Optional[str],
        attachments: Sequence[Any],
        visibility: PostVisibility = PostVisibility.PUBLIC,
    ) -> "Post":
        """
        Create a post together with its attachments.

        The type is derived from the attachments up front, so a media
        post without text is valid from the moment it is constructed.

        Args:
            author_id: Post author
            content: Optional caption
            attachments: Items exposing url, file_name, content_type and file_size
            visibility: Post visibility
        """
        post = cls(
            author_id=author_id,
            content=content,
            type=derive_post_type_from_content_types(item.content_type for item in attachments),
            visibility=visibility,
        )
        for item in attachments:
            post.add_media_attachment(item.url, item.file_name, item.content_type, item.file_size)
        return post

    # =========================================================================
    # MUTATORS
    # =========================================================================

    def _touch(self) -> None:
        self.updated_at = next_timestamp(self.updated_at)

    def update_content(self, content: Optional[str]) -> None:
        """Replace the content and mark the post as edited."""
        content = (content or "").strip()
        self._check_content(content, self.type)
        self.content = content
        self.is_edited = True
        self._touch()

    def set_visibility(self, visibility: PostVisibility) -> None:
        self.visibility = PostVisibility(visibility)
        self._touch()

    def add_media_attachment(
        self,
        url: str,
        file_name: str,
        content_type: str,
        file_size: int,
    ) -> MediaAttachment:
        """
        Attach a media file and recompute the post type.

        Returns:
            MediaAttachment: The attachment that was added
        """
        attachment = MediaAttachment(
            post_id=self.id,
            url=url,
            file_name=file_name,
            content_type=content_type,
            file_size=file_size,
        )
        self.media_attachments.append(attachment)
        self.type = derive_post_type(self.media_attachments)
        self._touch()
        return attachment

    # =========================================================================
    # QUERIES
    # =========================================================================

    @property
    def is_reply(self) -> bool:
        return self.parent_post_id is not None

    def can_be_viewed_by(
        self,
        viewer_id: Optional[str],
        author_followers: Iterable[Follow] = (),
    ) -> bool:
        """
        Decide whether ``viewer_id`` may see this post.

        Pure function over already-loaded data: ``author_followers`` holds the
        follow records targeting the author that are relevant to this viewer.

        Args:
            viewer_id: Viewing user, None for an anonymous viewer
            author_followers: Follow records whose followee is the author

        Returns:
            bool: True when the post is visible to the viewer
        """
        if self.visibility == PostVisibility.PUBLIC:
            return True
        if viewer_id is None:
            return False
        if viewer_id == self.author_id:
            return True
        if self.visibility == PostVisibility.PRIVATE:
            return False

        return any(
            follow.follower_id == viewer_id
            and follow.followee_id == self.author_id
            and follow.is_accepted
            for follow in author_followers
        )
