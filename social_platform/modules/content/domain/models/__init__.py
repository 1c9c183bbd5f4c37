# 📄 File: social_platform/modules/content/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the content data models - posts with their photos and videos, and the comments,
# likes and shares people leave on them.
# 🧪 Purpose (Technical Summary):
# Package initialization for content entities, enums and the post type derivation helpers.
# 🔗 Dependencies:
# Domain model classes, pydantic base models
# 🔄 Connected Modules / Calls From:
# Content services, repositories, infrastructure layer

from .media_attachment import MediaAttachment
from .post import (
    Post,
    PostType,
    PostVisibility,
    derive_post_type,
    derive_post_type_from_content_types,
)
from .comment import Comment
from .like import Like
from .share import Share

__all__ = [
    "MediaAttachment",
    "Post",
    "PostType",
    "PostVisibility",
    "derive_post_type",
    "derive_post_type_from_content_types",
    "Comment",
    "Like",
    "Share",
]
