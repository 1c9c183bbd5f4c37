# 📄 File: social_platform/modules/content/domain/services/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the business logic for posting, commenting, liking and sharing.
# 🧪 Purpose (Technical Summary):
# Package initialization for content domain services.
# 🔗 Dependencies:
# Content models and repositories, follow and user repositories, notification service
# 🔄 Connected Modules / Calls From:
# social_platform.shared.core.dependencies, transport layer

"""
Content Domain Services

Domain Services:
- PostService: posts, replies, media, visibility-filtered listings, statistics
- CommentService: comments and their owner-checked edits
- LikeService: likes, one per user and post
- ShareService: re-shares of visible posts
"""

from .post_service import PostService
from .comment_service import CommentService
from .like_service import LikeService
from .share_service import ShareService

__all__ = [
    "PostService",
    "CommentService",
    "LikeService",
    "ShareService",
]
