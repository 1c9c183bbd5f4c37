# 📄 File: social_platform/modules/content/infrastructure/database/__init__.py
# 🧭 Purpose (Layman Explanation):
# The database tables and storage classes for posts, attachments, comments, likes and shares.
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models and repository implementations for the content context.
# 🔗 Dependencies:
# sqlalchemy, social_platform.shared.infrastructure.database
# 🔄 Connected Modules / Calls From:
# social_platform.shared.core.dependencies, integration tests

from .models import CommentModel, LikeModel, MediaAttachmentModel, PostModel, ShareModel
from .post_repository_impl import PostRepositoryImpl
from .comment_repository_impl import CommentRepositoryImpl
from .like_repository_impl import LikeRepositoryImpl
from .share_repository_impl import ShareRepositoryImpl

__all__ = [
    "PostModel",
    "MediaAttachmentModel",
    "CommentModel",
    "LikeModel",
    "ShareModel",
    "PostRepositoryImpl",
    "CommentRepositoryImpl",
    "LikeRepositoryImpl",
    "ShareRepositoryImpl",
]
