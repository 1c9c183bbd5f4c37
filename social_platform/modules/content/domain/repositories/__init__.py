# 📄 File: social_platform/modules/content/domain/repositories/__init__.py
# 🧭 Purpose (Layman Explanation):
# The promises the content storage makes, without saying which database keeps the data.
# 🧪 Purpose (Technical Summary):
# Abstract repository contracts for the content context.
# 🔗 Dependencies:
# social_platform.shared.core.repository, domain models
# 🔄 Connected Modules / Calls From:
# Content services, user_service.py, infrastructure implementations

from .post_repository import PostRepository
from .comment_repository import CommentRepository
from .like_repository import LikeRepository
from .share_repository import ShareRepository

__all__ = [
    "PostRepository",
    "CommentRepository",
    "LikeRepository",
    "ShareRepository",
]
