# 📄 File: social_platform/modules/content/domain/models/comment.py
# 🧭 Purpose (Layman Explanation):
# A comment someone leaves under a post. It can be edited later, and we remember that it was.
# 🧪 Purpose (Technical Summary):
# Comment entity with required, trimmed content; update_content re-validates, trims, marks the
# comment edited and advances updated_at. Replies are plain comments on the parent's post.
# 🔗 Dependencies:
# pydantic, social_platform.shared.utils (validators, helpers)
# 🔄 Connected Modules / Calls From:
# comment_service.py, comment_repository.py, comment_repository_impl.py

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from social_platform.shared.utils.helpers import generate_uuid, next_timestamp, utc_now
from social_platform.shared.utils.validators import require_id, require_text


class Comment(BaseModel):
    """Comment on a post."""

    id: str = Field(default_factory=generate_uuid)
    user_id: str
    post_id: str
    content: str
    is_edited: bool = False
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("id", "user_id", "post_id", mode="before")
    @classmethod
    def validate_ids(cls, v, info):
        return require_id(v, info.field_name)

    @field_validator("content", mode="before")
    @classmethod
    def validate_content(cls, v):
        return require_text(v, "content")

    def update_content(self, content: str) -> None:
        self.content = require_text(content, "content")
        self.is_edited = True
        self.updated_at = next_timestamp(self.updated_at)
