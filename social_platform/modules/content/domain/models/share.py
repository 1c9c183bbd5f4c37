# 📄 File: social_platform/modules/content/domain/models/share.py
# 🧭 Purpose (Layman Explanation):
# Records that someone re-shared a post, optionally with a few words of their own.
# 🧪 Purpose (Technical Summary):
# Share entity with an optional trimmed comment; update_comment replaces it, and None or a blank
# string clears it.
# 🔗 Dependencies:
# pydantic, social_platform.shared.utils
# 🔄 Connected Modules / Calls From:
# share_service.py, share_repository.py, share_repository_impl.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from social_platform.shared.utils.helpers import generate_uuid, utc_now
from social_platform.shared.utils.validators import optional_text, require_id


class Share(BaseModel):
    """A re-share of a post."""

    id: str = Field(default_factory=generate_uuid)
    user_id: str
    post_id: str
    comment: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("id", "user_id", "post_id", mode="before")
    @classmethod
    def validate_ids(cls, v, info):
        return require_id(v, info.field_name)

    @field_validator("comment", mode="before")
    @classmethod
    def trim_comment(cls, v):
        return optional_text(v)

    def update_comment(self, comment: Optional[str]) -> None:
        """Replace the share comment; None or blank text clears it."""
        self.comment = optional_text(comment)
