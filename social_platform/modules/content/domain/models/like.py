# 📄 File: social_platform/modules/content/domain/models/like.py
# 🧭 Purpose (Layman Explanation):
# Remembers that a person liked a post. There is nothing more to it than who, what and when.
# 🧪 Purpose (Technical Summary):
# Like entity; one per (user, post) pair, enforced by a unique index in storage rather than here.
# 🔗 Dependencies:
# pydantic, social_platform.shared.utils
# 🔄 Connected Modules / Calls From:
# like_service.py, like_repository.py, like_repository_impl.py

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from social_platform.shared.utils.helpers import generate_uuid, utc_now
from social_platform.shared.utils.validators import require_id


class Like(BaseModel):
    id: str = Field(default_factory=generate_uuid)
    user_id: str
    post_id: str
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("id", "user_id", "post_id", mode="before")
    @classmethod
    def validate_ids(cls, v, info):
        return require_id(v, info.field_name)
