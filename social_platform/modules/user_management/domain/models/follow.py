# 📄 File: social_platform/modules/user_management/domain/models/follow.py
# 🧭 Purpose (Layman Explanation):
# Records that one person follows another. Following a private account starts as a
# request that the other person has to accept before it counts.
# 🧪 Purpose (Technical Summary):
# Follow edge of the social graph with a two-state acceptance machine: created either
# accepted (no approval needed) or pending; accept() moves pending to accepted exactly once
# and reject() is unsupported because a rejected request is represented by deleting the row.
# 🔗 Dependencies:
# pydantic, social_platform.shared (exceptions, validators, helpers)
# 🔄 Connected Modules / Calls From:
# user_service.py, post_service.py (visibility), follow_repository.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from social_platform.shared.core.exceptions import InvalidOperationError
from social_platform.shared.utils.helpers import generate_uuid, utc_now
from social_platform.shared.utils.validators import ensure_different, require_id


class Follow(BaseModel):
    """
    A follower -> followee relationship.

    ``is_accepted`` is True for an active follow and False for a pending
    request. ``accepted_at`` is set exactly when the follow becomes accepted.
    """

    id: str = Field(default_factory=generate_uuid)
    follower_id: str
    followee_id: str
    is_accepted: bool = True
    accepted_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("id", "follower_id", "followee_id", mode="before")
    @classmethod
    def validate_ids(cls, v, info):
        return require_id(v, info.field_name)

    @model_validator(mode="after")
    def validate_not_self_follow(self):
        ensure_different(self.follower_id, self.followee_id, "followee_id", "Users cannot follow themselves")
        return self

    @classmethod
    def create(cls, follower_id: str, followee_id: str, requires_approval: bool = False) -> "Follow":
        """
        Create a follow.

        Args:
            follower_id: User who follows
            followee_id: User being followed
            requires_approval: True leaves the follow pending until accepted

        Returns:
            Follow: Accepted follow, or a pending request when approval is required
        """
        now = utc_now()
        return cls(
            follower_id=follower_id,
            followee_id=followee_id,
            is_accepted=not requires_approval,
            accepted_at=None if requires_approval else now,
            created_at=now,
        )

    def accept(self) -> None:
        """Accept a pending follow request."""
        if self.is_accepted:
            raise InvalidOperationError(
                "Follow request is already accepted",
                operation="accept",
                entity_type="Follow",
                entity_id=self.id,
            )
        self.is_accepted = True
        self.accepted_at = utc_now()

    def reject(self) -> None:
        """
        Not a state transition. A rejected request is removed from storage,
        so this always raises.
        """
        raise InvalidOperationError(
            "To reject a follow request, delete the record",
            operation="reject",
            entity_type="Follow",
            entity_id=self.id,
        )

    def is_pending(self) -> bool:
        return not self.is_accepted
