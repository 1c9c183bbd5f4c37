# 📄 File: social_platform/modules/content/domain/models/media_attachment.py
# 🧭 Purpose (Layman Explanation):
# A photo, video or audio file attached to a post, along with optional extras such as
# a description for screen readers, its size on screen, its length and a preview image.
# 🧪 Purpose (Technical Summary):
# MediaAttachment value entity owned by a Post. Required url/file name/content type and a
# positive file size; optional descriptive fields validated when set (dimensions together and
# positive, duration positive, thumbnail non-blank). Content-type classification helpers.
# 🔗 Dependencies:
# pydantic, social_platform.shared.utils (validators, helpers, formatters)
# 🔄 Connected Modules / Calls From:
# post.py (attachment collection and post type derivation), post_service.py, post_repository_impl.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from social_platform.shared.core.exceptions import ValidationError
from social_platform.shared.utils.formatters import format_file_size
from social_platform.shared.utils.helpers import generate_uuid, utc_now
from social_platform.shared.utils.validators import optional_text, require_id, require_positive, require_text


class MediaAttachment(BaseModel):
    """
    Media file attached to a post.

    Everything except alt text, dimensions, duration and thumbnail is fixed
    at creation.
    """

    id: str = Field(default_factory=generate_uuid)
    post_id: str
    url: str
    file_name: str
    content_type: str
    file_size: int
    alt_text: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[int] = None  # seconds, audio/video only
    thumbnail_url: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("id", "post_id", mode="before")
    @classmethod
    def validate_ids(cls, v, info):
        return require_id(v, info.field_name)

    @field_validator("url", "file_name", "content_type", mode="before")
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name)

    @field_validator("file_size")
    @classmethod
    def validate_file_size(cls, v):
        return require_positive(v, "file_size")

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, v):
        if v is not None:
            require_positive(v, "duration")
        return v

    @model_validator(mode="after")
    def validate_dimensions(self):
        if self.width is None and self.height is None:
            return self
        self._check_dimensions(self.width, self.height)
        return self

    @staticmethod
    def _check_dimensions(width: Optional[int], height: Optional[int]) -> None:
        if width is None or height is None or width <= 0 or height <= 0:
            raise ValidationError(
                "Width and height must be positive values",
                field="width" if width is None or width <= 0 else "height",
                constraint="positive_pair",
            )

    # =========================================================================
    # DESCRIPTIVE FIELDS
    # =========================================================================

    def set_alt_text(self, alt_text: Optional[str]) -> None:
        self.alt_text = optional_text(alt_text)

    def set_dimensions(self, width: int, height: int) -> None:
        self._check_dimensions(width, height)
        self.width = width
        self.height = height

    def set_duration(self, duration: int) -> None:
        self.duration = require_positive(duration, "duration")

    def set_thumbnail_url(self, thumbnail_url: str) -> None:
        self.thumbnail_url = require_text(thumbnail_url, "thumbnail_url")

    # =========================================================================
    # CLASSIFICATION
    # =========================================================================

    @property
    def is_image(self) -> bool:
        return self.content_type.startswith("image/")

    @property
    def is_video(self) -> bool:
        return self.content_type.startswith("video/")

    @property
    def is_audio(self) -> bool:
        return self.content_type.startswith("audio/")

    @property
    def file_size_formatted(self) -> str:
        """File size for display, e.g. ``1.5 MB``."""
        return format_file_size(self.file_size)
