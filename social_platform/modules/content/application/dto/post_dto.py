# 📄 File: social_platform/modules/content/application/dto/post_dto.py
# 🧭 Purpose (Layman Explanation):
# The shapes of data going into and out of the post features: a description of a file to
# attach, and the like/comment/share/reply numbers for a post.
#
# 🧪 Purpose (Technical Summary):
# Content data transfer objects: MediaAttachmentInput (input for media posts, consumed by
# Post.create_with_media) and PostStatsDTO (engagement aggregation from PostService).
#
# 🔗 Dependencies:
# - pydantic for DTO validation and serialization
#
# 🔄 Connected Modules / Calls From:
# - post_service.py (create_media_post, add_media_attachment, get_post_stats)

from pydantic import BaseModel, Field


class MediaAttachmentInput(BaseModel):
    """
    A file to attach to a post.

    Field constraints are re-checked by the MediaAttachment entity, which
    raises the platform ValidationError naming the offending field.
    """

    url: str = Field(..., description="Public URL of the uploaded file", examples=["https://cdn.example.com/a.jpg"])
    file_name: str = Field(..., description="Original file name", examples=["a.jpg"])
    content_type: str = Field(..., description="MIME type", examples=["image/jpeg"])
    file_size: int = Field(..., description="Size in bytes", examples=[204800])


class PostStatsDTO(BaseModel):
    """Engagement counters for one post."""

    post_id: str = Field(..., description="Post the counters belong to")
    likes_count: int = Field(default=0, ge=0)
    comments_count: int = Field(default=0, ge=0)
    shares_count: int = Field(default=0, ge=0)
    replies_count: int = Field(default=0, ge=0)

    @property
    def total_engagement(self) -> int:
        return self.likes_count + self.comments_count + self.shares_count + self.replies_count
