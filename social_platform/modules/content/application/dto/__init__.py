# 📄 File: social_platform/modules/content/application/dto/__init__.py
# 🧭 Purpose (Layman Explanation):
# Shapes of data for posts going in and statistics coming out.
# 🧪 Purpose (Technical Summary):
# Content data transfer objects.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# post_service.py, transport layer

from .post_dto import MediaAttachmentInput, PostStatsDTO

__all__ = ["MediaAttachmentInput", "PostStatsDTO"]
