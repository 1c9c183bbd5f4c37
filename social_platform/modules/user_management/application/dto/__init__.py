# 📄 File: social_platform/modules/user_management/application/dto/__init__.py
# 🧭 Purpose (Layman Explanation):
# Ready-to-send summaries of user data.
# 🧪 Purpose (Technical Summary):
# User management data transfer objects.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# user_service.py, transport layer

from .user_dto import UserProfileDTO, UserStatsDTO

__all__ = ["UserProfileDTO", "UserStatsDTO"]
