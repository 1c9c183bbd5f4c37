# 📄 File: social_platform/modules/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Groups the separate feature areas of the platform: accounts, content, messages and notifications.
#
# 🧪 Purpose (Technical Summary):
# Bounded-context package. Each context has domain (models, repositories, services),
# application (DTOs) and infrastructure (SQLAlchemy) layers.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - social_platform.shared.core.dependencies

"""
Feature Modules

- user_management: users, follows, auth tokens and sessions
- content: posts, media attachments, comments, likes, shares
- messaging: direct messages
- notifications: notifications and their lifecycle
"""
