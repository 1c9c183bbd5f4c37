# 📄 File: social_platform/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Holds the settings that tell the platform how to reach its database
# and which limits (page sizes, lockouts, retention) to apply.
#
# 🧪 Purpose (Technical Summary):
# Configuration package initialization exporting the Settings model and its cached factory.
#
# 🔗 Dependencies:
# - settings.py (application settings)
#
# 🔄 Connected Modules / Calls From:
# - Infrastructure components and domain services

from .settings import get_settings, Settings

__all__ = [
    "get_settings",
    "Settings",
]
