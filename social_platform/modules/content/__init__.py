# 📄 File: social_platform/modules/content/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Everything people publish and react to: posts, photos and videos, comments, likes and shares.
#
# 🧪 Purpose (Technical Summary):
# Content bounded context package (domain, application and infrastructure layers).
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - social_platform.shared.core.dependencies
