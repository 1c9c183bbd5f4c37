# 📄 File: social_platform/modules/notifications/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# The alerts users receive when something happens to them or their posts.
#
# 🧪 Purpose (Technical Summary):
# Notifications bounded context package (domain, application and infrastructure layers).
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - social_platform.shared.core.dependencies
