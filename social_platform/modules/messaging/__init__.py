# 📄 File: social_platform/modules/messaging/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Private one-to-one messages between users.
#
# 🧪 Purpose (Technical Summary):
# Messaging bounded context package (domain, application and infrastructure layers).
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - social_platform.shared.core.dependencies
