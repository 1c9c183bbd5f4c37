# 📄 File: social_platform/modules/user_management/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Everything about accounts: signing up, profiles, following people and staying signed in.
#
# 🧪 Purpose (Technical Summary):
# User Management bounded context package (domain, application and infrastructure layers).
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - social_platform.shared.core.dependencies
