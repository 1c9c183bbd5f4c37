# 📄 File: social_platform/modules/user_management/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# How the User Management area talks to the database.
# 🧪 Purpose (Technical Summary):
# Infrastructure layer package for the User Management context.
# 🔗 Dependencies:
# database subpackage
# 🔄 Connected Modules / Calls From:
# social_platform.shared.core.dependencies
