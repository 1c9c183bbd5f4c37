# 📄 File: social_platform/modules/notifications/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# How the Notifications area talks to the database.
# 🧪 Purpose (Technical Summary):
# Infrastructure layer package for the Notifications context.
# 🔗 Dependencies:
# database subpackage
# 🔄 Connected Modules / Calls From:
# social_platform.shared.core.dependencies
