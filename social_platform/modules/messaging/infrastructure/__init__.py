# 📄 File: social_platform/modules/messaging/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# How the Messaging area talks to the database.
# 🧪 Purpose (Technical Summary):
# Infrastructure layer package for the Messaging context.
# 🔗 Dependencies:
# database subpackage
# 🔄 Connected Modules / Calls From:
# social_platform.shared.core.dependencies
