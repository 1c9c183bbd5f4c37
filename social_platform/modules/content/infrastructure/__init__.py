# 📄 File: social_platform/modules/content/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# How the Content area talks to the database.
# 🧪 Purpose (Technical Summary):
# Infrastructure layer package for the Content context.
# 🔗 Dependencies:
# database subpackage
# 🔄 Connected Modules / Calls From:
# social_platform.shared.core.dependencies
