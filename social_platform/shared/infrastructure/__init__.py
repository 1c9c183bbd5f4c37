# 📄 File: social_platform/shared/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# Shared plumbing that talks to the outside world, currently the database.
# 🧪 Purpose (Technical Summary):
# Shared infrastructure package.
# 🔗 Dependencies:
# database subpackage
# 🔄 Connected Modules / Calls From:
# Module infrastructure layers
