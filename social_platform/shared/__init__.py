# 📄 File: social_platform/shared/__init__.py
# 🧭 Purpose (Layman Explanation):
# The toolbox every part of the platform borrows from: settings, error types, database plumbing
# and small helpers.
# 🧪 Purpose (Technical Summary):
# Shared kernel package. Subpackages are imported explicitly by the modules that need them.
# 🔗 Dependencies:
# config, core, infrastructure, utils subpackages
# 🔄 Connected Modules / Calls From:
# Every bounded context under social_platform.modules
