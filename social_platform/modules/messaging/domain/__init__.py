# 📄 File: social_platform/modules/messaging/domain/__init__.py
# 🧭 Purpose (Layman Explanation):
# The rules of the Messaging area, independent of how data is stored.
# 🧪 Purpose (Technical Summary):
# Domain layer package: entities (models), repository contracts and domain services.
# 🔗 Dependencies:
# models, repositories, services subpackages
# 🔄 Connected Modules / Calls From:
# Infrastructure layer, composition root
