# 📄 File: social_platform/modules/user_management/application/__init__.py
# 🧭 Purpose (Layman Explanation):
# Shapes of data handed in and out of the user_management services.
# 🧪 Purpose (Technical Summary):
# Application layer package holding data transfer objects.
# 🔗 Dependencies:
# dto subpackage
# 🔄 Connected Modules / Calls From:
# Domain services, transport layer
