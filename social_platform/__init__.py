# 📄 File: social_platform/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# The top of the social platform's code: people, posts, likes, comments, private messages and
# notifications, with the rules about who may see and change what.
#
# 🧪 Purpose (Technical Summary):
# Root package of the social platform core (domain models, repository contracts, SQLAlchemy
# persistence and domain services organized as bounded contexts).
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - Hosting application, tests

__version__ = "1.0.0"
__title__ = "Social Platform Core"
__description__ = "Domain model and service layer for a social media platform"
