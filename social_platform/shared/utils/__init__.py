# 📄 File: social_platform/shared/utils/__init__.py
# 🧭 Purpose (Layman Explanation):
# Small helpers: clocks and ids, input checks, readable file sizes and log setup.
# 🧪 Purpose (Technical Summary):
# Utility package re-exporting helpers, validators, formatters and logging setup.
# 🔗 Dependencies:
# helpers.py, validators.py, formatters.py, logging.py
# 🔄 Connected Modules / Calls From:
# Domain models, services, application startup

from .helpers import age_on, as_utc, generate_uuid, next_timestamp, utc_now
from .validators import ensure_different, optional_text, require_id, require_positive, require_text
from .formatters import format_file_size
from .logging import get_logger, log_context, setup_logging

__all__ = [
    "utc_now",
    "generate_uuid",
    "next_timestamp",
    "age_on",
    "as_utc",
    "require_id",
    "ensure_different",
    "require_text",
    "optional_text",
    "require_positive",
    "format_file_size",
    "setup_logging",
    "get_logger",
    "log_context",
]
