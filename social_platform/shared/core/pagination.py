# 📄 File: social_platform/shared/core/pagination.py
# 🧭 Purpose (Layman Explanation):
# Makes sure every "give me a page of results" request asks for a sensible amount,
# so nobody accidentally loads a million posts or asks for page minus five.
# 🧪 Purpose (Technical Summary):
# Limit/offset normalization shared by every paginated service method: non-positive
# limits fall back to the listing's default, negative offsets clamp to zero and
# limits are capped at MAX_PAGE_SIZE.
# 🔗 Dependencies:
# social_platform.shared.config.settings
# 🔄 Connected Modules / Calls From:
# Post, comment, like, share, user, message and notification services

from typing import NamedTuple, Optional

from social_platform.shared.config.settings import get_settings


class PageRequest(NamedTuple):
    """Normalized pagination window."""
    limit: int
    offset: int


def normalize_pagination(
    limit: Optional[int],
    offset: Optional[int],
    default_limit: Optional[int] = None,
) -> PageRequest:
    """
    Normalize a requested page window.

    Args:
        limit: Requested page size; ``None`` or ``<= 0`` selects the default
        offset: Requested offset; ``None`` or negative becomes 0
        default_limit: Listing default, DEFAULT_PAGE_SIZE when omitted

    Returns:
        PageRequest: Safe limit/offset pair
    """
    settings = get_settings()
    if default_limit is None:
        default_limit = settings.DEFAULT_PAGE_SIZE

    if limit is None or limit <= 0:
        limit = default_limit
    limit = min(limit, settings.MAX_PAGE_SIZE)

    if offset is None or offset < 0:
        offset = 0

    return PageRequest(limit=limit, offset=offset)


def page_to_offset(page: int, page_size: int) -> int:
    """Convert a 1-based page number into a row offset."""
    return (max(page, 1) - 1) * page_size
