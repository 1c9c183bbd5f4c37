"""
Tests for pagination normalization and shared validators.
"""
import pytest

from social_platform.shared.core.exceptions import ValidationError
from social_platform.shared.core.pagination import PageRequest, normalize_pagination, page_to_offset
from social_platform.shared.utils.formatters import format_file_size
from social_platform.shared.utils.validators import optional_text, require_id, require_positive, require_text


class TestNormalizePagination:
    """Test limit/offset normalization."""

    @pytest.mark.parametrize("limit", [0, -1, None])
    def test_non_positive_limit_uses_default(self, limit):
        assert normalize_pagination(limit, 0) == PageRequest(limit=20, offset=0)

    @pytest.mark.parametrize("limit", [0, -1])
    def test_listing_specific_default(self, limit):
        assert normalize_pagination(limit, 0, 50).limit == 50

    def test_negative_offset_clamped(self):
        assert normalize_pagination(10, -5) == PageRequest(limit=10, offset=0)

    def test_limit_capped(self):
        assert normalize_pagination(10_000, 40).limit == 100

    def test_valid_values_unchanged(self):
        assert normalize_pagination(15, 30) == PageRequest(limit=15, offset=30)

    @pytest.mark.parametrize("page, expected", [(1, 0), (3, 40), (0, 0), (-2, 0)])
    def test_page_to_offset(self, page, expected):
        assert page_to_offset(page, 20) == expected


class TestValidators:
    """Test shared input validators."""

    def test_require_id(self):
        assert require_id("abc", "user_id") == "abc"
        with pytest.raises(ValidationError) as exc_info:
            require_id("  ", "user_id")
        assert exc_info.value.field == "user_id"
        assert exc_info.value.details["constraint"] == "required"

    def test_require_text_trims(self):
        assert require_text("  hi  ", "content") == "hi"
        with pytest.raises(ValidationError):
            require_text(None, "content")

    def test_optional_text(self):
        assert optional_text("  ") is None
        assert optional_text(None) is None
        assert optional_text(" x ") == "x"

    def test_require_positive(self):
        assert require_positive(3, "file_size") == 3
        with pytest.raises(ValidationError):
            require_positive(0, "file_size")

    @pytest.mark.parametrize(
        "size, expected",
        [(512, "512 B"), (1024, "1.0 KB"), (1536, "1.5 KB"), (5 * 1024 * 1024, "5.0 MB")],
    )
    def test_format_file_size(self, size, expected):
        assert format_file_size(size) == expected
