"""
Tests for the user management domain models.
"""
from datetime import date, timedelta

import pytest

from social_platform.modules.user_management.domain.models import Follow, User
from social_platform.shared.core.exceptions import InvalidOperationError, ValidationError
from social_platform.shared.utils.helpers import generate_uuid, utc_now
from tests.conftest import make_user


class TestUser:
    """Test the User entity."""

    def test_create_new_user(self):
        """Scenario: a freshly registered user keeps the given identity."""
        user = User.create_new_user("a@x.com", "a", "A", "hash")

        assert user.email == "a@x.com"
        assert user.username == "a"
        assert user.display_name == "A"
        assert user.is_private is False
        assert user.failed_login_attempts == 0
        assert user.id

    def test_identity_fields_are_normalized(self):
        user = User.create_new_user("  Alice@Example.COM ", " Alice ", "  Alice Smith ", "hash")

        assert user.email == "alice@example.com"
        assert user.username == "alice"
        assert user.display_name == "Alice Smith"

    @pytest.mark.parametrize("field", ["email", "username", "display_name", "password_hash"])
    def test_blank_required_field_rejected(self, field):
        values = {"email": "a@x.com", "username": "a", "display_name": "A", "password_hash": "hash"}
        values[field] = "   "

        with pytest.raises(ValidationError) as exc_info:
            User(**values)

        assert exc_info.value.field == field

    def test_malformed_email_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            User.create_new_user("not-an-email", "a", "A", "hash")
        assert exc_info.value.field == "email"

    def test_update_profile_keeps_display_name_when_blank(self):
        user = make_user(bio="old bio")
        previous_updated_at = user.updated_at

        user.update_profile(display_name="   ", bio="  new bio  ", website=None, location="Berlin")

        assert user.display_name == "Alice"
        assert user.bio == "new bio"
        assert user.website is None
        assert user.location == "Berlin"
        assert user.updated_at > previous_updated_at

    def test_birth_date_below_minimum_age_rejected(self):
        user = make_user()
        too_young = utc_now().date() - timedelta(days=365 * 5)

        with pytest.raises(ValidationError) as exc_info:
            user.set_birth_date(too_young)

        assert exc_info.value.field == "birth_date"
        assert user.birth_date is None

    def test_birth_date_accepted(self):
        user = make_user()
        user.set_birth_date(date(1990, 6, 15))
        assert user.birth_date == date(1990, 6, 15)

    def test_failed_logins_lock_account(self):
        user = make_user()

        for _ in range(4):
            user.record_failed_login(max_attempts=5, lockout_minutes=30)
        assert user.is_locked_out() is False

        user.record_failed_login(max_attempts=5, lockout_minutes=30)
        assert user.failed_login_attempts == 5
        assert user.is_locked_out() is True

        user.unlock_account()
        assert user.is_locked_out() is False
        assert user.failed_login_attempts == 0

    def test_successful_login_resets_failures(self):
        user = make_user()
        user.record_failed_login()
        user.record_successful_login()

        assert user.failed_login_attempts == 0
        assert user.last_login_at is not None

    def test_update_email_requires_new_confirmation(self):
        user = make_user()
        user.confirm_email()
        assert user.is_email_confirmed is True

        user.update_email("New@Example.com", confirmation_token="abc")

        assert user.email == "new@example.com"
        assert user.is_email_confirmed is False
        assert user.email_confirmation_token == "abc"


class TestFollow:
    """Test the Follow entity."""

    def test_self_follow_rejected(self):
        user_id = generate_uuid()
        with pytest.raises(ValidationError):
            Follow.create(user_id, user_id)

    def test_blank_ids_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Follow.create("", generate_uuid())
        assert exc_info.value.field == "follower_id"

    def test_follow_without_approval_is_accepted(self):
        follow = Follow.create(generate_uuid(), generate_uuid())

        assert follow.is_accepted is True
        assert follow.accepted_at is not None
        assert follow.is_pending() is False

    def test_follow_request_accept(self):
        """Scenario: a follow that needs approval starts pending and can be accepted."""
        u1 = User.create_new_user("u1@x.com", "u1", "U1", "hash")
        u2 = User.create_new_user("u2@x.com", "u2", "U2", "hash")

        follow = Follow.create(u1.id, u2.id, requires_approval=True)
        assert follow.is_accepted is False
        assert follow.accepted_at is None

        follow.accept()
        assert follow.is_accepted is True
        assert follow.accepted_at is not None

    def test_accept_twice_rejected(self):
        follow = Follow.create(generate_uuid(), generate_uuid())
        with pytest.raises(InvalidOperationError):
            follow.accept()

    def test_reject_always_raises(self):
        follow = Follow.create(generate_uuid(), generate_uuid(), requires_approval=True)
        with pytest.raises(InvalidOperationError):
            follow.reject()
        assert follow.is_pending() is True
