# 📄 File: social_platform/modules/user_management/domain/models/user.py
# 🧭 Purpose (Layman Explanation):
# Defines what a "user" is on the social platform - their login identity, public profile,
# privacy choice and the bookkeeping that protects their account from password guessing.
# 🧪 Purpose (Technical Summary):
# Domain model for the User entity enforcing field invariants at construction and on every
# mutation (lower-cased unique identity fields, required display name and password hash,
# minimum age), plus login lockout and email confirmation lifecycle methods.
# 🔗 Dependencies:
# pydantic, datetime, social_platform.shared.utils (validators, helpers)
# 🔄 Connected Modules / Calls From:
# user_service.py, auth_token_service.py, user_repository.py, user_repository_impl.py

from datetime import date, datetime, timedelta
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from social_platform.shared.config.settings import get_settings
from social_platform.shared.core.exceptions import ValidationError
from social_platform.shared.utils.helpers import age_on, generate_uuid, next_timestamp, utc_now
from social_platform.shared.utils.validators import optional_text, require_id, require_text


class User(BaseModel):
    """
    User domain model representing a registered member of the platform.

    Identity:
    - email and username are unique and case-insensitive, stored lower-cased
    - display_name is required and shown next to everything the user posts

    Profile:
    - bio, location, website, profile/cover images are optional free text
    - is_private makes every new follow request require approval
    - birth_date, when set, must imply an age of at least MIN_USER_AGE

    Account protection:
    - failed_login_attempts and lockout_end_at implement temporary lockout
    - email confirmation token/flag track address ownership

    Followers, following and authored posts are not collections on this
    object; they are queried through the follow and post repositories.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    # Identity
    id: str = Field(default_factory=generate_uuid)
    email: str
    username: str
    display_name: str
    password_hash: str

    # Public profile
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    profile_image_url: Optional[str] = None
    cover_image_url: Optional[str] = None
    is_private: bool = False
    is_verified: bool = False
    birth_date: Optional[date] = None

    # Authentication bookkeeping
    last_login_at: Optional[datetime] = None
    password_changed_at: Optional[datetime] = None
    failed_login_attempts: int = 0
    lockout_end_at: Optional[datetime] = None
    is_email_confirmed: bool = False
    email_confirmation_token: Optional[str] = None
    email_confirmed_at: Optional[datetime] = None
    two_factor_enabled: bool = False

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator("id", mode="before")
    @classmethod
    def validate_id(cls, v):
        return require_id(v, "id")

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, v):
        """Email is required and stored lower-case."""
        return cls._normalize_email(v)

    @field_validator("username", mode="before")
    @classmethod
    def validate_username(cls, v):
        """Username is required and stored lower-case."""
        return require_text(v, "username").lower()

    @field_validator("display_name", mode="before")
    @classmethod
    def validate_display_name(cls, v):
        return require_text(v, "display_name")

    @field_validator("password_hash", mode="before")
    @classmethod
    def validate_password_hash(cls, v):
        return require_text(v, "password_hash")

    @field_validator("birth_date")
    @classmethod
    def validate_birth_date(cls, v):
        if v is not None:
            cls._ensure_minimum_age(v)
        return v

    @staticmethod
    def _normalize_email(value: Optional[str]) -> str:
        email = require_text(value, "email").lower()
        local, _, domain = email.partition("@")
        if not local or not domain:
            raise ValidationError("email must be a valid email address", field="email", value=email)
        return email

    @staticmethod
    def _ensure_minimum_age(birth_date: date) -> None:
        minimum_age = get_settings().MIN_USER_AGE
        if age_on(birth_date, utc_now().date()) < minimum_age:
            raise ValidationError(
                f"User must be at least {minimum_age} years old",
                field="birth_date",
                value=birth_date.isoformat(),
                constraint=f"min_age_{minimum_age}",
            )

    # =========================================================================
    # FACTORY
    # =========================================================================

    @classmethod
    def create_new_user(
        cls,
        email: str,
        username: str,
        display_name: str,
        password_hash: str,
    ) -> "User":
        """
        Create a newly registered user.

        Args:
            email: Email address (case-insensitive)
            username: Username (case-insensitive)
            display_name: Name shown on the profile
            password_hash: Already hashed password

        Returns:
            User: New user instance
        """
        return cls(
            email=email,
            username=username,
            display_name=display_name,
            password_hash=password_hash,
        )

    # =========================================================================
    # PROFILE METHODS
    # =========================================================================

    def _touch(self) -> None:
        self.updated_at = next_timestamp(self.updated_at)

    def update_profile(
        self,
        display_name: Optional[str] = None,
        bio: Optional[str] = None,
        website: Optional[str] = None,
        location: Optional[str] = None,
    ) -> None:
        """
        Update public profile fields.

        A blank display name keeps the current one; the optional
        fields are replaced (None clears them).
        """
        if display_name is not None and display_name.strip():
            self.display_name = display_name.strip()
        self.bio = optional_text(bio)
        self.website = optional_text(website)
        self.location = optional_text(location)
        self._touch()

    def update_profile_image(self, image_url: Optional[str]) -> None:
        self.profile_image_url = optional_text(image_url)
        self._touch()

    def update_cover_image(self, image_url: Optional[str]) -> None:
        self.cover_image_url = optional_text(image_url)
        self._touch()

    def set_privacy_status(self, is_private: bool) -> None:
        self.is_private = is_private
        self._touch()

    def set_verification_status(self, is_verified: bool) -> None:
        self.is_verified = is_verified
        self._touch()

    def set_birth_date(self, birth_date: date) -> None:
        """Set the birth date; fails when the implied age is below the minimum."""
        self._ensure_minimum_age(birth_date)
        self.birth_date = birth_date
        self._touch()

    # =========================================================================
    # AUTHENTICATION METHODS
    # =========================================================================

    def update_password(self, password_hash: str) -> None:
        """Replace the password hash and clear any lockout."""
        self.password_hash = require_text(password_hash, "password_hash")
        self.password_changed_at = utc_now()
        self.failed_login_attempts = 0
        self.lockout_end_at = None
        self._touch()

    def update_email(self, email: str, confirmation_token: Optional[str] = None) -> None:
        """Change the email address; the new address starts unconfirmed."""
        self.email = self._normalize_email(email)
        self.is_email_confirmed = False
        self.email_confirmed_at = None
        self.email_confirmation_token = confirmation_token
        self._touch()

    def confirm_email(self) -> None:
        self.is_email_confirmed = True
        self.email_confirmed_at = utc_now()
        self.email_confirmation_token = None
        self._touch()

    def record_successful_login(self) -> None:
        self.last_login_at = utc_now()
        self.failed_login_attempts = 0
        self.lockout_end_at = None
        self._touch()

    def record_failed_login(self, max_attempts: int = 5, lockout_minutes: int = 30) -> None:
        """
        Count a failed login; reaching ``max_attempts`` locks the account
        for ``lockout_minutes``.
        """
        self.failed_login_attempts += 1
        if self.failed_login_attempts >= max_attempts:
            self.lockout_end_at = utc_now() + timedelta(minutes=lockout_minutes)
        self._touch()

    def is_locked_out(self) -> bool:
        return self.lockout_end_at is not None and self.lockout_end_at > utc_now()

    def unlock_account(self) -> None:
        self.failed_login_attempts = 0
        self.lockout_end_at = None
        self._touch()
