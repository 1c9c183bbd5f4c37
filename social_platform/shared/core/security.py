# 📄 File: social_platform/shared/core/security.py
# 🧭 Purpose (Layman Explanation):
# Keeps passwords safe by scrambling them before they are stored, checks a typed
# password against the stored one, and creates the random strings used as tokens.
# 🧪 Purpose (Technical Summary):
# passlib bcrypt CryptContext wrapper for password hashing/verification plus
# cryptographically secure opaque token generation for refresh, reset and session tokens.
# 🔗 Dependencies:
# passlib (bcrypt), secrets, social_platform.shared.config.settings
# 🔄 Connected Modules / Calls From:
# user_service.py (registration), auth_token_service.py (login, reset, token issue)

"""
Password hashing and token generation.

Token *issuance mechanics* (JWT signing) are handled outside the domain
core; here we only produce opaque random strings that are persisted and
looked up verbatim.
"""

import logging
import secrets

from passlib.context import CryptContext

from social_platform.shared.config.settings import get_settings

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=get_settings().BCRYPT_ROUNDS,
)


def get_password_hash(password: str) -> str:
    """
    Hash a plain-text password with bcrypt.

    Args:
        password: Plain-text password

    Returns:
        str: Hashed password suitable for storage
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain-text password against its stored hash.

    Returns False instead of raising when the stored hash is malformed.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        logger.warning(f"Password verification failed on malformed hash: {e}")
        return False


def generate_secure_token(length: int = 32) -> str:
    """
    Generate cryptographically secure token.

    Args:
        length: Number of random bytes before URL-safe encoding

    Returns:
        Secure token string
    """
    return secrets.token_urlsafe(length)
