"""Legacy Auth — password hashing, JWT issue/verify and credential validation.

Invariants:
    - Tokens are HS256 JWTs over {id, email} signed with TOKEN_SECRET
    - Session tokens expire after TOKEN_EXPIRE_HOURS, reset tokens after
      RESET_TOKEN_EXPIRE_HOURS
    - decode_token verifies signature and expiry; any failure yields None
    - Passwords are stored as bcrypt hashes; a valid password encodes to at
      most MAX_PASSWORD_BYTES (bcrypt input limit)

Design Decisions:
    - bcrypt used directly (no passlib wrapper): one scheme, no migration needs
    - Validators return an error map instead of raising: resolvers decide the
      GraphQL error message that wraps them
"""

import logging
import re
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from pvs_api.config import get_settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

VALID_EMAIL = re.compile(
    r"^([0-9a-zA-Z]([-.\w]*[0-9a-zA-Z])*@([0-9a-zA-Z][-\w]*[0-9a-zA-Z]\.)+[a-zA-Z]{2,9})$",
)
VALID_PASSWORD = re.compile(
    r"^(?=.*\d)(?=.*[a-z])(?=.*[A-Z])(?=.*[!@#$%^&*]).{8,}$",
)
MAX_PASSWORD_BYTES = 72


# ─── Passwords ──────────────────────────────────────────────────

def is_valid_password(password: str) -> bool:
    return (
        VALID_PASSWORD.match(password) is not None
        and len(password.encode()) <= MAX_PASSWORD_BYTES
    )


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), hashed.encode())
    except ValueError:
        return False


# ─── Tokens ─────────────────────────────────────────────────────

def _encode(user_id: str, email: str, hours: int) -> str:
    payload = {
        "id": user_id,
        "email": email,
        "exp": datetime.now(timezone.utc) + timedelta(hours=hours),
    }
    return jwt.encode(payload, get_settings().token_secret, algorithm=ALGORITHM)


def create_token(user_id: str, email: str) -> str:
    return _encode(user_id, email, get_settings().token_expire_hours)


def create_reset_token(user_id: str, email: str) -> str:
    return _encode(user_id, email, get_settings().reset_token_expire_hours)


def decode_token(token: str) -> dict | None:
    try:
        return jwt.decode(
            token, get_settings().token_secret, algorithms=[ALGORITHM],
        )
    except jwt.ExpiredSignatureError:
        logger.info("Legacy token expired")
        return None
    except jwt.InvalidTokenError:
        return None


def user_from_header(authorization: str | None) -> dict | None:
    """Decode an `Authorization: Bearer <jwt>` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return decode_token(token.strip())


# ─── Validation ─────────────────────────────────────────────────

def validate_registration(email: str, password: str) -> dict[str, str]:
    errors = {}
    if not email.strip():
        errors["email"] = "Email is required"
    elif not VALID_EMAIL.match(email):
        errors["email"] = "Invalid email"
    if not password.strip():
        errors["password"] = "A password is required"
    elif not is_valid_password(password):
        errors["password"] = "Invalid password"
    return errors


def validate_login(email: str, password: str) -> dict[str, str]:
    errors = {}
    if not email.strip():
        errors["email"] = "Email is required"
    if not password.strip():
        errors["password"] = "A password is required"
    return errors
