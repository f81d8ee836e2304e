from datetime import datetime, timedelta, timezone
from functools import lru_cache

from jose import JWTError, jwt
from passlib.context import CryptContext

from waasha.core.exceptions import InvalidTokenError


# =========================
# PASSWORD HASH
# =========================

# bcrypt only reads this many bytes of the password
BCRYPT_MAX_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > BCRYPT_MAX_BYTES


@lru_cache
def get_password_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def get_password_hash(password: str, rounds: int) -> str:
    return get_password_context(rounds).hash(password)


def verify_password(plain_password: str, hashed_password: str, rounds: int) -> bool:
    if password_too_long(plain_password):
        # could only match a hash of its truncated prefix
        return False

    try:
        return get_password_context(rounds).verify(plain_password, hashed_password)
    except ValueError:
        # stored value is not a recognizable bcrypt hash
        return False


# =========================
# JWT TOKEN
# =========================

def create_access_token(
    data: dict,
    secret_key: str,
    algorithm: str,
    expires_delta: timedelta,
) -> str:
    to_encode = data.copy()

    now = datetime.now(timezone.utc)
    to_encode.update({"iat": now, "exp": now + expires_delta})

    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


def decode_access_token(token: str, secret_key: str, algorithm: str) -> dict:
    """Returns the claims of a valid, unexpired token; InvalidTokenError otherwise."""
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError:
        raise InvalidTokenError()

    if payload.get("sub") is None:
        raise InvalidTokenError()

    return payload
