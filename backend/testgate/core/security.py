from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from testgate.core.config import settings


# Test passwords are short shared secrets handed out by a club admin.
test_password_context = CryptContext(schemes=['pbkdf2_sha256'], deprecated='auto')


class TokenDecodeError(Exception):
    pass


def hash_test_password(password: str) -> str:
    return test_password_context.hash(password)


def verify_test_password(password: str, hashed_password: str) -> bool:
    try:
        return test_password_context.verify(password, hashed_password)
    except (ValueError, TypeError):
        # Unrecognized or corrupt hash: treat as a mismatch.
        return False


def create_access_token(subject: str, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(UTC) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    payload = {'sub': subject, 'token_type': 'access', 'exp': expire}
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        raise TokenDecodeError('Invalid access token') from exc

    if payload.get('token_type') != 'access':
        raise TokenDecodeError('Unexpected token type for access token')
    return payload
