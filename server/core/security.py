# server/core/security.py

import logging
import uuid
from datetime import datetime, timedelta, timezone
from fastapi import Request
from jose import JWTError, jwt
from jose.exceptions import JOSEError
from passlib.context import CryptContext

from core.config import Settings
from core.exceptions import AuthenticationError, TokenError


logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


class CredentialService:
    """
    Password hashing, user identifier generation and JWT handling.
    The bcrypt cost and the signing key come from `Settings` and are fixed
    for the lifetime of the process.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=settings.bcrypt_rounds,
        )

    def hash_password(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        if len(plain_password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            # never stored; bcrypt would truncate it to a prefix that might match
            self.dummy_verify()
            return False
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except ValueError:
            logger.warning("password could not be checked against the stored hash")
            return False

    def dummy_verify(self) -> None:
        """Spends the time of one verification without a stored hash."""
        self.pwd_context.dummy_verify()

    @staticmethod
    def new_user_id() -> str:
        return str(uuid.uuid4())

    def create_access_token(self, user_id: str, username: str,
                            expires_delta: timedelta | None = None) -> str:
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.settings.access_token_expire_minutes))
        to_encode = {
            "sub": user_id,
            "username": username,
            "iat": now,
            "exp": expire,
        }
        try:
            return jwt.encode(to_encode, self.settings.jwt_secret_key, algorithm=self.settings.jwt_algorithm)
        except JOSEError as e:
            raise TokenError(detail=f"token signing failed: {e}") from e

    def decode_access_token(self, token: str) -> str:
        """Validates signature and expiry and returns the user identifier."""
        credentials_error = AuthenticationError("could not validate credentials")
        try:
            payload = jwt.decode(token, self.settings.jwt_secret_key, algorithms=[self.settings.jwt_algorithm])
        except JWTError as e:
            credentials_error.detail = str(e)
            raise credentials_error from e

        user_id = payload.get("sub")
        if not user_id:
            raise credentials_error
        return user_id


def get_credentials(request: Request) -> CredentialService:
    return request.app.state.credentials
