# server/api/auth.py

import logging
from pydantic import BaseModel, Field, field_validator
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.exceptions import AuthenticationError
from core.repository import UserRepository
from core.security import MAX_PASSWORD_BYTES, CredentialService, get_credentials
from database import get_db
from models.user import User as UserModel


logger = logging.getLogger(__name__)

router = APIRouter()


# -------------------------------
# Request / Response Models
# -------------------------------

class Credentials(BaseModel):
    username: str = Field(min_length=1, max_length=150)
    password: str = Field(min_length=1)

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("username must not be blank")
        return value


class SignupRequest(Credentials):
    @field_validator("password")
    @classmethod
    def password_storable(cls, value: str) -> str:
        if "\x00" in value:
            raise ValueError("password must not contain NUL characters")
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class LoginRequest(Credentials):
    pass


class SignupResponse(BaseModel):
    status: str


class Token(BaseModel):
    token: str
    token_type: str = "bearer"


# -------------------------------
# Account Operations
# -------------------------------

def register_user(repo: UserRepository, credentials: CredentialService, payload: SignupRequest) -> UserModel:
    """
    Hashes the password, assigns a fresh identifier and stores the user.
    A duplicate username is reported by the store as a conflict.
    """
    user = UserModel(
        id=credentials.new_user_id(),
        username=payload.username,
        hashed_password=credentials.hash_password(payload.password),
    )
    return repo.create(user)


def authenticate_user(repo: UserRepository, credentials: CredentialService, username: str, password: str) -> UserModel:
    user = repo.find_by_username(username)
    if user is None:
        credentials.dummy_verify()
        raise AuthenticationError(detail=f"unknown username {username!r}")
    if not credentials.verify_password(password, user.hashed_password):
        raise AuthenticationError(detail=f"password mismatch for user_id={user.id}")
    return user


# -------------------------------
# Endpoints
# -------------------------------

@router.post("/signup", response_model=SignupResponse)
def signup(
    payload: SignupRequest,
    db: Session = Depends(get_db),
    credentials: CredentialService = Depends(get_credentials),
):
    user = register_user(UserRepository(db), credentials, payload)
    logger.info("signup success: user_id=%s", user.id)
    return {"status": "succeeded"}


@router.post("/login", response_model=Token)
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    credentials: CredentialService = Depends(get_credentials),
):
    user = authenticate_user(UserRepository(db), credentials, payload.username, payload.password)
    logger.info("login success: user_id=%s", user.id)
    token = credentials.create_access_token(user.id, user.username)
    return {"token": token, "token_type": "bearer"}
