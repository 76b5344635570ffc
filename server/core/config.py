# server/core/config.py

import os
from dotenv import load_dotenv
from pydantic import BaseModel, Field


load_dotenv()


DEFAULT_DATABASE_URL = "sqlite:///./data/app.db"


class Settings(BaseModel):
    """
    Process-wide configuration.
    Built once at startup and handed to the components that need it.
    """
    jwt_secret_key: str = Field(min_length=1)
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(default=60, gt=0)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    database_url: str = DEFAULT_DATABASE_URL
    log_level: str = "INFO"
    debug: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        secret_key = os.getenv("JWT_SECRET_KEY")
        if not secret_key:
            raise RuntimeError("JWT_SECRET_KEY is not set")

        return cls(
            jwt_secret_key=secret_key,
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60")),
            bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "12")),
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            debug=os.getenv("DEBUG", "false").lower() in ("1", "true", "yes"),
        )
