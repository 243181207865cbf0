# taskapi/core/security.py

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from jose import JWTError, jwt
from passlib.context import CryptContext
from taskapi.core.config import Settings
from taskapi.core.errors import AuthenticationError


logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# -------------------------------
# Passwords
# -------------------------------

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # unrecognised or corrupt digest
        return False


@lru_cache
def dummy_password_hash() -> str:
    """
    Hash checked against when a login names an unknown user,
    so both failure paths do the same amount of work.
    """
    return pwd_context.hash("not-a-real-password")


# -------------------------------
# Tokens
# -------------------------------

@dataclass(frozen=True)
class TokenIdentity:
    user_id: int
    username: str


class TokenService:
    """
    Issues and validates signed bearer tokens.
    Tokens are stateless: a valid token stays valid until it expires.
    """

    def __init__(self, settings: Settings):
        self._key = settings.jwt_secret_key
        self._issuer = settings.jwt_issuer
        self._audience = settings.jwt_audience
        self._lifetime = timedelta(hours=settings.access_token_expire_hours)
        self._leeway = settings.clock_skew_seconds

    def issue(self, user_id: int, username: str) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "name": username,
            "iss": self._issuer,
            "aud": self._audience,
            "iat": now,
            "nbf": now,
            "exp": now + self._lifetime,
        }
        return jwt.encode(claims, self._key, algorithm=ALGORITHM)

    def validate(self, token: str) -> TokenIdentity:
        credentials_exception = AuthenticationError("Could not validate credentials")
        try:
            payload = jwt.decode(
                token,
                self._key,
                algorithms=[ALGORITHM],
                audience=self._audience,
                issuer=self._issuer,
                options={
                    "leeway": self._leeway,
                    "require_exp": True,
                    "require_nbf": True,
                    "require_sub": True,
                    "require_aud": True,
                    "require_iss": True,
                },
            )
        except JWTError as e:
            logger.info(f"Rejected token: {e}")
            raise credentials_exception

        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError):
            logger.info("Rejected token: non-numeric subject")
            raise credentials_exception

        return TokenIdentity(user_id=user_id, username=payload.get("name", ""))
