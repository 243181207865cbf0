# taskapi/api/auth.py

import logging
from pydantic import BaseModel
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from taskapi.database import get_db
from taskapi.core.errors import AuthenticationError
from taskapi.core.security import TokenService
from taskapi.core.users import authenticate, get_user, register_user
from taskapi.models.user import User as UserModel


logger = logging.getLogger(__name__)

router = APIRouter()


class Credentials(BaseModel):
    username: str
    password: str


class Token(BaseModel):
    token: str


class User(BaseModel):
    id: int
    username: str


# -------------------------------
# Authorization Gate
# -------------------------------

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="login", auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_current_user(
    token: str | None = Depends(oauth2_scheme),
    tokens: TokenService = Depends(get_token_service),
    db: Session = Depends(get_db),
) -> UserModel:
    """
    Resolves the caller from the bearer token.
    Every protected route depends on this; no handler code runs without it.
    """
    if not token:
        raise AuthenticationError("Not authenticated")

    identity = tokens.validate(token)
    user = get_user(db, identity.user_id)
    if user is None:
        logger.info("Rejected token for a user that no longer exists",
                    extra={"user_id": identity.user_id})
        raise AuthenticationError("Could not validate credentials")
    return user


# -------------------------------
# Endpoints
# -------------------------------

@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=User)
def register(creds: Credentials, response: Response, db: Session = Depends(get_db)):
    user = register_user(db, creds.username, creds.password)
    response.headers["Location"] = f"/users/{user.id}"
    return {"id": user.id, "username": user.username}


@router.post("/login", response_model=Token)
def login(
    creds: Credentials,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    user = authenticate(db, creds.username, creds.password)
    logger.info(f"User {user.username} logged in", extra={"user_id": user.id})
    return {"token": tokens.issue(user.id, user.username)}


@router.get("/me", response_model=User)
def read_users_me(current_user: UserModel = Depends(get_current_user)):
    return {"id": current_user.id, "username": current_user.username}
