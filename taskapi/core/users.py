# taskapi/core/users.py

import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from taskapi.core.errors import AuthenticationError, ConflictError, ValidationError
from taskapi.core.security import dummy_password_hash, get_password_hash, verify_password
from taskapi.models.user import User


logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6
MAX_USER_ID = 2**63 - 1


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()


def register_user(db: Session, username: str, password: str) -> User:
    """
    Creates a user after checking lengths and username uniqueness.
    The password is stored only as a salted hash.
    """
    username = username.strip()
    if len(username) < MIN_USERNAME_LENGTH or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Username >= {MIN_USERNAME_LENGTH}, Password >= {MIN_PASSWORD_LENGTH}"
        )

    if get_user_by_username(db, username):
        raise ConflictError("Username already exists")

    user = User(username=username, hashed_password=get_password_hash(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race against a concurrent registration
        db.rollback()
        raise ConflictError("Username already exists")

    logger.info(f"Registered user {username}", extra={"user_id": user.id})
    return user


def authenticate(db: Session, username: str, password: str) -> User:
    """
    Returns the user for a correct username/password pair.
    Unknown usernames and wrong passwords fail identically.
    """
    user = get_user_by_username(db, username)
    if user is None:
        verify_password(password, dummy_password_hash())
        ok = False
    else:
        ok = verify_password(password, user.hashed_password)

    if not ok:
        logger.info(f"Failed login for {username!r}")
        raise AuthenticationError("Incorrect username or password")
    return user


def get_user(db: Session, user_id: int) -> User | None:
    if not 1 <= user_id <= MAX_USER_ID:
        return None
    return db.get(User, user_id)
