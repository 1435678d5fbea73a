from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Annotated, Optional, Tuple
import jwt
from fastapi import Depends, Request
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from ..core.config import Settings
from ..core.exceptions import AuthError, ConflictError, ValidationError
from ..db.models.user import User
from ..schemas.user import LoginRequest, RegisterRequest
from ..utils.logger import get_logger

logger = get_logger(__name__)

JWT_ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

# Verified against when no account matches the submitted email
DUMMY_PASSWORD_HASH = pwd_context.hash("taskboard-placeholder-password")


@dataclass(frozen=True)
class AuthContext:
    """Identity resolved from a verified session token."""

    id: int
    email: str
    name: Optional[str]
    issued_at: int
    expires_at: int

    def claims(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "iat": self.issued_at,
            "exp": self.expires_at,
        }


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    return pwd_context.verify(password, hashed_password)


def create_session_token(user: User, settings: Settings) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "iat": now,
        "exp": now + timedelta(hours=settings.token_expire_hours),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=JWT_ALGORITHM)


def verify_session(token: Optional[str], settings: Settings) -> AuthContext:
    if not token:
        raise AuthError("Unauthorized")

    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired session token")
        raise AuthError("Invalid token")
    except jwt.InvalidTokenError:
        logger.warning("Rejected malformed session token")
        raise AuthError("Invalid token")

    try:
        return AuthContext(
            id=int(payload["id"]),
            email=str(payload["email"]),
            name=payload.get("name"),
            issued_at=int(payload["iat"]),
            expires_at=int(payload["exp"]),
        )
    except (KeyError, TypeError, ValueError):
        logger.warning("Session token is missing identity claims")
        raise AuthError("Invalid token")


class AuthService:
    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings

    def register(self, data: RegisterRequest) -> User:
        if not data.email or not data.password:
            raise ValidationError("Email and password required")

        existing = self.db.query(User).filter(User.email == data.email).first()
        if existing:
            logger.warning(f"Registration rejected, email already in use: {data.email}")
            raise ConflictError("Email already exists")

        user = User(
            email=data.email,
            password=hash_password(data.password),
            name=data.name or data.email.split("@")[0],
        )

        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except IntegrityError:
            # Lost a race against a concurrent registration for the same email
            self.db.rollback()
            logger.warning(f"Registration rejected, email already in use: {data.email}")
            raise ConflictError("Email already exists")
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error registering user {data.email}: {e}")
            raise

        logger.info(f"User registered: {user.id}")
        return user

    def login(self, data: LoginRequest) -> Tuple[User, str]:
        user = None
        if data.email:
            user = self.db.query(User).filter(User.email == data.email).first()

        # Unknown emails still pay for one hash so both failures take as long
        stored_hash = user.password if user else DUMMY_PASSWORD_HASH
        password_ok = verify_password(data.password or "", stored_hash)

        if not user or not data.password or not password_ok:
            logger.warning(f"Failed login attempt for {data.email}")
            raise AuthError("Invalid credentials")

        token = create_session_token(user, self.settings)
        logger.info(f"User logged in: {user.id}")
        return user, token


def get_current_user(request: Request) -> AuthContext:
    settings: Settings = request.app.state.settings
    token = request.cookies.get(settings.cookie_name)
    return verify_session(token, settings)


user_dependency = Annotated[AuthContext, Depends(get_current_user)]
