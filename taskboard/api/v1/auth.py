from fastapi import APIRouter, HTTPException, Request, Response
from starlette.concurrency import run_in_threadpool
from ...core.config import Settings
from ...core.exceptions import TaskboardError
from ...db.base import db_dependency
from ...schemas.user import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    SessionClaims,
    UserResponse,
)
from ...schemas.task import SuccessResponse
from ...services.auth import AuthService, user_dependency
from ...utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix='/api', tags=['auth'])


def _cookie_options(settings: Settings) -> dict:
    return {
        "key": settings.cookie_name,
        "httponly": True,
        "secure": settings.cookie_secure,
        "samesite": settings.cookie_samesite,
    }


@router.post("/register", response_model=RegisterResponse)
async def register(data: RegisterRequest, request: Request, db: db_dependency):
    try:
        auth_service = AuthService(db, request.app.state.settings)
        # Password hashing is CPU bound, keep it off the event loop
        user = await run_in_threadpool(auth_service.register, data)
        return {"id": user.id}
    except TaskboardError:
        raise
    except Exception as e:
        logger.error(f"Registration failed: {e}")
        raise HTTPException(status_code=500, detail="Registration failed")


@router.post("/login", response_model=UserResponse)
async def login(data: LoginRequest, request: Request, response: Response, db: db_dependency):
    settings: Settings = request.app.state.settings
    try:
        auth_service = AuthService(db, settings)
        user, token = await run_in_threadpool(auth_service.login, data)
    except TaskboardError:
        raise
    except Exception as e:
        logger.error(f"Login failed: {e}")
        raise HTTPException(status_code=500, detail="Login failed")

    response.set_cookie(
        value=token,
        max_age=settings.token_expire_hours * 3600,
        **_cookie_options(settings),
    )
    return user


@router.post("/logout", response_model=SuccessResponse)
async def logout(request: Request, response: Response):
    response.delete_cookie(**_cookie_options(request.app.state.settings))
    return {"success": True}


@router.get("/me", response_model=SessionClaims)
async def me(user: user_dependency):
    return user.claims()
