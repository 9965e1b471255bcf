# marketplace/api/routers/auth.py
from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from marketplace.api.dependencies import get_db, get_session_service
from marketplace.data.models.user import UserModel
from marketplace.domain.errors import AuthenticationError
from marketplace.domain.schemas import LoginIn, MessageOut, RegisterIn, SessionOut
from marketplace.services.session_service import SessionService
from marketplace.services.user_service import UserService
from marketplace.utils.settings import (
    SESSION_COOKIE_NAME,
    SESSION_COOKIE_SECURE,
    SESSION_TTL_SECONDS,
)

router = APIRouter(tags=["auth"])


def start_session(response: Response, sessions: SessionService, user: UserModel) -> SessionOut:
    current = SessionOut(user_id=user.id, username=user.username, role=user.role)
    session_id = sessions.create(current.model_dump(mode="json"))
    response.set_cookie(
        SESSION_COOKIE_NAME,
        session_id,
        max_age=SESSION_TTL_SECONDS,
        httponly=True,
        samesite="lax",
        secure=SESSION_COOKIE_SECURE,
    )
    return current


@router.post("/register", response_model=SessionOut, status_code=201)
def register(
    payload: RegisterIn,
    response: Response,
    db: Session = Depends(get_db),
    sessions: SessionService = Depends(get_session_service),
):
    user = UserService(db).register(payload.username, payload.password, payload.email, payload.role)
    return start_session(response, sessions, user)


@router.post("/login", response_model=SessionOut)
def login(
    payload: LoginIn,
    response: Response,
    db: Session = Depends(get_db),
    sessions: SessionService = Depends(get_session_service),
):
    user = UserService(db).authenticate(payload.username, payload.password)
    if not user:
        raise AuthenticationError("Invalid credentials")
    return start_session(response, sessions, user)


@router.post("/logout", response_model=MessageOut)
def logout(
    request: Request,
    response: Response,
    sessions: SessionService = Depends(get_session_service),
):
    session_id = request.cookies.get(SESSION_COOKIE_NAME)
    if session_id:
        sessions.destroy(session_id)
    response.delete_cookie(SESSION_COOKIE_NAME)
    return {"message": "Logged out successfully"}
