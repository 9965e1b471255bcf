# marketplace/api/dependencies.py
from typing import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from marketplace.domain.enums import UserRole
from marketplace.domain.errors import AuthenticationError, ForbiddenError
from marketplace.domain.schemas import SessionOut
from marketplace.repos.user_repo import UserRepo
from marketplace.services.session_service import SessionService
from marketplace.utils.settings import SESSION_COOKIE_NAME


def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.db.session()
    try:
        yield db
    finally:
        db.close()


def get_session_service(request: Request) -> SessionService:
    return request.app.state.sessions


def get_current_session(
    request: Request,
    sessions: SessionService = Depends(get_session_service),
) -> SessionOut:
    session_id = request.cookies.get(SESSION_COOKIE_NAME)
    data = sessions.get(session_id) if session_id else None
    if not data:
        raise AuthenticationError()
    return SessionOut(**data)


def require_seller(
    current: SessionOut = Depends(get_current_session),
    db: Session = Depends(get_db),
) -> SessionOut:
    # role is read from the database; other sessions of the user may carry a stale one
    user = UserRepo(db).get_user(current.user_id)
    if not user or not UserRole(user.role).can_sell:
        raise ForbiddenError("Only sellers can do this")
    return current.model_copy(update={"role": user.role})
