from fastapi import Depends, Request
from typing import Callable, Optional

from drivingschool.auth.session import Session, SessionStore
from drivingschool.config import settings
from drivingschool.errors import AuthenticationRequired, PermissionDenied
from drivingschool.schemas.user import Role

# Instance globale
session_store = SessionStore()

def get_session_store() -> SessionStore:
    return session_store

def get_token(request: Request) -> Optional[str]:
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip()
    return request.cookies.get(settings.SESSION_COOKIE_NAME)

def get_current_session(
    request: Request,
    store: SessionStore = Depends(get_session_store)
) -> Session:
    """Session courante, 401 si l'utilisateur n'est pas connecté"""
    session = store.get(get_token(request))
    if session is None:
        raise AuthenticationRequired()
    return session

def require_roles(*roles: Role) -> Callable[..., Session]:
    """Dépendance qui réserve une route à certains rôles"""
    def dependency(session: Session = Depends(get_current_session)) -> Session:
        if session.role not in roles:
            raise PermissionDenied()
        return session
    return dependency

require_admin = require_roles(Role.ADMIN)
