from fastapi import APIRouter, Depends, Request, Response, status
import logging

from drivingschool.auth.dependencies import get_current_session, get_session_store, get_token
from drivingschool.auth.session import Session, SessionStore
from drivingschool.config import settings
from drivingschool.crud import users
from drivingschool.db.supabase import SupabaseClient, get_supabase
from drivingschool.schemas.user import LoginRequest, RegisterRequest, SessionResponse, UserPublic

router = APIRouter(prefix="/auth", tags=["Authentification"])
logger = logging.getLogger(__name__)

def _start_session(response: Response, store: SessionStore, user: UserPublic, message: str) -> SessionResponse:
    session = store.open(user)
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        session.token,
        httponly=True,
        samesite="lax",
        secure=settings.ENVIRONMENT == "production"
    )
    return SessionResponse(token=session.token, user=user, message=message)

@router.post("/login", response_model=SessionResponse)
async def login(
    request: LoginRequest,
    response: Response,
    db: SupabaseClient = Depends(get_supabase),
    store: SessionStore = Depends(get_session_store)
):
    """Connexion par email et mot de passe"""
    user = await users.authenticate(db, request.email, request.password)
    logger.info(f"Connexion de {user.id} ({user.role.value})")
    return _start_session(response, store, user, "Connexion réussie !")

@router.post("/register", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    response: Response,
    db: SupabaseClient = Depends(get_supabase),
    store: SessionStore = Depends(get_session_store)
):
    """Inscription d'un élève ; l'utilisateur est connecté directement"""
    user = await users.register(db, request.name, request.email, request.password)
    return _start_session(response, store, user, "Inscription réussie !")

@router.post("/logout")
async def logout(
    request: Request,
    response: Response,
    store: SessionStore = Depends(get_session_store)
):
    store.close(get_token(request))
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"success": True, "message": "Déconnexion réussie"}

@router.get("/me", response_model=UserPublic)
async def me(session: Session = Depends(get_current_session)):
    return session.user
