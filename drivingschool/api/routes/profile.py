from fastapi import APIRouter, Depends
from typing import Any, Dict

from drivingschool.auth.dependencies import get_current_session, get_session_store
from drivingschool.auth.session import Session, SessionStore
from drivingschool.crud import users
from drivingschool.dashboards import dashboard_for
from drivingschool.db.supabase import SupabaseClient, get_supabase
from drivingschool.errors import PortalError
from drivingschool.schemas.user import PasswordChangeRequest, ProfileUpdate, UserPublic

router = APIRouter(prefix="/profile", tags=["Profil"])

@router.get("", response_model=Dict[str, Any])
async def get_profile(
    session: Session = Depends(get_current_session),
    db: SupabaseClient = Depends(get_supabase)
):
    return await dashboard_for(session.role).profile(db, session)

@router.put("", response_model=UserPublic)
async def update_profile(
    request: ProfileUpdate,
    session: Session = Depends(get_current_session),
    db: SupabaseClient = Depends(get_supabase),
    store: SessionStore = Depends(get_session_store)
):
    """Mettre à jour ses coordonnées ; la session reflète le nouveau nom/email"""
    changes = request.model_dump(exclude_unset=True, mode="json")
    user = await dashboard_for(session.role).update_profile(db, session, changes)
    store.update_user(session.token, user)
    return user

@router.put("/password")
async def change_password(
    request: PasswordChangeRequest,
    session: Session = Depends(get_current_session),
    db: SupabaseClient = Depends(get_supabase)
):
    if request.new_password != request.confirm_password:
        raise PortalError("Les mots de passe ne correspondent pas")
    await users.change_password(db, session.user.id, request.current_password, request.new_password)
    return {"success": True, "message": "Mot de passe modifié avec succès"}
