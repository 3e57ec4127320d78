from fastapi import APIRouter, Depends
from typing import Any, Dict

from drivingschool.auth.dependencies import get_current_session
from drivingschool.auth.session import Session
from drivingschool.dashboards import dashboard_for
from drivingschool.db.supabase import SupabaseClient, get_supabase

router = APIRouter(prefix="/dashboard", tags=["Tableau de bord"])

@router.get("", response_model=Dict[str, Any])
async def dashboard(
    session: Session = Depends(get_current_session),
    db: SupabaseClient = Depends(get_supabase)
):
    """Tableau de bord selon le rôle de l'utilisateur connecté"""
    return await dashboard_for(session.role).dashboard(db, session)
