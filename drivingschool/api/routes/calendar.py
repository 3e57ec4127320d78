from fastapi import APIRouter, Depends, Query
from datetime import date
from typing import Optional

from drivingschool.auth.dependencies import get_current_session
from drivingschool.auth.session import Session
from drivingschool.core.calendar import today
from drivingschool.crud import lessons
from drivingschool.dashboards import dashboard_for
from drivingschool.db.supabase import SupabaseClient, get_supabase
from drivingschool.errors import PermissionDenied
from drivingschool.schemas.lesson import LessonResponse, WeekSchedule
from drivingschool.schemas.user import Role

router = APIRouter(prefix="/calendar", tags=["Calendrier"])

def _owns(session: Session, lesson: LessonResponse) -> bool:
    if session.role == Role.ADMIN:
        return True
    if session.role == Role.INSTRUCTOR:
        return lesson.instructor_id == session.user.id
    return lesson.student_id == session.user.id

@router.get("/week", response_model=WeekSchedule)
async def my_week(
    week_of: Optional[date] = Query(None, alias="date"),
    session: Session = Depends(get_current_session),
    db: SupabaseClient = Depends(get_supabase)
):
    """Semaine de l'utilisateur connecté (toutes les leçons pour un administrateur)"""
    reference = week_of or today()
    return await dashboard_for(session.role).calendar(db, session, reference)

@router.post("/lessons/{lesson_id}/cancel", response_model=LessonResponse)
async def cancel_my_lesson(
    lesson_id: str,
    session: Session = Depends(get_current_session),
    db: SupabaseClient = Depends(get_supabase)
):
    """Annuler une de ses leçons"""
    lesson = await lessons.get_lesson(db, lesson_id)
    if not _owns(session, lesson):
        raise PermissionDenied("Vous ne pouvez annuler que vos propres leçons")
    return await lessons.cancel_lesson(db, lesson_id)
