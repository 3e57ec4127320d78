from fastapi import APIRouter, Depends, Query, status
from datetime import date, datetime
from typing import Any, Dict, List, Optional
import asyncio
import logging

from drivingschool.auth.dependencies import require_admin
from drivingschool.core.calendar import build_week, today, week_window
from drivingschool.crud import instructors, lessons, students, vehicles
from drivingschool.db.supabase import SupabaseClient, get_supabase
from drivingschool.schemas.lesson import (
    ConflictCheckResponse,
    ConflictResponse,
    LessonCreate,
    LessonResponse,
    LessonUpdate,
    WeekSchedule,
)

router = APIRouter(prefix="/schedule", tags=["Planning"], dependencies=[Depends(require_admin)])
logger = logging.getLogger(__name__)

@router.get("/week", response_model=WeekSchedule)
async def week_schedule(
    week_of: Optional[date] = Query(None, alias="date"),
    instructor_id: Optional[str] = None,
    student_id: Optional[str] = None,
    vehicle_id: Optional[str] = None,
    db: SupabaseClient = Depends(get_supabase)
):
    """
    Grille de la semaine (créneaux de 30 minutes, 08:00-19:30)

    vehicle_id="none" n'affiche que les leçons sans véhicule.
    """
    reference = week_of or today()
    start, end = week_window(reference)
    week_lessons = await lessons.list_lessons(db, start=start, end=end)
    return build_week(week_lessons, reference, instructor_id, student_id, vehicle_id)

@router.get("/resources", response_model=Dict[str, Any])
async def schedule_resources(db: SupabaseClient = Depends(get_supabase)):
    """Élèves, moniteurs et véhicules proposés dans le formulaire de réservation"""
    student_list, instructor_list, vehicle_list = await asyncio.gather(
        students.list_students(db),
        instructors.list_instructors(db),
        vehicles.list_vehicles(db),
    )
    return {
        "students": [{"id": s.id, "name": s.name} for s in student_list],
        "instructors": [{"id": i.id, "name": i.name} for i in instructor_list],
        "vehicles": [
            {"id": v.id, "model": v.model, "registration": v.registration, "status": v.status}
            for v in vehicle_list
        ],
    }

@router.get("/lessons", response_model=List[LessonResponse])
async def list_lessons(
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    student_id: Optional[str] = None,
    instructor_id: Optional[str] = None,
    db: SupabaseClient = Depends(get_supabase)
):
    return await lessons.list_lessons(db, start=start, end=end, student_id=student_id, instructor_id=instructor_id)

@router.post("/conflicts", response_model=ConflictCheckResponse)
async def check_conflicts(request: LessonCreate, db: SupabaseClient = Depends(get_supabase)):
    """Vérifier un créneau sans réserver"""
    conflicts = await lessons.find_conflicts(db, lessons.booking_from_request(request))
    return ConflictCheckResponse(
        available=not conflicts,
        conflicts=[
            ConflictResponse(
                resource=c.resource,
                resource_id=c.resource_id,
                label=c.label,
                lesson_id=c.lesson_id,
                starts_at=c.starts_at,
                ends_at=c.ends_at,
                message=c.message,
            )
            for c in conflicts
        ]
    )

@router.post("/lessons", response_model=LessonResponse, status_code=status.HTTP_201_CREATED)
async def create_lesson(request: LessonCreate, db: SupabaseClient = Depends(get_supabase)):
    return await lessons.create_lesson(db, request)

@router.get("/lessons/{lesson_id}", response_model=LessonResponse)
async def get_lesson(lesson_id: str, db: SupabaseClient = Depends(get_supabase)):
    return await lessons.get_lesson(db, lesson_id)

@router.patch("/lessons/{lesson_id}", response_model=LessonResponse)
async def update_lesson(lesson_id: str, request: LessonUpdate, db: SupabaseClient = Depends(get_supabase)):
    return await lessons.update_lesson(db, lesson_id, request)

@router.post("/lessons/{lesson_id}/cancel", response_model=LessonResponse)
async def cancel_lesson(lesson_id: str, db: SupabaseClient = Depends(get_supabase)):
    return await lessons.cancel_lesson(db, lesson_id)

@router.post("/lessons/{lesson_id}/complete", response_model=LessonResponse)
async def complete_lesson(lesson_id: str, db: SupabaseClient = Depends(get_supabase)):
    return await lessons.complete_lesson(db, lesson_id)
