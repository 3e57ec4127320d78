"""Gestion des moniteurs et statistiques de l'espace moniteur."""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from drivingschool.core.calendar import to_local
from drivingschool.core.progress import summarize_progress
from drivingschool.crud import users
from drivingschool.crud.lessons import LESSON_SELECT, LESSONS, to_lesson
from drivingschool.crud.vehicles import VEHICLES
from drivingschool.db.supabase import SupabaseClient
from drivingschool.schemas.instructor import (
    InstructorCreate,
    InstructorCreated,
    InstructorResponse,
    InstructorUpdate,
)
from drivingschool.schemas.lesson import LessonResponse, LessonStatus
from drivingschool.schemas.user import Role
from drivingschool.schemas.vehicle import VehicleStatus

logger = logging.getLogger(__name__)

UPCOMING_LIMIT = 5

def to_instructor(row: Dict[str, Any]) -> InstructorResponse:
    return InstructorResponse(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        phone=row.get("phone"),
        address=row.get("address"),
        specialty=row.get("specialty"),
        years_experience=row.get("years_experience") or 0,
        created_at=row.get("created_at"),
    )

def month_window(now: datetime):
    """Premier jour du mois courant et premier jour du mois suivant, en heure locale"""
    local = to_local(now)
    start = local.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end

def lesson_hours(rows: List[Dict[str, Any]]) -> float:
    total = 0.0
    for row in rows:
        starts_at = datetime.fromisoformat(row["starts_at"])
        ends_at = datetime.fromisoformat(row["ends_at"])
        total += (ends_at - starts_at).total_seconds() / 3600
    return round(total, 1)

async def list_instructors(db: SupabaseClient) -> List[InstructorResponse]:
    response = await db.execute(
        db.table(users.USERS)
        .select("*")
        .eq("role", Role.INSTRUCTOR.value)
        .order("created_at", desc=True),
        "récupération moniteurs",
        message="Erreur lors du chargement des moniteurs"
    )
    return [to_instructor(row) for row in response.data or []]

async def get_instructor(db: SupabaseClient, instructor_id: str) -> InstructorResponse:
    return to_instructor(await users.get_user(db, instructor_id, Role.INSTRUCTOR))

async def create_instructor(db: SupabaseClient, data: InstructorCreate) -> InstructorCreated:
    row, temporary_password = await users.create_account(db, data.model_dump(), Role.INSTRUCTOR)
    return InstructorCreated(**to_instructor(row).model_dump(), temporary_password=temporary_password)

async def update_instructor(db: SupabaseClient, instructor_id: str, data: InstructorUpdate) -> InstructorResponse:
    row = await users.update_user(db, instructor_id, data.model_dump(exclude_unset=True), Role.INSTRUCTOR)
    return to_instructor(row)

async def delete_instructor(db: SupabaseClient, instructor_id: str) -> None:
    await users.delete_user(db, instructor_id, Role.INSTRUCTOR)
    logger.info(f"Moniteur {instructor_id} supprimé")

async def get_upcoming_lessons(db: SupabaseClient, instructor_id: str, now: Optional[datetime] = None) -> List[LessonResponse]:
    now = now or datetime.now(timezone.utc)
    response = await db.execute(
        db.table(LESSONS)
        .select(LESSON_SELECT)
        .eq("instructor_id", instructor_id)
        .gte("starts_at", now.isoformat())
        .neq("status", LessonStatus.CANCELLED.value)
        .order("starts_at")
        .limit(UPCOMING_LIMIT),
        "prochaines leçons moniteur",
        message="Erreur lors du chargement des données"
    )
    return [to_lesson(row) for row in response.data or []]

async def get_instructor_stats(db: SupabaseClient, instructor_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Heures du mois, élèves suivis et véhicule du moniteur

    Le véhicule est celui de sa dernière leçon ; à défaut, un véhicule
    disponible.
    """
    now = now or datetime.now(timezone.utc)
    month_start, month_end = month_window(now)

    monthly, taught, latest, available = await asyncio.gather(
        db.execute(
            db.table(LESSONS)
            .select("starts_at, ends_at")
            .eq("instructor_id", instructor_id)
            .gte("starts_at", month_start.isoformat())
            .lte("ends_at", month_end.isoformat())
            .neq("status", LessonStatus.CANCELLED.value),
            "heures mensuelles moniteur"
        ),
        db.execute(
            db.table(LESSONS)
            .select("student:users!lessons_student_id_fkey(id, name, email, progress)")
            .eq("instructor_id", instructor_id)
            .neq("status", LessonStatus.CANCELLED.value)
            .order("starts_at", desc=True),
            "élèves du moniteur"
        ),
        db.fetch_one(
            db.table(LESSONS)
            .select("vehicle:vehicles(*)")
            .eq("instructor_id", instructor_id)
            .neq("status", LessonStatus.CANCELLED.value)
            .order("starts_at", desc=True),
            "dernier véhicule moniteur"
        ),
        db.fetch_one(
            db.table(VEHICLES).select("*").eq("status", VehicleStatus.AVAILABLE.value),
            "véhicule disponible"
        ),
    )

    students = []
    seen = set()
    for row in taught.data or []:
        student = row.get("student")
        if not student or student["id"] in seen:
            continue
        seen.add(student["id"])
        students.append({
            "id": student["id"],
            "name": student.get("name"),
            "email": student.get("email"),
            "progress": summarize_progress(student.get("progress")),
        })

    return {
        "monthly_hours": lesson_hours(monthly.data or []),
        "students": students,
        "assigned_vehicle": (latest or {}).get("vehicle") or available,
    }
