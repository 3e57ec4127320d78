"""Gestion des élèves et statistiques de l'espace élève."""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from drivingschool.core.progress import parse_progress
from drivingschool.crud import users
from drivingschool.crud.lessons import LESSON_SELECT, LESSONS, to_lesson
from drivingschool.db.supabase import SupabaseClient
from drivingschool.schemas.lesson import LessonStatus
from drivingschool.schemas.student import (
    Progress,
    ProgressUpdate,
    StudentCreate,
    StudentCreated,
    StudentResponse,
    StudentUpdate,
)
from drivingschool.schemas.user import Role

logger = logging.getLogger(__name__)

UPCOMING_LIMIT = 5

def to_student(row: Dict[str, Any]) -> StudentResponse:
    return StudentResponse(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        phone=row.get("phone"),
        address=row.get("address"),
        birthdate=row.get("birthdate"),
        progress=parse_progress(row.get("progress")),
        created_at=row.get("created_at"),
    )

def merge_progress(current: Progress, update: Optional[ProgressUpdate]) -> Progress:
    """Appliquer une mise à jour partielle ; seules les manœuvres envoyées changent"""
    if update is None:
        return current
    changes = update.model_dump(exclude_unset=True, exclude_none=True)
    if "maneuvers" in changes:
        changes["maneuvers"] = current.maneuvers.model_copy(update=changes["maneuvers"])
    return current.model_copy(update=changes)

async def list_students(db: SupabaseClient) -> List[StudentResponse]:
    response = await db.execute(
        db.table(users.USERS)
        .select("*")
        .eq("role", Role.STUDENT.value)
        .order("created_at", desc=True),
        "récupération élèves",
        message="Erreur lors du chargement des élèves"
    )
    return [to_student(row) for row in response.data or []]

async def get_student(db: SupabaseClient, student_id: str) -> StudentResponse:
    return to_student(await users.get_user(db, student_id, Role.STUDENT))

async def create_student(db: SupabaseClient, data: StudentCreate) -> StudentCreated:
    progress = merge_progress(Progress(), data.progress)
    fields = data.model_dump(exclude={"progress"}, mode="json")
    fields["progress"] = progress.model_dump()

    row, temporary_password = await users.create_account(db, fields, Role.STUDENT)
    return StudentCreated(**to_student(row).model_dump(), temporary_password=temporary_password)

async def update_student(db: SupabaseClient, student_id: str, data: StudentUpdate) -> StudentResponse:
    updates = data.model_dump(exclude_unset=True, exclude={"progress"}, mode="json")
    if data.progress is not None:
        current = await get_student(db, student_id)
        updates["progress"] = merge_progress(current.progress, data.progress).model_dump()

    row = await users.update_user(db, student_id, updates, Role.STUDENT)
    return to_student(row)

async def delete_student(db: SupabaseClient, student_id: str) -> None:
    await users.delete_user(db, student_id, Role.STUDENT)
    logger.info(f"Élève {student_id} supprimé")

async def get_student_stats(db: SupabaseClient, student_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Prochaines leçons, moniteur et véhicule de la leçon la plus récente"""
    now = now or datetime.now(timezone.utc)

    upcoming = await db.execute(
        db.table(LESSONS)
        .select(LESSON_SELECT)
        .eq("student_id", student_id)
        .gte("starts_at", now.isoformat())
        .neq("status", LessonStatus.CANCELLED.value)
        .order("starts_at")
        .limit(UPCOMING_LIMIT),
        "prochaines leçons élève",
        message="Erreur lors du chargement des données"
    )

    latest = await db.fetch_one(
        db.table(LESSONS)
        .select(
            "instructor:users!lessons_instructor_id_fkey(id, name, specialty, years_experience), "
            "vehicle:vehicles(*)"
        )
        .eq("student_id", student_id)
        .neq("status", LessonStatus.CANCELLED.value)
        .order("starts_at", desc=True),
        "dernière leçon élève",
        message="Erreur lors du chargement des données"
    )

    return {
        "upcoming_lessons": [to_lesson(row) for row in upcoming.data or []],
        "instructor": (latest or {}).get("instructor"),
        "vehicle": (latest or {}).get("vehicle"),
    }
