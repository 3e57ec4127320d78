"""Leçons : lecture du planning, réservation, modification, annulation."""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from drivingschool.core.calendar import default_end, to_local
from drivingschool.core.conflicts import Booking, Conflict, conflict_messages, detect_conflicts
from drivingschool.db.supabase import SupabaseClient, CHECK_VIOLATION, EXCLUSION_VIOLATION
from drivingschool.errors import InvalidLessonWindow, NotFoundError, SchedulingConflictError
from drivingschool.schemas.lesson import (
    LessonCreate,
    LessonResponse,
    LessonStatus,
    LessonType,
    LessonUpdate,
)

logger = logging.getLogger(__name__)

LESSONS = "lessons"
LESSON_SELECT = (
    "*, "
    "student:users!lessons_student_id_fkey(name), "
    "instructor:users!lessons_instructor_id_fkey(name), "
    "vehicle:vehicles(model)"
)
RACE_MESSAGE = "Ce créneau vient d'être réservé, rechargez le planning"

def to_lesson(row: Dict[str, Any]) -> LessonResponse:
    return LessonResponse(
        id=row["id"],
        starts_at=row["starts_at"],
        ends_at=row["ends_at"],
        type=row.get("type") or LessonType.DRIVING,
        status=row.get("status") or LessonStatus.SCHEDULED,
        student_id=row.get("student_id"),
        instructor_id=row.get("instructor_id"),
        vehicle_id=row.get("vehicle_id"),
        student_name=(row.get("student") or {}).get("name"),
        instructor_name=(row.get("instructor") or {}).get("name"),
        vehicle_model=(row.get("vehicle") or {}).get("model"),
        notes=row.get("notes"),
    )

def _write_errors() -> Dict[str, Exception]:
    return {
        EXCLUSION_VIOLATION: SchedulingConflictError([RACE_MESSAGE]),
        CHECK_VIOLATION: InvalidLessonWindow(),
    }

async def list_lessons(
    db: SupabaseClient,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    student_id: Optional[str] = None,
    instructor_id: Optional[str] = None,
    include_cancelled: bool = False,
    limit: Optional[int] = None
) -> List[LessonResponse]:
    """Leçons triées par début ; start/end gardent celles qui chevauchent la fenêtre"""
    query = db.table(LESSONS).select(LESSON_SELECT)
    if not include_cancelled:
        query = query.neq("status", LessonStatus.CANCELLED.value)
    if end is not None:
        query = query.lt("starts_at", to_local(end).isoformat())
    if start is not None:
        query = query.gt("ends_at", to_local(start).isoformat())
    if student_id:
        query = query.eq("student_id", student_id)
    if instructor_id:
        query = query.eq("instructor_id", instructor_id)
    query = query.order("starts_at")
    if limit:
        query = query.limit(limit)

    response = await db.execute(
        query,
        "récupération leçons",
        message="Erreur lors du chargement des leçons"
    )
    return [to_lesson(row) for row in response.data or []]

async def get_lesson(db: SupabaseClient, lesson_id: str) -> LessonResponse:
    row = await db.fetch_one(
        db.table(LESSONS).select(LESSON_SELECT).eq("id", lesson_id),
        "récupération leçon"
    )
    if not row:
        raise NotFoundError("Leçon non trouvée")
    return to_lesson(row)

async def find_conflicts(db: SupabaseClient, booking: Booking) -> List[Conflict]:
    """Pré-contrôle sur les leçons non annulées qui chevauchent le créneau"""
    lessons = await list_lessons(db, start=booking.starts_at, end=booking.ends_at)
    return detect_conflicts(booking, lessons)

def _validate_window(starts_at: datetime, ends_at: datetime) -> None:
    if not to_local(starts_at) < to_local(ends_at):
        raise InvalidLessonWindow()

async def _ensure_available(db: SupabaseClient, booking: Booking) -> None:
    conflicts = await find_conflicts(db, booking)
    if conflicts:
        logger.info(f"Réservation refusée: {len(conflicts)} conflit(s)")
        raise SchedulingConflictError(conflict_messages(conflicts))

def booking_from_request(data: LessonCreate) -> Booking:
    starts_at = to_local(data.starts_at)
    ends_at = to_local(data.ends_at) if data.ends_at else default_end(starts_at)
    return Booking(
        starts_at=starts_at,
        ends_at=ends_at,
        instructor_id=data.instructor_id,
        student_id=data.student_id,
        vehicle_id=None if data.type == LessonType.CODE else data.vehicle_id,
    )

async def create_lesson(db: SupabaseClient, data: LessonCreate) -> LessonResponse:
    """
    Réserver une leçon

    Le contrôle des conflits est fait avant l'insertion ; si une autre
    réservation passe entre-temps, la contrainte d'exclusion de la base
    rejette l'insertion et l'erreur est la même.
    """
    booking = booking_from_request(data)
    _validate_window(booking.starts_at, booking.ends_at)
    await _ensure_available(db, booking)

    record = {
        "student_id": booking.student_id,
        "instructor_id": booking.instructor_id,
        "vehicle_id": booking.vehicle_id,
        "starts_at": booking.starts_at.isoformat(),
        "ends_at": booking.ends_at.isoformat(),
        "type": data.type.value,
        "status": LessonStatus.SCHEDULED.value,
        "notes": data.notes,
    }
    response = await db.execute(
        db.table(LESSONS).insert(record),
        "création leçon",
        errors=_write_errors(),
        message="Erreur lors de la création de la leçon"
    )
    lesson_id = response.data[0]["id"]
    logger.info(f"Leçon {lesson_id} créée ({data.type.value})")
    return await get_lesson(db, lesson_id)

async def update_lesson(db: SupabaseClient, lesson_id: str, data: LessonUpdate) -> LessonResponse:
    """Modifier une leçon ; les conflits sont re-contrôlés si le créneau ou les affectations changent"""
    current = await get_lesson(db, lesson_id)
    changes = data.model_dump(exclude_unset=True)

    lesson_type = changes.get("type", current.type)
    if lesson_type == LessonType.CODE:
        changes["vehicle_id"] = None

    merged = Booking(
        starts_at=to_local(changes.get("starts_at") or current.starts_at),
        ends_at=to_local(changes.get("ends_at") or current.ends_at),
        instructor_id=changes.get("instructor_id", current.instructor_id),
        student_id=changes.get("student_id", current.student_id),
        vehicle_id=changes.get("vehicle_id", current.vehicle_id),
        lesson_id=lesson_id,
    )
    _validate_window(merged.starts_at, merged.ends_at)

    scheduling_fields = {"starts_at", "ends_at", "instructor_id", "student_id", "vehicle_id", "status"}
    status = changes.get("status", current.status)
    if status != LessonStatus.CANCELLED and scheduling_fields & changes.keys():
        await _ensure_available(db, merged)

    record = {}
    for key, value in changes.items():
        if isinstance(value, datetime):
            value = to_local(value).isoformat()
        elif hasattr(value, "value"):
            value = value.value
        record[key] = value
    if not record:
        return current

    response = await db.execute(
        db.table(LESSONS).update(record).eq("id", lesson_id),
        "mise à jour leçon",
        errors=_write_errors(),
        message="Erreur lors de la mise à jour de la leçon"
    )
    if not response.data:
        raise NotFoundError("Leçon non trouvée")
    return await get_lesson(db, lesson_id)

async def set_lesson_status(db: SupabaseClient, lesson_id: str, status: LessonStatus) -> LessonResponse:
    """Changer le statut ; une leçon annulée qui redevient active reprend son créneau s'il est libre"""
    current = await get_lesson(db, lesson_id)
    if current.status == LessonStatus.CANCELLED and status != LessonStatus.CANCELLED:
        await _ensure_available(db, Booking(
            starts_at=to_local(current.starts_at),
            ends_at=to_local(current.ends_at),
            instructor_id=current.instructor_id,
            student_id=current.student_id,
            vehicle_id=current.vehicle_id,
            lesson_id=lesson_id,
        ))

    response = await db.execute(
        db.table(LESSONS).update({"status": status.value}).eq("id", lesson_id),
        f"leçon -> {status.value}",
        errors=_write_errors(),
        message="Erreur lors de la mise à jour de la leçon"
    )
    if not response.data:
        raise NotFoundError("Leçon non trouvée")
    logger.info(f"Leçon {lesson_id}: {status.value}")
    return await get_lesson(db, lesson_id)

async def cancel_lesson(db: SupabaseClient, lesson_id: str) -> LessonResponse:
    """Annulation : la leçon reste en base avec le statut cancelled"""
    return await set_lesson_status(db, lesson_id, LessonStatus.CANCELLED)

async def complete_lesson(db: SupabaseClient, lesson_id: str) -> LessonResponse:
    return await set_lesson_status(db, lesson_id, LessonStatus.COMPLETED)
