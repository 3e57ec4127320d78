"""Compteurs du tableau de bord administrateur."""
import asyncio
import math
from datetime import datetime, time, timedelta, timezone
from typing import Any, Dict, Optional

from drivingschool.core.calendar import FIRST_SLOT_HOUR, DEFAULT_LESSON_DURATION, to_local
from drivingschool.crud.lessons import LESSON_SELECT, LESSONS, to_lesson
from drivingschool.crud.users import USERS
from drivingschool.crud.vehicles import VEHICLES
from drivingschool.db.supabase import SupabaseClient
from drivingschool.schemas.lesson import LessonStatus
from drivingschool.schemas.user import Role
from drivingschool.schemas.vehicle import VehicleResponse, VehicleStatus

UPCOMING_LIMIT = 3
AVAILABLE_VEHICLES_LIMIT = 2

def remaining_lessons(today_count: int, hour: int) -> int:
    """Estimation des leçons restantes : une leçon de 1h30 écoulée par tranche depuis 8h"""
    elapsed_hours = max(0, hour - FIRST_SLOT_HOUR)
    done = math.floor(elapsed_hours / (DEFAULT_LESSON_DURATION.total_seconds() / 3600))
    return max(0, today_count - done)

async def admin_stats(db: SupabaseClient, now: Optional[datetime] = None) -> Dict[str, Any]:
    now = to_local(now or datetime.now(timezone.utc))
    start_of_day = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)
    end_of_day = start_of_day + timedelta(days=1)
    week_ago = now - timedelta(days=7)

    def counted(table: str):
        return db.table(table).select("id", count="exact")

    (
        students,
        new_students,
        instructors,
        vehicles,
        maintenance,
        today,
        upcoming,
        available,
    ) = await asyncio.gather(
        db.count(counted(USERS).eq("role", Role.STUDENT.value), "nombre d'élèves"),
        db.count(
            counted(USERS).eq("role", Role.STUDENT.value).gte("created_at", week_ago.isoformat()),
            "nouveaux élèves"
        ),
        db.count(counted(USERS).eq("role", Role.INSTRUCTOR.value), "nombre de moniteurs"),
        db.count(counted(VEHICLES), "nombre de véhicules"),
        db.count(
            counted(VEHICLES).eq("status", VehicleStatus.MAINTENANCE.value),
            "véhicules en maintenance"
        ),
        db.count(
            counted(LESSONS)
            .gte("starts_at", start_of_day.isoformat())
            .lte("ends_at", end_of_day.isoformat())
            .neq("status", LessonStatus.CANCELLED.value),
            "leçons du jour"
        ),
        db.execute(
            db.table(LESSONS)
            .select(LESSON_SELECT)
            .gte("starts_at", start_of_day.isoformat())
            .neq("status", LessonStatus.CANCELLED.value)
            .order("starts_at")
            .limit(UPCOMING_LIMIT),
            "prochaines leçons"
        ),
        db.execute(
            db.table(VEHICLES)
            .select("*")
            .eq("status", VehicleStatus.AVAILABLE.value)
            .limit(AVAILABLE_VEHICLES_LIMIT),
            "véhicules disponibles"
        ),
    )

    return {
        "total_students": students,
        "new_students_this_week": new_students,
        "total_instructors": instructors,
        "total_vehicles": vehicles,
        "vehicles_in_maintenance": maintenance,
        "today_lessons": today,
        "remaining_lessons": remaining_lessons(today, now.hour),
        "upcoming_lessons": [to_lesson(row) for row in upcoming.data or []],
        "available_vehicles": [VehicleResponse(**row) for row in available.data or []],
    }
