"""
Détection des conflits de réservation.

Une nouvelle leçon est en conflit avec une leçon existante non annulée
lorsque leurs créneaux se chevauchent et qu'elles partagent le même
moniteur, le même élève ou le même véhicule. Les créneaux sont des
intervalles semi-ouverts [début, fin) : une leçon 10:30-12:00 ne chevauche
pas une leçon 09:00-10:30.

Les ressources sont comparées par identifiant, jamais par nom affiché.

Ce contrôle est une pré-validation faite sur une photo des leçons qui peut
être périmée. La garantie vient des contraintes d'exclusion de la table
`lessons` (voir `drivingschool.models.lesson`).
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional

from drivingschool.core.calendar import to_local
from drivingschool.schemas.lesson import LessonResponse, LessonStatus

INSTRUCTOR = "instructor"
STUDENT = "student"
VEHICLE = "vehicle"

_SUBJECTS = {
    INSTRUCTOR: "Le moniteur",
    STUDENT: "L'élève",
    VEHICLE: "Le véhicule",
}

@dataclass(frozen=True)
class Booking:
    """Réservation candidate"""
    starts_at: datetime
    ends_at: datetime
    instructor_id: Optional[str]
    student_id: Optional[str]
    vehicle_id: Optional[str] = None
    lesson_id: Optional[str] = None  # leçon modifiée, exclue du contrôle

@dataclass(frozen=True)
class Conflict:
    resource: str
    resource_id: str
    label: str
    lesson_id: str
    starts_at: datetime
    ends_at: datetime

    @property
    def message(self) -> str:
        start = to_local(self.starts_at).strftime("%H:%M")
        end = to_local(self.ends_at).strftime("%H:%M")
        return f"{_SUBJECTS[self.resource]} {self.label} est déjà réservé de {start} à {end}"

def overlaps(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    return start_a < end_b and start_b < end_a

def _same(a: Optional[str], b: Optional[str]) -> bool:
    return a is not None and b is not None and a == b

def detect_conflicts(candidate: Booking, lessons: Iterable[LessonResponse]) -> List[Conflict]:
    """Liste des conflits, vide si la réservation est possible"""
    start, end = to_local(candidate.starts_at), to_local(candidate.ends_at)
    conflicts = []

    for lesson in lessons:
        if lesson.status == LessonStatus.CANCELLED:
            continue
        if candidate.lesson_id is not None and lesson.id == candidate.lesson_id:
            continue
        if not overlaps(start, end, to_local(lesson.starts_at), to_local(lesson.ends_at)):
            continue

        checks = (
            (INSTRUCTOR, candidate.instructor_id, lesson.instructor_id, lesson.instructor_name),
            (STUDENT, candidate.student_id, lesson.student_id, lesson.student_name),
            (VEHICLE, candidate.vehicle_id, lesson.vehicle_id, lesson.vehicle_model),
        )
        for resource, wanted, booked, label in checks:
            if _same(wanted, booked):
                conflicts.append(Conflict(
                    resource=resource,
                    resource_id=booked,
                    label=label or booked,
                    lesson_id=lesson.id,
                    starts_at=lesson.starts_at,
                    ends_at=lesson.ends_at,
                ))

    return conflicts

def conflict_messages(conflicts: Iterable[Conflict]) -> List[str]:
    return [conflict.message for conflict in conflicts]
