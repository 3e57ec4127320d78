"""
Grille hebdomadaire du planning.

Les leçons sont affichées dans des créneaux fixes de 30 minutes, de 08:00
à 19:30. Une leçon n'apparaît que dans le créneau qui correspond exactement
à son heure de début (heure locale de l'auto-école) : une leçon qui commence
à 09:15 n'est rendue dans aucun créneau. C'est un choix d'affichage, pas une
règle de planification.
"""
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional, Tuple
from zoneinfo import ZoneInfo

from drivingschool.config import settings
from drivingschool.schemas.lesson import (
    DaySchedule,
    LessonResponse,
    LessonStatus,
    SlotLessons,
    WeekSchedule,
)

FIRST_SLOT_HOUR = 8
LAST_SLOT_HOUR = 19
SLOT_MINUTES = 30
DAY_END = time(20, 0)
DEFAULT_LESSON_DURATION = timedelta(minutes=90)
NO_VEHICLE = "none"

DAY_NAMES = ["Lundi", "Mardi", "Mercredi", "Jeudi", "Vendredi", "Samedi", "Dimanche"]
MONTH_NAMES = [
    "janvier", "février", "mars", "avril", "mai", "juin",
    "juillet", "août", "septembre", "octobre", "novembre", "décembre",
]

def school_timezone() -> ZoneInfo:
    return ZoneInfo(settings.SCHOOL_TIMEZONE)

def to_local(value: datetime) -> datetime:
    """Convertir en heure locale ; une date naïve est supposée déjà locale"""
    tz = school_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)

def generate_time_slots() -> List[str]:
    slots = []
    for hour in range(FIRST_SLOT_HOUR, LAST_SLOT_HOUR + 1):
        for minute in range(0, 60, SLOT_MINUTES):
            slots.append(f"{hour:02d}:{minute:02d}")
    return slots

TIME_SLOTS = generate_time_slots()

def today() -> date:
    return datetime.now(school_timezone()).date()

def week_bounds(reference: date) -> Tuple[date, date]:
    """Lundi et dimanche de la semaine contenant `reference`"""
    monday = reference - timedelta(days=reference.weekday())
    return monday, monday + timedelta(days=6)

def week_days(reference: date) -> List[date]:
    monday, _ = week_bounds(reference)
    return [monday + timedelta(days=i) for i in range(7)]

def week_window(reference: date) -> Tuple[datetime, datetime]:
    """Fenêtre [lundi 00:00, lundi suivant 00:00) en heure locale"""
    monday, _ = week_bounds(reference)
    start = datetime.combine(monday, time.min, tzinfo=school_timezone())
    return start, start + timedelta(days=7)

def day_label(day: date) -> str:
    return f"{DAY_NAMES[day.weekday()]} {day.day} {MONTH_NAMES[day.month - 1]}"

def slot_start(day: date, slot: str) -> datetime:
    hour, minute = (int(part) for part in slot.split(":"))
    return datetime.combine(day, time(hour, minute), tzinfo=school_timezone())

def default_end(start: datetime) -> datetime:
    """Fin par défaut d'une réservation : 1h30 plus tard, au plus tard 20:00"""
    start = to_local(start)
    end = start + DEFAULT_LESSON_DURATION
    day_end = datetime.combine(start.date(), DAY_END, tzinfo=start.tzinfo)
    if start < day_end < end:
        return day_end
    return end

def starts_in_slot(lesson: LessonResponse, day: date, slot: str) -> bool:
    start = to_local(lesson.starts_at)
    expected = slot_start(day, slot)
    return (
        start.year == expected.year
        and start.month == expected.month
        and start.day == expected.day
        and start.hour == expected.hour
        and start.minute == expected.minute
    )

def lessons_for_slot(lessons: Iterable[LessonResponse], day: date, slot: str) -> List[LessonResponse]:
    return [
        lesson for lesson in lessons
        if lesson.status != LessonStatus.CANCELLED and starts_in_slot(lesson, day, slot)
    ]

def filter_lessons(
    lessons: Iterable[LessonResponse],
    instructor_id: Optional[str] = None,
    student_id: Optional[str] = None,
    vehicle_id: Optional[str] = None
) -> List[LessonResponse]:
    """Filtres du planning ; vehicle_id="none" garde les leçons sans véhicule"""
    selected = []
    for lesson in lessons:
        if instructor_id and lesson.instructor_id != instructor_id:
            continue
        if student_id and lesson.student_id != student_id:
            continue
        if vehicle_id == NO_VEHICLE:
            if lesson.vehicle_id:
                continue
        elif vehicle_id and lesson.vehicle_id != vehicle_id:
            continue
        selected.append(lesson)
    return selected

def build_week(
    lessons: Iterable[LessonResponse],
    reference: date,
    instructor_id: Optional[str] = None,
    student_id: Optional[str] = None,
    vehicle_id: Optional[str] = None
) -> WeekSchedule:
    """Répartir les leçons dans la grille jours × créneaux"""
    visible = filter_lessons(lessons, instructor_id, student_id, vehicle_id)
    monday, sunday = week_bounds(reference)

    days = []
    for day in week_days(reference):
        days.append(DaySchedule(
            day=day,
            label=day_label(day),
            slots=[
                SlotLessons(time=slot, lessons=lessons_for_slot(visible, day, slot))
                for slot in TIME_SLOTS
            ]
        ))

    return WeekSchedule(
        week_start=monday,
        week_end=sunday,
        previous_week=monday - timedelta(days=7),
        next_week=monday + timedelta(days=7),
        slots=TIME_SLOTS,
        days=days,
        filters={
            "instructor_id": instructor_id,
            "student_id": student_id,
            "vehicle_id": vehicle_id,
        }
    )
