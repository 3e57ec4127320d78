from pydantic import BaseModel, Field, model_validator
from typing import Dict, List, Optional
from datetime import date, datetime
from enum import Enum

class LessonType(str, Enum):
    DRIVING = "driving"
    CODE = "code"
    EXAM = "exam"

class LessonStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

LESSON_TITLES = {
    LessonType.DRIVING: "Leçon de conduite",
    LessonType.CODE: "Séance de code",
    LessonType.EXAM: "Examen blanc",
}

LESSON_REQUIRED_FIELDS = ("student_id", "instructor_id", "starts_at", "ends_at", "type", "status")

# ==================== REQUÊTES ====================

class LessonCreate(BaseModel):
    """Nouvelle réservation depuis le planning"""
    student_id: str = Field(..., description="ID de l'élève")
    instructor_id: str = Field(..., description="ID du moniteur")
    vehicle_id: Optional[str] = Field(None, description="ID du véhicule (ignoré pour le code)")
    starts_at: datetime = Field(..., description="Début")
    ends_at: Optional[datetime] = Field(None, description="Fin (début + 1h30 par défaut)")
    type: LessonType = LessonType.DRIVING
    notes: Optional[str] = None

class LessonUpdate(BaseModel):
    student_id: Optional[str] = None
    instructor_id: Optional[str] = None
    vehicle_id: Optional[str] = None
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    type: Optional[LessonType] = None
    status: Optional[LessonStatus] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _required_fields_not_null(self):
        # Seuls vehicle_id et notes peuvent être effacés
        cleared = [
            name for name in LESSON_REQUIRED_FIELDS
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if cleared:
            raise ValueError(f"Champs obligatoires, impossible de les effacer: {', '.join(cleared)}")
        return self

# ==================== RÉPONSES ====================

class LessonResponse(BaseModel):
    """Leçon avec les noms des personnes et du véhicule associés"""
    id: str
    starts_at: datetime
    ends_at: datetime
    type: LessonType = LessonType.DRIVING
    status: LessonStatus = LessonStatus.SCHEDULED
    student_id: Optional[str] = None
    instructor_id: Optional[str] = None
    vehicle_id: Optional[str] = None
    student_name: Optional[str] = None
    instructor_name: Optional[str] = None
    vehicle_model: Optional[str] = None
    notes: Optional[str] = None
    title: str = ""

    @model_validator(mode="after")
    def _default_title(self):
        if not self.title:
            self.title = LESSON_TITLES.get(self.type, "Leçon")
        return self

class ConflictResponse(BaseModel):
    resource: str = Field(..., description="instructor, student ou vehicle")
    resource_id: str
    label: str
    lesson_id: str
    starts_at: datetime
    ends_at: datetime
    message: str

class ConflictCheckResponse(BaseModel):
    available: bool
    conflicts: List[ConflictResponse]

class SlotLessons(BaseModel):
    time: str
    lessons: List[LessonResponse]

class DaySchedule(BaseModel):
    day: date
    label: str
    slots: List[SlotLessons]

class WeekSchedule(BaseModel):
    week_start: date
    week_end: date
    previous_week: date
    next_week: date
    slots: List[str]
    days: List[DaySchedule]
    filters: Dict[str, Optional[str]] = Field(default_factory=dict)
