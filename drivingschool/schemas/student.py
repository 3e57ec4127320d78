from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime

class Maneuvers(BaseModel):
    """Manœuvres validées par l'élève"""
    parking: bool = False
    highway: bool = False
    city: bool = False
    reverse_parking: bool = False
    emergency: bool = False

class Progress(BaseModel):
    """Dossier de progression d'un élève"""
    driving_hours: float = Field(default=0, ge=0, description="Heures de conduite effectuées")
    target_hours: float = Field(default=20, ge=0, description="Heures de conduite prévues")
    code_score: int = Field(default=0, ge=0, le=40, description="Score au code sur 40")
    maneuvers: Maneuvers = Field(default_factory=Maneuvers)

class ProgressUpdate(BaseModel):
    driving_hours: Optional[float] = Field(None, ge=0)
    target_hours: Optional[float] = Field(None, ge=0)
    code_score: Optional[int] = Field(None, ge=0, le=40)
    maneuvers: Optional[Maneuvers] = None

# ==================== REQUÊTES ====================

class StudentCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Nom complet")
    email: str = Field(..., min_length=3, description="Email")
    phone: Optional[str] = None
    address: Optional[str] = None
    birthdate: Optional[date] = None
    progress: Optional[ProgressUpdate] = None

class StudentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, min_length=3)
    phone: Optional[str] = None
    address: Optional[str] = None
    birthdate: Optional[date] = None
    progress: Optional[ProgressUpdate] = None

# ==================== RÉPONSES ====================

class StudentResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    birthdate: Optional[date] = None
    progress: Progress = Field(default_factory=Progress)
    created_at: Optional[datetime] = None

class StudentCreated(StudentResponse):
    temporary_password: str = Field(..., description="Mot de passe temporaire, affiché une seule fois")

class ManeuverItem(BaseModel):
    key: str
    label: str
    done: bool

class ProgressSummary(BaseModel):
    """Barres de progression affichées sur les tableaux de bord"""
    driving_hours: float
    target_hours: float
    driving_percentage: float
    code_score: int
    code_max: int
    code_percentage: float
    code_ready: bool
    code_points_remaining: int
    maneuvers: List[ManeuverItem]
    maneuvers_done: int
    maneuvers_percentage: float
