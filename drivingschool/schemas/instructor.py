from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class InstructorCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Nom complet")
    email: str = Field(..., min_length=3, description="Email")
    phone: Optional[str] = None
    address: Optional[str] = None
    specialty: Optional[str] = Field(None, description="Spécialité")
    years_experience: int = Field(default=0, ge=0, description="Années d'expérience")

class InstructorUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, min_length=3)
    phone: Optional[str] = None
    address: Optional[str] = None
    specialty: Optional[str] = None
    years_experience: Optional[int] = Field(None, ge=0)

class InstructorResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    specialty: Optional[str] = None
    years_experience: int = 0
    created_at: Optional[datetime] = None

class InstructorCreated(InstructorResponse):
    temporary_password: str = Field(..., description="Mot de passe temporaire, affiché une seule fois")
