from pydantic import BaseModel, Field
from typing import Optional
from datetime import date
from enum import Enum

class Role(str, Enum):
    ADMIN = "admin"
    INSTRUCTOR = "instructor"
    STUDENT = "student"

class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"

# ==================== REQUÊTES ====================

class LoginRequest(BaseModel):
    """Connexion par email et mot de passe"""
    email: str = Field(..., min_length=3, description="Email")
    password: str = Field(..., min_length=1, description="Mot de passe")

class RegisterRequest(BaseModel):
    """Inscription d'un nouvel élève"""
    name: str = Field(..., min_length=1, description="Nom complet")
    email: str = Field(..., min_length=3, description="Email")
    password: str = Field(..., min_length=6, description="Mot de passe")

class ProfileUpdate(BaseModel):
    """Champs de contact modifiables depuis le profil"""
    name: Optional[str] = Field(None, min_length=1, description="Nom complet")
    email: Optional[str] = Field(None, min_length=3, description="Email")
    phone: Optional[str] = Field(None, description="Téléphone")
    address: Optional[str] = Field(None, description="Adresse")
    birthdate: Optional[date] = Field(None, description="Date de naissance (élèves)")
    specialty: Optional[str] = Field(None, description="Spécialité (moniteurs)")

class PasswordChangeRequest(BaseModel):
    current_password: str = Field(..., min_length=1, description="Mot de passe actuel")
    new_password: str = Field(..., min_length=6, description="Nouveau mot de passe")
    confirm_password: str = Field(..., min_length=6, description="Confirmation")

class ThemeUpdate(BaseModel):
    theme: Theme

# ==================== RÉPONSES ====================

class UserPublic(BaseModel):
    """Utilisateur tel que conservé dans la session"""
    id: str
    name: str
    email: str
    role: Role

class SessionResponse(BaseModel):
    success: bool = True
    token: str = Field(..., description="Jeton de session opaque")
    user: UserPublic
    message: str = Field(..., description="Message à afficher")
