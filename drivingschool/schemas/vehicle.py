from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from enum import Enum

class Transmission(str, Enum):
    MANUAL = "manual"
    AUTOMATIC = "automatic"

class Fuel(str, Enum):
    PETROL = "petrol"
    DIESEL = "diesel"
    ELECTRIC = "electric"
    HYBRID = "hybrid"

class VehicleStatus(str, Enum):
    AVAILABLE = "available"
    RESERVED = "reserved"
    MAINTENANCE = "maintenance"

class VehicleCreate(BaseModel):
    model: str = Field(..., min_length=1, description="Modèle")
    year: int = Field(..., ge=1950, le=2100, description="Année")
    registration: str = Field(..., min_length=1, description="Immatriculation")
    transmission: Transmission = Field(default=Transmission.MANUAL, description="Boîte de vitesses")
    fuel: Fuel = Field(default=Fuel.PETROL, description="Carburant")
    image: Optional[str] = Field(None, description="URL de la photo")

class VehicleUpdate(BaseModel):
    model: Optional[str] = Field(None, min_length=1)
    year: Optional[int] = Field(None, ge=1950, le=2100)
    registration: Optional[str] = Field(None, min_length=1)
    transmission: Optional[Transmission] = None
    fuel: Optional[Fuel] = None
    image: Optional[str] = None
    fuel_level: Optional[int] = Field(None, ge=0, le=100)
    last_maintenance: Optional[datetime] = None

class VehicleStatusUpdate(BaseModel):
    status: VehicleStatus

class VehicleResponse(BaseModel):
    id: str
    model: str
    year: int
    registration: str
    transmission: Transmission
    fuel: Fuel
    status: VehicleStatus = VehicleStatus.AVAILABLE
    image: Optional[str] = None
    fuel_level: Optional[int] = None
    last_maintenance: Optional[datetime] = None
    created_at: Optional[datetime] = None
