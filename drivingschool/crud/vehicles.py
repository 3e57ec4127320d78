"""Parc de véhicules."""
import logging
from typing import Any, Dict, List, Optional

from drivingschool.db.supabase import SupabaseClient, UNIQUE_VIOLATION
from drivingschool.errors import DuplicateRegistrationError, NotFoundError
from drivingschool.schemas.vehicle import (
    VehicleCreate,
    VehicleResponse,
    VehicleStatus,
    VehicleUpdate,
)

logger = logging.getLogger(__name__)

VEHICLES = "vehicles"

def normalize_registration(registration: str) -> str:
    return registration.strip().upper()

async def list_vehicles(
    db: SupabaseClient,
    search: Optional[str] = None,
    status: Optional[VehicleStatus] = None
) -> List[VehicleResponse]:
    """Véhicules du plus récent au plus ancien, filtrés par modèle/immatriculation et statut"""
    query = db.table(VEHICLES).select("*")
    if status is not None:
        query = query.eq("status", status.value)
    response = await db.execute(
        query.order("created_at", desc=True),
        "récupération véhicules",
        message="Erreur lors du chargement des véhicules"
    )

    vehicles = [VehicleResponse(**row) for row in response.data or []]
    if search:
        term = search.strip().lower()
        vehicles = [
            v for v in vehicles
            if term in v.model.lower() or term in v.registration.lower()
        ]
    return vehicles

async def get_vehicle(db: SupabaseClient, vehicle_id: str) -> VehicleResponse:
    row = await db.fetch_one(db.table(VEHICLES).select("*").eq("id", vehicle_id), "récupération véhicule")
    if not row:
        raise NotFoundError("Véhicule non trouvé")
    return VehicleResponse(**row)

async def registration_exists(db: SupabaseClient, registration: str, exclude_id: Optional[str] = None) -> bool:
    query = db.table(VEHICLES).select("id").eq("registration", normalize_registration(registration))
    if exclude_id:
        query = query.neq("id", exclude_id)
    return await db.fetch_one(query, "vérification immatriculation") is not None

async def create_vehicle(db: SupabaseClient, data: VehicleCreate) -> VehicleResponse:
    record = data.model_dump(mode="json")
    record["registration"] = normalize_registration(data.registration)
    record["status"] = VehicleStatus.AVAILABLE.value

    if await registration_exists(db, record["registration"]):
        raise DuplicateRegistrationError()

    response = await db.execute(
        db.table(VEHICLES).insert(record),
        "création véhicule",
        errors={UNIQUE_VIOLATION: DuplicateRegistrationError()},
        message="Erreur lors de l'ajout du véhicule"
    )
    logger.info(f"Véhicule ajouté: {record['model']} ({record['registration']})")
    return VehicleResponse(**response.data[0])

async def _update(db: SupabaseClient, vehicle_id: str, record: Dict[str, Any], action: str) -> VehicleResponse:
    response = await db.execute(
        db.table(VEHICLES).update(record).eq("id", vehicle_id),
        action,
        errors={UNIQUE_VIOLATION: DuplicateRegistrationError()},
        message="Erreur lors de la mise à jour du véhicule"
    )
    if not response.data:
        raise NotFoundError("Véhicule non trouvé")
    return VehicleResponse(**response.data[0])

async def update_vehicle(db: SupabaseClient, vehicle_id: str, data: VehicleUpdate) -> VehicleResponse:
    """Le statut n'est pas modifié ici, voir set_vehicle_status"""
    record = data.model_dump(exclude_unset=True, mode="json")
    if data.registration is not None:
        record["registration"] = normalize_registration(data.registration)
        if await registration_exists(db, record["registration"], exclude_id=vehicle_id):
            raise DuplicateRegistrationError()
    if not record:
        return await get_vehicle(db, vehicle_id)
    return await _update(db, vehicle_id, record, "mise à jour véhicule")

async def set_vehicle_status(db: SupabaseClient, vehicle_id: str, status: VehicleStatus) -> VehicleResponse:
    vehicle = await _update(db, vehicle_id, {"status": status.value}, "statut véhicule")
    logger.info(f"Véhicule {vehicle_id}: {status.value}")
    return vehicle

async def delete_vehicle(db: SupabaseClient, vehicle_id: str) -> None:
    response = await db.execute(
        db.table(VEHICLES).delete().eq("id", vehicle_id),
        "suppression véhicule",
        message="Erreur lors de la suppression du véhicule"
    )
    if not response.data:
        raise NotFoundError("Véhicule non trouvé")
