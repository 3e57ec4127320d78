from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional

from drivingschool.auth.dependencies import require_admin
from drivingschool.crud import vehicles
from drivingschool.db.supabase import SupabaseClient, get_supabase
from drivingschool.schemas.vehicle import (
    VehicleCreate,
    VehicleResponse,
    VehicleStatus,
    VehicleStatusUpdate,
    VehicleUpdate,
)

router = APIRouter(prefix="/vehicles", tags=["Véhicules"], dependencies=[Depends(require_admin)])

@router.get("", response_model=List[VehicleResponse])
async def list_vehicles(
    search: Optional[str] = None,
    vehicle_status: Optional[VehicleStatus] = Query(None, alias="status"),
    db: SupabaseClient = Depends(get_supabase)
):
    return await vehicles.list_vehicles(db, search=search, status=vehicle_status)

@router.post("", response_model=VehicleResponse, status_code=status.HTTP_201_CREATED)
async def create_vehicle(request: VehicleCreate, db: SupabaseClient = Depends(get_supabase)):
    return await vehicles.create_vehicle(db, request)

@router.get("/{vehicle_id}", response_model=VehicleResponse)
async def get_vehicle(vehicle_id: str, db: SupabaseClient = Depends(get_supabase)):
    return await vehicles.get_vehicle(db, vehicle_id)

@router.put("/{vehicle_id}", response_model=VehicleResponse)
async def update_vehicle(vehicle_id: str, request: VehicleUpdate, db: SupabaseClient = Depends(get_supabase)):
    return await vehicles.update_vehicle(db, vehicle_id, request)

@router.patch("/{vehicle_id}/status", response_model=VehicleResponse)
async def set_vehicle_status(vehicle_id: str, request: VehicleStatusUpdate, db: SupabaseClient = Depends(get_supabase)):
    return await vehicles.set_vehicle_status(db, vehicle_id, request.status)

@router.delete("/{vehicle_id}")
async def delete_vehicle(vehicle_id: str, db: SupabaseClient = Depends(get_supabase)):
    await vehicles.delete_vehicle(db, vehicle_id)
    return {"success": True, "message": "Véhicule supprimé avec succès"}
