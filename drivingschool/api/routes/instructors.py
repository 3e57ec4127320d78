from fastapi import APIRouter, Depends, status
from typing import List

from drivingschool.auth.dependencies import require_admin
from drivingschool.crud import instructors
from drivingschool.db.supabase import SupabaseClient, get_supabase
from drivingschool.schemas.instructor import (
    InstructorCreate,
    InstructorCreated,
    InstructorResponse,
    InstructorUpdate,
)

router = APIRouter(prefix="/instructors", tags=["Moniteurs"], dependencies=[Depends(require_admin)])

@router.get("", response_model=List[InstructorResponse])
async def list_instructors(db: SupabaseClient = Depends(get_supabase)):
    return await instructors.list_instructors(db)

@router.post("", response_model=InstructorCreated, status_code=status.HTTP_201_CREATED)
async def create_instructor(request: InstructorCreate, db: SupabaseClient = Depends(get_supabase)):
    """Créer un moniteur ; le mot de passe temporaire n'est renvoyé qu'ici"""
    return await instructors.create_instructor(db, request)

@router.get("/{instructor_id}", response_model=InstructorResponse)
async def get_instructor(instructor_id: str, db: SupabaseClient = Depends(get_supabase)):
    return await instructors.get_instructor(db, instructor_id)

@router.put("/{instructor_id}", response_model=InstructorResponse)
async def update_instructor(instructor_id: str, request: InstructorUpdate, db: SupabaseClient = Depends(get_supabase)):
    return await instructors.update_instructor(db, instructor_id, request)

@router.delete("/{instructor_id}")
async def delete_instructor(instructor_id: str, db: SupabaseClient = Depends(get_supabase)):
    await instructors.delete_instructor(db, instructor_id)
    return {"success": True, "message": "Moniteur supprimé avec succès"}
