from fastapi import APIRouter, Depends, status
from typing import List

from drivingschool.auth.dependencies import require_admin
from drivingschool.crud import students
from drivingschool.db.supabase import SupabaseClient, get_supabase
from drivingschool.schemas.student import (
    StudentCreate,
    StudentCreated,
    StudentResponse,
    StudentUpdate,
)

router = APIRouter(prefix="/students", tags=["Élèves"], dependencies=[Depends(require_admin)])

@router.get("", response_model=List[StudentResponse])
async def list_students(db: SupabaseClient = Depends(get_supabase)):
    return await students.list_students(db)

@router.post("", response_model=StudentCreated, status_code=status.HTTP_201_CREATED)
async def create_student(request: StudentCreate, db: SupabaseClient = Depends(get_supabase)):
    """Créer un élève ; le mot de passe temporaire n'est renvoyé qu'ici"""
    return await students.create_student(db, request)

@router.get("/{student_id}", response_model=StudentResponse)
async def get_student(student_id: str, db: SupabaseClient = Depends(get_supabase)):
    return await students.get_student(db, student_id)

@router.put("/{student_id}", response_model=StudentResponse)
async def update_student(student_id: str, request: StudentUpdate, db: SupabaseClient = Depends(get_supabase)):
    return await students.update_student(db, student_id, request)

@router.delete("/{student_id}")
async def delete_student(student_id: str, db: SupabaseClient = Depends(get_supabase)):
    await students.delete_student(db, student_id)
    return {"success": True, "message": "Élève supprimé avec succès"}
