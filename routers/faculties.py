from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from dependencies.security import require_roles
from dependencies.storage import get_storage
from schemas.enums import UserRole
from schemas.faculties import Faculty, FacultyCreate, FacultyUpdate
from schemas.users import User
from services.storage.base import Storage

router = APIRouter(prefix="/faculties", tags=["학부"])

admin_only = require_roles(UserRole.ADMIN)
staff_only = require_roles(UserRole.ADMIN, UserRole.TEACHER)


# ✅ [READ] 학부 목록
@router.get("", response_model=List[Faculty])
def list_faculties(_: User = Depends(staff_only), storage: Storage = Depends(get_storage)):
    return storage.get_all_faculties()


# ✅ [CREATE] 학부 추가
@router.post("", response_model=Faculty, status_code=201)
def create_faculty(payload: FacultyCreate, _: User = Depends(admin_only), storage: Storage = Depends(get_storage)):
    return storage.create_faculty(payload.model_dump())


# ✅ [UPDATE] 학부 수정
@router.put("/{faculty_id}", response_model=Faculty)
def update_faculty(
    faculty_id: int,
    payload: FacultyUpdate,
    _: User = Depends(admin_only),
    storage: Storage = Depends(get_storage),
):
    updated = storage.update_faculty(faculty_id, payload.model_dump(exclude_unset=True))
    if updated is None:
        raise HTTPException(status_code=404, detail="Faculty not found")
    return updated


# ✅ [DELETE] 학부 삭제 (소속 그룹이 있으면 400)
@router.delete("/{faculty_id}", status_code=204)
def delete_faculty(faculty_id: int, _: User = Depends(admin_only), storage: Storage = Depends(get_storage)):
    if not storage.delete_faculty(faculty_id):
        raise HTTPException(status_code=404, detail="Faculty not found")
    return Response(status_code=204)
