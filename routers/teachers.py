from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from dependencies.security import get_current_user, require_roles
from dependencies.storage import get_storage
from schemas.enums import UserRole
from schemas.teachers import Teacher, TeacherCreate, TeacherUpdate
from schemas.users import User
from services.storage.base import Storage

router = APIRouter(prefix="/teachers", tags=["교사 정보"])

admin_only = require_roles(UserRole.ADMIN)


# ==========================================================
# [1단계] CRUD 라우터
# ==========================================================

# ✅ [READ] 전체 교사 조회
@router.get("", response_model=List[Teacher])
def read_teachers(
    _: User = Depends(require_roles(UserRole.ADMIN, UserRole.TEACHER)),
    storage: Storage = Depends(get_storage),
):
    return storage.get_all_teachers()


# ✅ [CREATE] 교사 정보 추가
@router.post("", response_model=Teacher, status_code=201)
def create_teacher(payload: TeacherCreate, _: User = Depends(admin_only), storage: Storage = Depends(get_storage)):
    return storage.create_teacher(payload.model_dump())


# ✅ [UPDATE] 교사 정보 수정 (관리자 또는 본인)
@router.put("/{teacher_id}", response_model=Teacher)
def update_teacher(
    teacher_id: int,
    payload: TeacherUpdate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    if user.role != UserRole.ADMIN.value and user.teacher_id != teacher_id:
        raise HTTPException(status_code=403, detail="Access denied")
    data = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if k != "full_name" or v}
    updated = storage.update_teacher(teacher_id, data)
    if updated is None:
        raise HTTPException(status_code=404, detail="Teacher not found")
    return updated


# ✅ [DELETE] 교사 삭제 (담당 그룹이 있으면 400, 연결 계정은 함께 삭제)
@router.delete("/{teacher_id}", status_code=204)
def delete_teacher(teacher_id: int, _: User = Depends(admin_only), storage: Storage = Depends(get_storage)):
    if not storage.delete_teacher(teacher_id):
        raise HTTPException(status_code=404, detail="Teacher not found")
    return Response(status_code=204)
