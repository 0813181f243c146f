from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from dependencies.security import ensure_self, get_current_user, require_roles
from dependencies.storage import get_storage
from schemas.enums import UserRole
from schemas.users import User, UserRecord, UserUpdate, VisualSettingsUpdate, public_user
from services.storage.base import Storage
from utils.security import hash_password

router = APIRouter(tags=["사용자 관리"])

admin_only = require_roles(UserRole.ADMIN)


# ==========================================================
# [1단계] 본인 계정
# ==========================================================

# ✅ [READ] 계정에 연결된 학생/교사 ID (본인 또는 관리자)
@router.get("/users/{user_id}/record", response_model=UserRecord, response_model_exclude_none=True)
def read_user_record(user_id: int, user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    if user.role != UserRole.ADMIN.value and user.id != user_id:
        raise HTTPException(status_code=403, detail="Access denied")
    record = storage.get_user(user_id)
    if record is None:
        raise HTTPException(status_code=404, detail="User not found")
    if record.role == UserRole.TEACHER.value:
        return UserRecord(teacher_id=record.teacher_id)
    if record.role == UserRole.STUDENT.value:
        return UserRecord(student_id=record.student_id)
    return UserRecord()


# ✅ [UPDATE] 화면 설정 (본인만)
@router.put("/settings/{user_id}")
def update_visual_settings(
    user_id: int,
    payload: VisualSettingsUpdate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    ensure_self(user, user_id)
    updated = storage.update_user(user_id, {"visual_settings": payload.visual_settings})
    if updated is None:
        raise HTTPException(status_code=404, detail="User not found")
    return {"visualSettings": updated.visual_settings}


# ==========================================================
# [2단계] 계정 관리 (관리자)
# ==========================================================

# ✅ [READ] 역할별 계정 목록 (role 미지정 시 빈 목록)
@router.get("/users/manage", response_model=List[User])
def list_users(
    role: Optional[UserRole] = Query(default=None),
    _: User = Depends(admin_only),
    storage: Storage = Depends(get_storage),
):
    if role is None:
        return []
    return [public_user(u) for u in storage.get_users_by_role(role.value)]


# ✅ [UPDATE] 계정 수정 (비밀번호는 해시로 저장)
@router.put("/users/manage/{user_id}", response_model=User)
def update_user(
    user_id: int,
    payload: UserUpdate,
    _: User = Depends(admin_only),
    storage: Storage = Depends(get_storage),
):
    data = payload.model_dump(exclude_unset=True)
    if data.get("username"):
        existing = storage.get_user_by_username(data["username"])
        if existing is not None and existing.id != user_id:
            raise HTTPException(status_code=400, detail="Username already exists")
    if data.get("password"):
        data["password"] = hash_password(data["password"])
    else:
        data.pop("password", None)

    updated = storage.update_user(user_id, data)
    if updated is None:
        raise HTTPException(status_code=404, detail="User not found")
    return public_user(updated)


# ✅ [DELETE] 계정 삭제
@router.delete("/users/manage/{user_id}", status_code=204)
def delete_user(user_id: int, _: User = Depends(admin_only), storage: Storage = Depends(get_storage)):
    if not storage.delete_user(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return Response(status_code=204)


# ✅ [READ] 학생 계정 목록 (관리자/교사)
@router.get("/student/users", response_model=List[User])
def list_student_users(
    _: User = Depends(require_roles(UserRole.ADMIN, UserRole.TEACHER)),
    storage: Storage = Depends(get_storage),
):
    return [public_user(u) for u in storage.get_users_by_role(UserRole.STUDENT.value)]
