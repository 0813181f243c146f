from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from dependencies.security import get_current_user, is_staff, require_roles
from dependencies.storage import get_storage
from schemas.enums import UserRole
from schemas.groups import Group, GroupCreate, GroupUpdate
from schemas.users import User
from services.storage.base import Storage

router = APIRouter(prefix="/groups", tags=["그룹"])

admin_only = require_roles(UserRole.ADMIN)


def _check_references(storage: Storage, faculty_id: Optional[int], teacher_id: Optional[int]) -> None:
    if faculty_id is not None and storage.get_faculty(faculty_id) is None:
        raise HTTPException(status_code=400, detail="Faculty not found")
    if teacher_id is not None and storage.get_teacher(teacher_id) is None:
        raise HTTPException(status_code=400, detail="Teacher not found")


# ✅ [READ] 그룹 목록 (forRegistration=true 이면 로그인 사용자 누구나)
@router.get("", response_model=List[Group])
def list_groups(
    faculty_id: Optional[int] = Query(default=None, alias="facultyId"),
    for_registration: bool = Query(default=False, alias="forRegistration"),
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    if not for_registration and not is_staff(user):
        raise HTTPException(status_code=403, detail="Access denied. Admin or teacher role required.")
    if faculty_id is not None:
        return storage.get_groups_by_faculty(faculty_id)
    return storage.get_all_groups()


# ✅ [CREATE] 그룹 추가
@router.post("", response_model=Group, status_code=201)
def create_group(payload: GroupCreate, _: User = Depends(admin_only), storage: Storage = Depends(get_storage)):
    _check_references(storage, payload.faculty_id, payload.teacher_id)
    return storage.create_group(payload.model_dump())


# ✅ [UPDATE] 그룹 수정 - 바꾸려는 학부/교사가 없으면 400
@router.put("/{group_id}", response_model=Group)
def update_group(
    group_id: int,
    payload: GroupUpdate,
    _: User = Depends(admin_only),
    storage: Storage = Depends(get_storage),
):
    if storage.get_group(group_id) is None:
        raise HTTPException(status_code=404, detail="Group not found")
    data = payload.model_dump(exclude_unset=True)
    # 담당 교사만 null 로 해제 가능
    data = {k: v for k, v in data.items() if v is not None or k == "teacher_id"}
    _check_references(storage, data.get("faculty_id"), data.get("teacher_id"))
    return storage.update_group(group_id, data)


# ✅ [DELETE] 그룹 삭제 (소속 학생이 있으면 400)
@router.delete("/{group_id}", status_code=204)
def delete_group(group_id: int, _: User = Depends(admin_only), storage: Storage = Depends(get_storage)):
    if not storage.delete_group(group_id):
        raise HTTPException(status_code=404, detail="Group not found")
    return Response(status_code=204)
