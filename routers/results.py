from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from dependencies.security import ensure_student_access, get_current_user, require_roles
from dependencies.storage import get_storage
from schemas.enums import UserRole
from schemas.results import Result, ResultCreate, ResultUpdate
from schemas.users import User
from services.storage.base import Storage

router = APIRouter(prefix="/results", tags=["종합 평가"])

staff_only = require_roles(UserRole.ADMIN, UserRole.TEACHER)


def _check_refs(storage: Storage, data: dict) -> None:
    lookups = (
        ("student_id", storage.get_student, "Student not found"),
        ("period_id", storage.get_period, "Period not found"),
        ("test_id", storage.get_physical_test, "Physical test not found"),
        ("state_id", storage.get_physical_state, "Physical state not found"),
        ("sport_result_id", storage.get_sport_result, "Sport result not found"),
        ("assessed_by", storage.get_teacher, "Teacher not found"),
    )
    for key, getter, message in lookups:
        if data.get(key) is not None and getter(data[key]) is None:
            raise HTTPException(status_code=400, detail=message)


# ==========================================================
# [1단계] 조회
# ==========================================================

@router.get("/student/{student_id}", response_model=List[Result])
def list_student_results(student_id: int, user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    ensure_student_access(user, student_id)
    return storage.get_results_by_student(student_id)


# ✅ [READ] 그룹 소속 학생 전원의 평가
@router.get("/group/{group_id}", response_model=List[Result])
def list_group_results(group_id: int, _: User = Depends(staff_only), storage: Storage = Depends(get_storage)):
    return storage.get_results_by_group(group_id)


@router.get("/period/{period_id}", response_model=List[Result])
def list_period_results(period_id: int, _: User = Depends(staff_only), storage: Storage = Depends(get_storage)):
    return storage.get_results_by_period(period_id)


# ==========================================================
# [2단계] 생성 / 수정 (관리자/교사), 삭제 (관리자)
# ==========================================================

@router.post("", response_model=Result, status_code=201)
def create_result(payload: ResultCreate, user: User = Depends(staff_only), storage: Storage = Depends(get_storage)):
    data = payload.model_dump()
    # 교사가 평가자를 비워 두면 본인으로 기록
    if data.get("assessed_by") is None and user.role == UserRole.TEACHER.value:
        data["assessed_by"] = user.teacher_id
    _check_refs(storage, data)
    return storage.create_result(data)


@router.put("/{result_id}", response_model=Result)
def update_result(
    result_id: int,
    payload: ResultUpdate,
    _: User = Depends(staff_only),
    storage: Storage = Depends(get_storage),
):
    if storage.get_result(result_id) is None:
        raise HTTPException(status_code=404, detail="Result not found")
    data = payload.model_dump(exclude_unset=True)
    for key in ("student_id", "period_id"):
        if key in data and data[key] is None:
            data.pop(key)
    _check_refs(storage, data)
    return storage.update_result(result_id, data)


@router.delete("/{result_id}", status_code=204)
def delete_result(result_id: int, _: User = Depends(require_roles(UserRole.ADMIN)), storage: Storage = Depends(get_storage)):
    if not storage.delete_result(result_id):
        raise HTTPException(status_code=404, detail="Result not found")
    return Response(status_code=204)
