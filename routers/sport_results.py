from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from dependencies.security import ensure_student_access, get_current_user, require_roles
from dependencies.storage import get_storage
from schemas.enums import UserRole
from schemas.sport_results import SportResult, SportResultCreate, SportResultUpdate
from schemas.users import User
from services.storage.base import Storage

router = APIRouter(tags=["종목별 실기 기록"])

staff_only = require_roles(UserRole.ADMIN, UserRole.TEACHER)


def _check_refs(storage: Storage, student_id: Optional[int], period_id: Optional[int]) -> None:
    if student_id is not None and storage.get_student(student_id) is None:
        raise HTTPException(status_code=400, detail="Student not found")
    if period_id is not None and storage.get_period(period_id) is None:
        raise HTTPException(status_code=400, detail="Period not found")


def _get_owned(storage: Storage, user: User, sport_result_id: int) -> SportResult:
    result = storage.get_sport_result(sport_result_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Sport result not found")
    ensure_student_access(user, result.student_id)
    return result


# ==========================================================
# [1단계] 조회
# ==========================================================

# ✅ [READ] 학생별 원기록 (본인 또는 관리자/교사)
@router.get("/sport-results/{student_id}", response_model=List[SportResult])
def list_student_sport_results(student_id: int, user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    ensure_student_access(user, student_id)
    return storage.get_sport_results_by_student(student_id)


# ✅ [READ] 원기록 1건
@router.get("/sport-results-id/{sport_result_id}", response_model=SportResult)
def read_sport_result(sport_result_id: int, user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    return _get_owned(storage, user, sport_result_id)


# ✅ [READ] 기간별 전체
@router.get("/sport-results-period/{period_id}", response_model=List[SportResult])
def list_period_sport_results(period_id: int, _: User = Depends(staff_only), storage: Storage = Depends(get_storage)):
    return storage.get_sport_results_by_period(period_id)


# ✅ [READ] 교사 담당 그룹 + 기간
@router.get("/sport-results-teacher/{teacher_id}/period/{period_id}", response_model=List[SportResult])
def list_teacher_sport_results(
    teacher_id: int,
    period_id: int,
    _: User = Depends(staff_only),
    storage: Storage = Depends(get_storage),
):
    return storage.get_sport_results_by_period_and_teacher(teacher_id, period_id)


# ==========================================================
# [2단계] 생성 / 수정 / 삭제 (학생은 본인 기록만)
# ==========================================================

@router.post("/sport-results", response_model=SportResult, status_code=201)
def create_sport_result(payload: SportResultCreate, user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    ensure_student_access(user, payload.student_id)
    _check_refs(storage, payload.student_id, payload.period_id)
    return storage.create_sport_result(payload.model_dump())


@router.put("/sport-results/{sport_result_id}", response_model=SportResult)
def update_sport_result(
    sport_result_id: int,
    payload: SportResultUpdate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    _get_owned(storage, user, sport_result_id)
    data = payload.model_dump(exclude_unset=True)
    for key in ("student_id", "period_id"):
        if key in data and data[key] is None:
            data.pop(key)
    if "student_id" in data:
        ensure_student_access(user, data["student_id"])
    _check_refs(storage, data.get("student_id"), data.get("period_id"))
    return storage.update_sport_result(sport_result_id, data)


@router.delete("/sport-results/{sport_result_id}", status_code=204)
def delete_sport_result(sport_result_id: int, user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    _get_owned(storage, user, sport_result_id)
    storage.delete_sport_result(sport_result_id)
    return Response(status_code=204)
