from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from dependencies.security import ensure_student_access, get_current_user, require_roles
from dependencies.storage import get_storage
from schemas.enums import UserRole
from schemas.physical_tests import PhysicalTest, PhysicalTestCreate, PhysicalTestUpdate
from schemas.users import User
from services.storage.base import Storage

# /tests 와 /physical-tests 는 같은 자원 (화면별로 다른 경로를 사용)
router = APIRouter(tags=["일반 체력 검사"])


def _check_refs(storage: Storage, student_id: Optional[int], period_id: Optional[int]) -> None:
    if student_id is not None and storage.get_student(student_id) is None:
        raise HTTPException(status_code=400, detail="Student not found")
    if period_id is not None and storage.get_period(period_id) is None:
        raise HTTPException(status_code=400, detail="Period not found")


def _get_owned(storage: Storage, user: User, test_id: int) -> PhysicalTest:
    test = storage.get_physical_test(test_id)
    if test is None:
        raise HTTPException(status_code=404, detail="Physical test not found")
    ensure_student_access(user, test.student_id)
    return test


# ==========================================================
# [1단계] 조회
# ==========================================================

# ✅ [READ] 목록 (관리자: 전체, 교사: 담당 그룹, 학생: 본인)
@router.get("/tests", response_model=List[PhysicalTest])
def list_physical_tests(user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    if user.role == UserRole.ADMIN.value:
        return storage.get_physical_tests()
    if user.role == UserRole.TEACHER.value:
        return storage.get_physical_tests_by_teacher(user.teacher_id) if user.teacher_id else []
    return storage.get_physical_tests_by_student(user.student_id) if user.student_id else []


# ✅ [READ] 교사 담당 그룹 학생들의 검사 (관리자는 전체)
@router.get("/tests/all/{teacher_id}", response_model=List[PhysicalTest])
def list_physical_tests_for_teacher(
    teacher_id: int,
    user: User = Depends(require_roles(UserRole.ADMIN, UserRole.TEACHER)),
    storage: Storage = Depends(get_storage),
):
    if user.role == UserRole.ADMIN.value:
        return storage.get_physical_tests()
    return storage.get_physical_tests_by_teacher(teacher_id)


# ✅ [READ] 학생별 검사
@router.get("/physical-tests/{student_id}", response_model=List[PhysicalTest])
def list_student_physical_tests(student_id: int, user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    ensure_student_access(user, student_id)
    return storage.get_physical_tests_by_student(student_id)


# ✅ [READ] 검사 1건
@router.get("/physical-tests-id/{test_id}", response_model=PhysicalTest)
def read_physical_test(test_id: int, user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    return _get_owned(storage, user, test_id)


# ==========================================================
# [2단계] 생성 / 수정 / 삭제 (학생은 본인 기록만)
# ==========================================================

@router.post("/tests", response_model=PhysicalTest, status_code=201)
@router.post("/physical-tests", response_model=PhysicalTest, status_code=201)
def create_physical_test(payload: PhysicalTestCreate, user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    ensure_student_access(user, payload.student_id)
    _check_refs(storage, payload.student_id, payload.period_id)
    return storage.create_physical_test(payload.model_dump())


@router.put("/tests/{test_id}", response_model=PhysicalTest)
@router.put("/physical-tests/{test_id}", response_model=PhysicalTest)
def update_physical_test(
    test_id: int,
    payload: PhysicalTestUpdate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    _get_owned(storage, user, test_id)
    data = payload.model_dump(exclude_unset=True)
    # 소유 학생 / 기간은 null 로 비울 수 없음
    for key in ("student_id", "period_id"):
        if key in data and data[key] is None:
            data.pop(key)
    if "student_id" in data:
        ensure_student_access(user, data["student_id"])
    _check_refs(storage, data.get("student_id"), data.get("period_id"))
    return storage.update_physical_test(test_id, data)


@router.delete("/tests/{test_id}", status_code=204)
def delete_physical_test(test_id: int, user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    _get_owned(storage, user, test_id)
    storage.delete_physical_test(test_id)
    return Response(status_code=204)
