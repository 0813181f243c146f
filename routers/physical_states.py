from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from dependencies.security import ensure_student_access, get_current_user, is_staff, require_roles
from dependencies.storage import get_storage
from schemas.enums import UserRole
from schemas.physical_states import PhysicalState, PhysicalStateCreate, PhysicalStateUpdate
from schemas.users import User
from services.storage.base import Storage

# /samples 와 /physical-states 는 같은 자원
router = APIRouter(tags=["신체 측정"])


def _check_refs(storage: Storage, student_id: Optional[int], period_id: Optional[int]) -> None:
    if student_id is not None and storage.get_student(student_id) is None:
        raise HTTPException(status_code=400, detail="Student not found")
    if period_id is not None and storage.get_period(period_id) is None:
        raise HTTPException(status_code=400, detail="Period not found")


def _get_owned(storage: Storage, user: User, state_id: int) -> PhysicalState:
    state = storage.get_physical_state(state_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Physical state not found")
    ensure_student_access(user, state.student_id)
    return state


# ✅ [READ] 목록 (관리자/교사: 전체, 학생: 본인)
@router.get("/samples", response_model=List[PhysicalState])
def list_samples(user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    if is_staff(user):
        return storage.get_physical_states()
    return storage.get_physical_states_by_student(user.student_id) if user.student_id else []


# ✅ [READ] 전체 목록 (관리자/교사)
@router.get("/samples/all", response_model=List[PhysicalState])
def list_all_samples(
    _: User = Depends(require_roles(UserRole.ADMIN, UserRole.TEACHER)),
    storage: Storage = Depends(get_storage),
):
    return storage.get_physical_states()


# ✅ [READ] 학생별 측정
@router.get("/physical-states/{student_id}", response_model=List[PhysicalState])
def list_student_states(student_id: int, user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    ensure_student_access(user, student_id)
    return storage.get_physical_states_by_student(student_id)


@router.post("/samples", response_model=PhysicalState, status_code=201)
@router.post("/physical-states", response_model=PhysicalState, status_code=201)
def create_sample(payload: PhysicalStateCreate, user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    ensure_student_access(user, payload.student_id)
    _check_refs(storage, payload.student_id, payload.period_id)
    return storage.create_physical_state(payload.model_dump())


@router.put("/samples/{state_id}", response_model=PhysicalState)
@router.put("/physical-states/{state_id}", response_model=PhysicalState)
def update_sample(
    state_id: int,
    payload: PhysicalStateUpdate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    _get_owned(storage, user, state_id)
    data = payload.model_dump(exclude_unset=True)
    if "student_id" in data and data["student_id"] is None:
        data.pop("student_id")
    if "student_id" in data:
        ensure_student_access(user, data["student_id"])
    _check_refs(storage, data.get("student_id"), data.get("period_id"))
    return storage.update_physical_state(state_id, data)


@router.delete("/samples/{state_id}", status_code=204)
def delete_sample(state_id: int, user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    _get_owned(storage, user, state_id)
    storage.delete_physical_state(state_id)
    return Response(status_code=204)
