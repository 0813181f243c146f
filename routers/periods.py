from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from dependencies.security import get_current_user, require_roles
from dependencies.storage import get_storage
from schemas.enums import UserRole
from schemas.periods import Period, PeriodCreate
from schemas.users import User
from services.storage.base import Storage

router = APIRouter(prefix="/periods", tags=["학사 기간"])


# ✅ [READ] 기간 목록
@router.get("", response_model=List[Period])
def list_periods(_: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    return storage.get_all_periods()


# ✅ [CREATE] 기간 추가 (생성 후 수정 불가)
@router.post("", response_model=Period, status_code=201)
def create_period(
    payload: PeriodCreate,
    _: User = Depends(require_roles(UserRole.ADMIN, UserRole.TEACHER)),
    storage: Storage = Depends(get_storage),
):
    return storage.create_period(payload.model_dump())


# ✅ [DELETE] 기간 삭제 (기록이 있으면 400)
@router.delete("/{period_id}", status_code=204)
def delete_period(period_id: int, _: User = Depends(require_roles(UserRole.ADMIN)), storage: Storage = Depends(get_storage)):
    if not storage.delete_period(period_id):
        raise HTTPException(status_code=404, detail="Period not found")
    return Response(status_code=204)
