import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Response, UploadFile

from config.settings import settings
from dependencies.security import ensure_student_access, get_current_user, is_staff, require_roles
from dependencies.storage import get_storage
from schemas.enums import UserRole
from schemas.profiles import StudentAccount
from schemas.students import BulkImportRow, Student, StudentAccountCreate, StudentUpdate
from schemas.users import User, public_user
from services.storage.base import Storage
from services.student_import import (
    StudentImportError,
    compose_full_name,
    create_student_account,
    import_students_csv,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/students", tags=["학생 정보"])

admin_only = require_roles(UserRole.ADMIN)


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [READ] 전체 / 그룹별 학생 조회
@router.get("", response_model=List[Student])
def read_students(
    group_id: Optional[int] = Query(default=None, alias="groupId"),
    _: User = Depends(require_roles(UserRole.ADMIN, UserRole.TEACHER)),
    storage: Storage = Depends(get_storage),
):
    if group_id is not None:
        return storage.get_students_by_group(group_id)
    return storage.get_all_students()


# ✅ [CREATE] 학생 레코드 + 로그인 계정 생성
@router.post("", response_model=StudentAccount, status_code=201)
def create_student(payload: StudentAccountCreate, _: User = Depends(admin_only), storage: Storage = Depends(get_storage)):
    if payload.group_id is not None and storage.get_group(payload.group_id) is None:
        raise HTTPException(status_code=400, detail="Group not found")
    try:
        user, student = create_student_account(
            storage,
            username=payload.username,
            password=payload.password,
            full_name=compose_full_name(payload.first_name, payload.last_name, payload.patronymic),
            group_id=payload.group_id,
            medical_group=payload.medical_group,
        )
    except StudentImportError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return StudentAccount(**public_user(user).model_dump(), student=student)


# ✅ [CREATE] CSV 일괄 등록 (firstName,lastName,patronymic,username,password)
@router.post("/bulk", response_model=List[BulkImportRow], status_code=201)
async def bulk_create_students(
    file: Optional[UploadFile] = File(default=None),
    group_id: Optional[int] = Form(default=None, alias="groupId"),
    _: User = Depends(admin_only),
    storage: Storage = Depends(get_storage),
):
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded")
    if not group_id:
        raise HTTPException(status_code=400, detail="Group ID is required")
    if storage.get_group(group_id) is None:
        raise HTTPException(status_code=400, detail="Group not found")

    content = await file.read()
    if len(content) > settings.MAX_UPLOAD_MB * 1024 * 1024:
        raise HTTPException(status_code=413, detail="File too large")
    try:
        return import_students_csv(storage, content, group_id)
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File must be UTF-8 encoded CSV")


# ✅ [UPDATE] 학생 정보 수정 (관리자/교사 또는 본인, 본인은 그룹 변경 불가)
@router.put("/{student_id}", response_model=Student)
def update_student(
    student_id: int,
    payload: StudentUpdate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    ensure_student_access(user, student_id)
    data = payload.model_dump(exclude_unset=True)
    if not is_staff(user):
        data.pop("group_id", None)
    data = {k: v for k, v in data.items() if v is not None or k != "full_name"}
    if data.get("group_id") is not None and storage.get_group(data["group_id"]) is None:
        raise HTTPException(status_code=400, detail="Group not found")
    updated = storage.update_student(student_id, data)
    if updated is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return updated


# ✅ [DELETE] 학생 삭제 (기록이 있으면 400, 연결 계정은 함께 삭제)
@router.delete("/{student_id}", status_code=204)
def delete_student(student_id: int, _: User = Depends(admin_only), storage: Storage = Depends(get_storage)):
    if not storage.delete_student(student_id):
        raise HTTPException(status_code=404, detail="Student not found")
    logger.info("Deleted student %s", student_id)
    return Response(status_code=204)
