from fastapi import APIRouter, Depends, HTTPException

from dependencies.security import ensure_student_access, get_current_user
from dependencies.storage import get_storage
from schemas.enums import UserRole
from schemas.profiles import StudentProfile, TeacherProfile
from schemas.students import StudentProfileFields
from schemas.teachers import TeacherUpdate
from schemas.users import User, public_user
from services.storage.base import Storage

router = APIRouter(prefix="/profile", tags=["프로필"])


def _ensure_teacher_access(user: User, teacher_id: int) -> None:
    # 관리자는 모두, 교사는 본인만
    if user.role == UserRole.ADMIN.value:
        return
    if user.role != UserRole.TEACHER.value or user.teacher_id != teacher_id:
        raise HTTPException(status_code=403, detail="Access denied")


def _student_profile(storage: Storage, student_id: int) -> StudentProfile:
    student = storage.get_student(student_id)
    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")
    account = storage.get_user_by_student(student_id)
    if account is None:
        raise HTTPException(status_code=404, detail="User not found")
    return StudentProfile(**public_user(account).model_dump(), profile=student)


def _teacher_profile(storage: Storage, teacher_id: int) -> TeacherProfile:
    teacher = storage.get_teacher(teacher_id)
    if teacher is None:
        raise HTTPException(status_code=404, detail="Teacher not found")
    account = storage.get_user_by_teacher(teacher_id)
    if account is None:
        raise HTTPException(status_code=404, detail="User not found")
    return TeacherProfile(**public_user(account).model_dump(), profile=teacher)


# ==========================================================
# [학생 프로필]
# ==========================================================

# ✅ [READ] 학생 프로필 (본인 또는 관리자/교사)
@router.get("/student/{student_id}", response_model=StudentProfile)
def read_student_profile(student_id: int, user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    ensure_student_access(user, student_id)
    return _student_profile(storage, student_id)


# ✅ [UPDATE] 학생 프로필 수정 (그룹 배정은 /students 에서)
@router.put("/student/{student_id}", response_model=StudentProfile)
def update_student_profile(
    student_id: int,
    payload: StudentProfileFields,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    ensure_student_access(user, student_id)
    data = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None or k != "full_name"}
    if storage.update_student(student_id, data) is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return _student_profile(storage, student_id)


# ==========================================================
# [교사 프로필]
# ==========================================================

# ✅ [READ] 교사 프로필 (본인 또는 관리자)
@router.get("/teacher/{teacher_id}", response_model=TeacherProfile)
def read_teacher_profile(teacher_id: int, user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    _ensure_teacher_access(user, teacher_id)
    return _teacher_profile(storage, teacher_id)


# ✅ [UPDATE] 교사 프로필 수정
@router.put("/teacher/{teacher_id}", response_model=TeacherProfile)
def update_teacher_profile(
    teacher_id: int,
    payload: TeacherUpdate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    _ensure_teacher_access(user, teacher_id)
    data = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None or k != "full_name"}
    if storage.update_teacher(teacher_id, data) is None:
        raise HTTPException(status_code=404, detail="Teacher not found")
    return _teacher_profile(storage, teacher_id)
