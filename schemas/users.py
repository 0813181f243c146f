from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from schemas.common import CamelModel
from schemas.enums import UserRole


# ==========================================================
# [입력용 스키마]
# ==========================================================
class UserBase(CamelModel):
    username: str = Field(..., min_length=1, max_length=100)   # 로그인 아이디
    role: UserRole                                            # admin / teacher / student
    full_name: Optional[str] = None                           # 표시 이름
    student_id: Optional[int] = None                          # 학생 계정이면 student.student_id
    teacher_id: Optional[int] = None                          # 교사 계정이면 teacher.teacher_id


class UserCreate(UserBase):
    password: str = Field(..., min_length=1)                  # 평문 (저장 전 해시)


class UserUpdate(CamelModel):
    username: Optional[str] = Field(default=None, min_length=1, max_length=100)
    password: Optional[str] = Field(default=None, min_length=1)
    role: Optional[UserRole] = None
    full_name: Optional[str] = None
    student_id: Optional[int] = None
    teacher_id: Optional[int] = None
    visual_settings: Optional[Dict[str, Any]] = None


class LoginRequest(CamelModel):
    username: str
    password: str


class VisualSettingsUpdate(CamelModel):
    visual_settings: Dict[str, Any] = Field(default_factory=dict)


# ==========================================================
# [출력용 스키마] - 비밀번호는 절대 포함하지 않음
# ==========================================================
class User(UserBase):
    id: int
    visual_settings: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None


# ✅ 저장소 내부 전용 (비밀번호 해시 포함)
class UserInDB(User):
    password: str


class UserRecord(CamelModel):
    """/users/{id}/record 응답 - 계정에 연결된 학생/교사 ID"""
    student_id: Optional[int] = None
    teacher_id: Optional[int] = None


def public_user(record: UserInDB) -> User:
    """저장소 레코드 → 응답용 (비밀번호 제거)"""
    return User.model_validate(record.model_dump(exclude={"password"}))
