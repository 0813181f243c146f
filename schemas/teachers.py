from datetime import date
from typing import Optional

from pydantic import Field

from schemas.common import CamelModel


class TeacherFields(CamelModel):
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    position: Optional[str] = None                   # 직위
    date_of_birth: Optional[date] = None
    educational_department: Optional[str] = None     # 소속 학과
    phone: Optional[str] = None
    nationality: Optional[str] = None


# ✅ 생성 시 이름은 필수
class TeacherCreate(TeacherFields):
    full_name: str = Field(..., min_length=1, max_length=200)


# ✅ 수정/프로필 수정은 전달된 필드만 반영
class TeacherUpdate(TeacherFields):
    pass


class Teacher(TeacherCreate):
    teacher_id: int
