from typing import Optional

from pydantic import Field

from schemas.common import CamelModel


class GroupCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)   # 그룹명
    faculty_id: int                                        # 소속 학부
    teacher_id: Optional[int] = None                       # 담당 교사
    year: Optional[int] = None                             # 입학 연도


class GroupUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    faculty_id: Optional[int] = None
    teacher_id: Optional[int] = None
    year: Optional[int] = None


class Group(GroupCreate):
    group_id: int
