from typing import Optional

from pydantic import Field

from schemas.common import CamelModel


class FacultyCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)   # 학부명
    description: Optional[str] = None                      # 설명


class FacultyUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None


class Faculty(FacultyCreate):
    faculty_id: int
