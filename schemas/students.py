from datetime import date
from typing import Optional

from pydantic import Field

from schemas.common import CamelModel
from schemas.enums import Gender, MedicalGroup


class StudentProfileFields(CamelModel):
    """학생 본인이 수정할 수 있는 프로필 항목 (그룹 배정 제외)"""
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    gender: Optional[Gender] = None
    date_of_birth: Optional[date] = None
    place_of_birth: Optional[str] = None
    medical_group: Optional[MedicalGroup] = None
    medical_diagnosis: Optional[str] = None
    previous_illnesses: Optional[str] = None
    active_sports: Optional[str] = None
    previous_sports: Optional[str] = None
    additional_info: Optional[str] = None
    phone: Optional[str] = None
    nationality: Optional[str] = None
    address: Optional[str] = None
    school_graduated: Optional[str] = None
    educational_department: Optional[str] = None


class StudentUpdate(StudentProfileFields):
    group_id: Optional[int] = None


class StudentCreate(StudentUpdate):
    full_name: str = Field(..., min_length=1, max_length=200)
    medical_group: MedicalGroup = MedicalGroup.BASIC


class Student(StudentCreate):
    student_id: int
    medical_group: Optional[MedicalGroup] = MedicalGroup.BASIC


# ✅ POST /students - 학생 레코드 + 로그인 계정을 함께 생성
class StudentAccountCreate(CamelModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1)
    last_name: Optional[str] = None
    patronymic: Optional[str] = None
    group_id: Optional[int] = None
    faculty_id: Optional[int] = None        # 화면 필터용, 저장하지 않음
    medical_group: MedicalGroup = MedicalGroup.BASIC


class BulkImportRow(CamelModel):
    success: bool
    username: Optional[str] = None
    message: str
