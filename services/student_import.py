"""
services/student_import.py

학생 레코드 + 로그인 계정 동시 생성.
- POST /api/students (1명), POST /api/students/bulk (CSV), scripts/import_students.py 공용
- 계정 생성에 실패하면 먼저 만든 학생 레코드를 지운다
"""

import csv
import io
import logging
from typing import List, Optional, Tuple, Union

from schemas.enums import MedicalGroup, UserRole
from schemas.students import BulkImportRow, Student
from schemas.users import UserInDB
from services.storage.base import Storage
from utils.security import hash_password

logger = logging.getLogger(__name__)

# CSV 헤더 (순서 무관)
CSV_COLUMNS = ("firstName", "lastName", "patronymic", "username", "password")


class StudentImportError(ValueError):
    pass


def compose_full_name(first_name: Optional[str], last_name: Optional[str], patronymic: Optional[str]) -> str:
    return " ".join(part.strip() for part in (first_name, last_name, patronymic) if part and part.strip())


def create_student_account(
    storage: Storage,
    username: str,
    password: str,
    full_name: str,
    group_id: Optional[int] = None,
    medical_group: str = MedicalGroup.BASIC.value,
) -> Tuple[UserInDB, Student]:
    if not full_name:
        raise StudentImportError("Full name is required")
    if not username or not password:
        raise StudentImportError("Username and password are required")
    if storage.get_user_by_username(username) is not None:
        raise StudentImportError("Username already exists")

    student = storage.create_student({
        "full_name": full_name,
        "group_id": group_id,
        "medical_group": medical_group,
    })
    try:
        user = storage.create_user({
            "username": username,
            "password": hash_password(password),
            "role": UserRole.STUDENT.value,
            "full_name": full_name,
            "student_id": student.student_id,
        })
    except Exception:
        logger.exception("Failed to create account %s, removing student %s", username, student.student_id)
        storage.rollback()
        storage.delete_student(student.student_id)
        raise StudentImportError("Failed to create user account")
    return user, student


def import_students_csv(storage: Storage, content: Union[bytes, str], group_id: int) -> List[BulkImportRow]:
    """CSV 한 행당 학생 1명. 행 단위로 성공/실패를 기록하고 계속 진행"""
    if isinstance(content, bytes):
        content = content.decode("utf-8-sig")
    reader = csv.DictReader(io.StringIO(content))

    results: List[BulkImportRow] = []
    for row in reader:
        if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
            continue  # 빈 줄
        username = (row.get("username") or "").strip()
        try:
            create_student_account(
                storage,
                username=username,
                password=(row.get("password") or "").strip(),
                full_name=compose_full_name(row.get("firstName"), row.get("lastName"), row.get("patronymic")),
                group_id=group_id,
            )
            results.append(BulkImportRow(
                success=True,
                username=username,
                message="Student and user account created successfully",
            ))
        except StudentImportError as e:
            results.append(BulkImportRow(success=False, username=username or None, message=str(e)))

    imported = sum(1 for r in results if r.success)
    logger.info("Imported %d/%d students into group %s", imported, len(results), group_id)
    return results
