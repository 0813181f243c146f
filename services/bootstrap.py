"""
services/bootstrap.py

빈 저장소에 기본 데이터 생성 (서버 시작 시, SEED_DEFAULT_DATA=true 일 때).
계정: admin/admin123, teacher/teacher123, student/student123 (비밀번호는 해시로 저장)
"""

import logging

from schemas.enums import MedicalGroup, PeriodOfStudy, UserRole
from services.storage.base import Storage
from utils.security import hash_password

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNTS = {
    UserRole.ADMIN.value: ("admin", "admin123"),
    UserRole.TEACHER.value: ("teacher", "teacher123"),
    UserRole.STUDENT.value: ("student", "student123"),
}


def seed_default_data(storage: Storage) -> bool:
    """사용자가 한 명도 없을 때만 생성. 생성했으면 True"""
    if storage.count_users() > 0:
        return False

    faculty = storage.create_faculty({
        "name": "Факультет физической культуры",
        "description": "Физическое воспитание и спорт",
    })
    teacher = storage.create_teacher({
        "full_name": "Иванов Иван Иванович",
        "position": "Старший преподаватель",
        "educational_department": "Кафедра физического воспитания",
    })
    group = storage.create_group({
        "name": "ФК-101",
        "faculty_id": faculty.faculty_id,
        "teacher_id": teacher.teacher_id,
    })
    storage.create_period({"period_of_study": PeriodOfStudy.SEMESTER_1.value})
    student = storage.create_student({
        "full_name": "Петров Пётр Петрович",
        "group_id": group.group_id,
        "medical_group": MedicalGroup.BASIC.value,
    })

    links = {
        UserRole.ADMIN.value: {"full_name": "Administrator"},
        UserRole.TEACHER.value: {"full_name": teacher.full_name, "teacher_id": teacher.teacher_id},
        UserRole.STUDENT.value: {"full_name": student.full_name, "student_id": student.student_id},
    }
    for role, (username, password) in DEFAULT_ACCOUNTS.items():
        storage.create_user({
            "username": username,
            "password": hash_password(password),
            "role": role,
            **links[role],
        })

    logger.info("Seeded default faculty, group, period and %d accounts", len(DEFAULT_ACCOUNTS))
    return True
