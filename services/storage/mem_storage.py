"""
services/storage/mem_storage.py

프로세스 메모리 저장소 (STORAGE_BACKEND=memory, 개발/데모/테스트용).
DatabaseStorage 와 같은 스키마 타입 · 같은 정렬(기본키 오름차순) · 같은 삭제 규칙을 따른다.
"""

import threading
from datetime import datetime
from typing import Callable, Dict, Generic, Iterator, List, Optional, Type, TypeVar

from pydantic import BaseModel

from schemas.faculties import Faculty
from schemas.groups import Group
from schemas.periods import Period
from schemas.physical_states import PhysicalState
from schemas.physical_tests import PhysicalTest
from schemas.results import Result
from schemas.sport_results import SportResult
from schemas.students import Student
from schemas.teachers import Teacher
from schemas.users import UserInDB
from services.storage.base import Data, DuplicateEntityError, EntityInUseError, Storage

T = TypeVar("T", bound=BaseModel)


class _Table(Generic[T]):
    """자동 증가 ID + 스키마 객체 보관. 꺼낼 때/넣을 때 모두 복사본"""

    def __init__(self, schema: Type[T], pk: str):
        self.schema = schema
        self.pk = pk
        self._rows: Dict[int, T] = {}
        self._next_id = 1

    def __iter__(self) -> Iterator[T]:
        return (row.model_copy(deep=True) for row in self._rows.values())

    def get(self, pk: int) -> Optional[T]:
        row = self._rows.get(pk)
        return row.model_copy(deep=True) if row is not None else None

    def where(self, predicate: Callable[[T], bool]) -> List[T]:
        return [row for row in self if predicate(row)]

    def any(self, predicate: Callable[[T], bool]) -> bool:
        return any(predicate(row) for row in self._rows.values())

    def insert(self, data: Data) -> T:
        fields = {k: v for k, v in data.items() if k in self.schema.model_fields and k != self.pk}
        fields[self.pk] = self._next_id
        row = self.schema.model_validate(fields)
        self._rows[self._next_id] = row
        self._next_id += 1
        return row.model_copy(deep=True)

    def update(self, pk: int, data: Data) -> Optional[T]:
        current = self._rows.get(pk)
        if current is None:
            return None
        merged = current.model_dump()
        merged.update({k: v for k, v in data.items() if k in self.schema.model_fields and k != self.pk})
        row = self.schema.model_validate(merged)
        self._rows[pk] = row
        return row.model_copy(deep=True)

    def delete(self, pk: int) -> bool:
        return self._rows.pop(pk, None) is not None


class MemStorage(Storage):
    def __init__(self):
        self._lock = threading.RLock()
        self.users = _Table(UserInDB, "id")
        self.faculties = _Table(Faculty, "faculty_id")
        self.groups = _Table(Group, "group_id")
        self.teachers = _Table(Teacher, "teacher_id")
        self.students = _Table(Student, "student_id")
        self.periods = _Table(Period, "period_id")
        self.physical_states = _Table(PhysicalState, "state_id")
        self.physical_tests = _Table(PhysicalTest, "test_id")
        self.sport_results = _Table(SportResult, "sport_result_id")
        self.results = _Table(Result, "result_id")

    def _ensure_unused(self, label: str, pk: int, *checks) -> None:
        for table, predicate in checks:
            if table.any(predicate):
                raise EntityInUseError(f"{label} {pk} is still referenced by {table.schema.__name__}")

    def _teacher_student_ids(self, teacher_id: int) -> set:
        group_ids = {g.group_id for g in self.groups.where(lambda g: g.teacher_id == teacher_id)}
        return {s.student_id for s in self.students.where(lambda s: s.group_id in group_ids)}

    # ==========================================================
    # [사용자]
    # ==========================================================
    def get_user(self, user_id: int) -> Optional[UserInDB]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[UserInDB]:
        found = self.users.where(lambda u: u.username == username)
        return found[0] if found else None

    def get_user_by_student(self, student_id: int) -> Optional[UserInDB]:
        found = self.users.where(lambda u: u.student_id == student_id)
        return found[0] if found else None

    def get_user_by_teacher(self, teacher_id: int) -> Optional[UserInDB]:
        found = self.users.where(lambda u: u.teacher_id == teacher_id)
        return found[0] if found else None

    def get_users_by_role(self, role: str) -> List[UserInDB]:
        return self.users.where(lambda u: u.role == role)

    def count_users(self) -> int:
        return len(list(self.users))

    def create_user(self, data: Data) -> UserInDB:
        with self._lock:
            data = dict(data)
            if data.get("visual_settings") is None:
                data["visual_settings"] = {}
            data.setdefault("created_at", datetime.now())
            return self.users.insert(data)

    def update_user(self, user_id: int, data: Data) -> Optional[UserInDB]:
        with self._lock:
            return self.users.update(user_id, data)

    def delete_user(self, user_id: int) -> bool:
        with self._lock:
            return self.users.delete(user_id)

    # ==========================================================
    # [학부]
    # ==========================================================
    def get_all_faculties(self) -> List[Faculty]:
        return list(self.faculties)

    def get_faculty(self, faculty_id: int) -> Optional[Faculty]:
        return self.faculties.get(faculty_id)

    def _ensure_unique_faculty_name(self, data: Data, faculty_id: Optional[int] = None) -> None:
        name = data.get("name")
        if name is not None and self.faculties.any(lambda f: f.name == name and f.faculty_id != faculty_id):
            raise DuplicateEntityError("Faculty name already exists")

    def create_faculty(self, data: Data) -> Faculty:
        with self._lock:
            self._ensure_unique_faculty_name(data)
            return self.faculties.insert(data)

    def update_faculty(self, faculty_id: int, data: Data) -> Optional[Faculty]:
        with self._lock:
            if self.faculties.get(faculty_id) is None:
                return None
            self._ensure_unique_faculty_name(data, faculty_id)
            return self.faculties.update(faculty_id, data)

    def delete_faculty(self, faculty_id: int) -> bool:
        with self._lock:
            self._ensure_unused("Faculty", faculty_id, (self.groups, lambda g: g.faculty_id == faculty_id))
            return self.faculties.delete(faculty_id)

    # ==========================================================
    # [그룹]
    # ==========================================================
    def get_all_groups(self) -> List[Group]:
        return list(self.groups)

    def get_groups_by_faculty(self, faculty_id: int) -> List[Group]:
        return self.groups.where(lambda g: g.faculty_id == faculty_id)

    def get_groups_by_teacher(self, teacher_id: int) -> List[Group]:
        return self.groups.where(lambda g: g.teacher_id == teacher_id)

    def get_group(self, group_id: int) -> Optional[Group]:
        return self.groups.get(group_id)

    def create_group(self, data: Data) -> Group:
        with self._lock:
            return self.groups.insert(data)

    def update_group(self, group_id: int, data: Data) -> Optional[Group]:
        with self._lock:
            return self.groups.update(group_id, data)

    def delete_group(self, group_id: int) -> bool:
        with self._lock:
            self._ensure_unused("Group", group_id, (self.students, lambda s: s.group_id == group_id))
            return self.groups.delete(group_id)

    # ==========================================================
    # [교사]
    # ==========================================================
    def get_all_teachers(self) -> List[Teacher]:
        return list(self.teachers)

    def get_teacher(self, teacher_id: int) -> Optional[Teacher]:
        return self.teachers.get(teacher_id)

    def create_teacher(self, data: Data) -> Teacher:
        with self._lock:
            return self.teachers.insert(data)

    def update_teacher(self, teacher_id: int, data: Data) -> Optional[Teacher]:
        with self._lock:
            return self.teachers.update(teacher_id, data)

    def delete_teacher(self, teacher_id: int) -> bool:
        with self._lock:
            self._ensure_unused(
                "Teacher", teacher_id,
                (self.groups, lambda g: g.teacher_id == teacher_id),
                (self.results, lambda r: r.assessed_by == teacher_id),
            )
            if not self.teachers.delete(teacher_id):
                return False
            for account in self.users.where(lambda u: u.teacher_id == teacher_id):
                self.users.delete(account.id)
            return True

    # ==========================================================
    # [학생]
    # ==========================================================
    def get_all_students(self) -> List[Student]:
        return list(self.students)

    def get_students_by_group(self, group_id: int) -> List[Student]:
        return self.students.where(lambda s: s.group_id == group_id)

    def get_student(self, student_id: int) -> Optional[Student]:
        return self.students.get(student_id)

    def create_student(self, data: Data) -> Student:
        with self._lock:
            return self.students.insert(data)

    def update_student(self, student_id: int, data: Data) -> Optional[Student]:
        with self._lock:
            return self.students.update(student_id, data)

    def delete_student(self, student_id: int) -> bool:
        owned = lambda row: row.student_id == student_id  # noqa: E731
        with self._lock:
            self._ensure_unused(
                "Student", student_id,
                (self.physical_states, owned),
                (self.physical_tests, owned),
                (self.sport_results, owned),
                (self.results, owned),
            )
            if not self.students.delete(student_id):
                return False
            for account in self.users.where(owned):
                self.users.delete(account.id)
            return True

    # ==========================================================
    # [학사 기간]
    # ==========================================================
    def get_all_periods(self) -> List[Period]:
        return list(self.periods)

    def get_period(self, period_id: int) -> Optional[Period]:
        return self.periods.get(period_id)

    def create_period(self, data: Data) -> Period:
        with self._lock:
            return self.periods.insert(data)

    def delete_period(self, period_id: int) -> bool:
        in_period = lambda row: row.period_id == period_id  # noqa: E731
        with self._lock:
            self._ensure_unused(
                "Period", period_id,
                (self.physical_states, in_period),
                (self.physical_tests, in_period),
                (self.sport_results, in_period),
                (self.results, in_period),
            )
            return self.periods.delete(period_id)

    # ==========================================================
    # [신체 측정]
    # ==========================================================
    def get_physical_states(self) -> List[PhysicalState]:
        return list(self.physical_states)

    def get_physical_states_by_student(self, student_id: int) -> List[PhysicalState]:
        return self.physical_states.where(lambda s: s.student_id == student_id)

    def get_physical_state(self, state_id: int) -> Optional[PhysicalState]:
        return self.physical_states.get(state_id)

    def create_physical_state(self, data: Data) -> PhysicalState:
        with self._lock:
            return self.physical_states.insert(data)

    def update_physical_state(self, state_id: int, data: Data) -> Optional[PhysicalState]:
        with self._lock:
            return self.physical_states.update(state_id, data)

    def delete_physical_state(self, state_id: int) -> bool:
        with self._lock:
            self._ensure_unused("Physical state", state_id, (self.results, lambda r: r.state_id == state_id))
            return self.physical_states.delete(state_id)

    # ==========================================================
    # [일반 체력 검사]
    # ==========================================================
    def get_physical_tests(self) -> List[PhysicalTest]:
        return list(self.physical_tests)

    def get_physical_tests_by_student(self, student_id: int) -> List[PhysicalTest]:
        return self.physical_tests.where(lambda t: t.student_id == student_id)

    def get_physical_tests_by_teacher(self, teacher_id: int) -> List[PhysicalTest]:
        student_ids = self._teacher_student_ids(teacher_id)
        return self.physical_tests.where(lambda t: t.student_id in student_ids)

    def get_physical_test(self, test_id: int) -> Optional[PhysicalTest]:
        return self.physical_tests.get(test_id)

    def create_physical_test(self, data: Data) -> PhysicalTest:
        with self._lock:
            return self.physical_tests.insert(data)

    def update_physical_test(self, test_id: int, data: Data) -> Optional[PhysicalTest]:
        with self._lock:
            return self.physical_tests.update(test_id, data)

    def delete_physical_test(self, test_id: int) -> bool:
        with self._lock:
            self._ensure_unused("Physical test", test_id, (self.results, lambda r: r.test_id == test_id))
            return self.physical_tests.delete(test_id)

    # ==========================================================
    # [종목별 실기 기록]
    # ==========================================================
    def get_sport_results_by_student(self, student_id: int) -> List[SportResult]:
        return self.sport_results.where(lambda r: r.student_id == student_id)

    def get_sport_results_by_period(self, period_id: int) -> List[SportResult]:
        return self.sport_results.where(lambda r: r.period_id == period_id)

    def get_sport_results_by_period_and_teacher(self, teacher_id: int, period_id: int) -> List[SportResult]:
        student_ids = self._teacher_student_ids(teacher_id)
        return self.sport_results.where(lambda r: r.period_id == period_id and r.student_id in student_ids)

    def get_sport_result(self, sport_result_id: int) -> Optional[SportResult]:
        return self.sport_results.get(sport_result_id)

    def create_sport_result(self, data: Data) -> SportResult:
        with self._lock:
            return self.sport_results.insert(data)

    def update_sport_result(self, sport_result_id: int, data: Data) -> Optional[SportResult]:
        with self._lock:
            return self.sport_results.update(sport_result_id, data)

    def delete_sport_result(self, sport_result_id: int) -> bool:
        with self._lock:
            self._ensure_unused(
                "Sport result", sport_result_id,
                (self.results, lambda r: r.sport_result_id == sport_result_id),
            )
            return self.sport_results.delete(sport_result_id)

    # ==========================================================
    # [종합 평가]
    # ==========================================================
    def get_results_by_student(self, student_id: int) -> List[Result]:
        return self.results.where(lambda r: r.student_id == student_id)

    def get_results_by_group(self, group_id: int) -> List[Result]:
        members = {s.student_id for s in self.get_students_by_group(group_id)}
        return self.results.where(lambda r: r.student_id in members)

    def get_results_by_period(self, period_id: int) -> List[Result]:
        return self.results.where(lambda r: r.period_id == period_id)

    def get_result(self, result_id: int) -> Optional[Result]:
        return self.results.get(result_id)

    def create_result(self, data: Data) -> Result:
        with self._lock:
            data = dict(data)
            data.setdefault("assessed_at", datetime.now())
            return self.results.insert(data)

    def update_result(self, result_id: int, data: Data) -> Optional[Result]:
        with self._lock:
            return self.results.update(result_id, data)

    def delete_result(self, result_id: int) -> bool:
        with self._lock:
            return self.results.delete(result_id)
