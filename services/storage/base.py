"""
services/storage/base.py

저장소 인터페이스. 라우터는 이 인터페이스에만 의존하고,
구현은 설정(STORAGE_BACKEND)에 따라 SQL(DatabaseStorage) 또는 메모리(MemStorage)로 교체된다.

- 모든 조회/생성/수정 결과는 pydantic 스키마 객체로 반환 (구현 간 동일)
- update_* 는 전달된 필드만 반영하는 부분 수정, 대상이 없으면 None
- delete_* 는 삭제 여부(bool), 다른 레코드가 참조 중이면 EntityInUseError
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

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

Data = Dict[str, Any]


class StorageError(Exception):
    """저장소 계층 예외"""
    pass


class EntityInUseError(StorageError):
    """다른 레코드가 참조 중이라 삭제할 수 없음"""
    pass


class DuplicateEntityError(StorageError):
    """고유해야 하는 값(학부명 등)이 이미 존재함"""
    pass


class Storage(ABC):
    # ===============================================================
    # 사용자
    # ===============================================================
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[UserInDB]: ...
    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[UserInDB]: ...
    @abstractmethod
    def get_user_by_student(self, student_id: int) -> Optional[UserInDB]: ...
    @abstractmethod
    def get_user_by_teacher(self, teacher_id: int) -> Optional[UserInDB]: ...
    @abstractmethod
    def get_users_by_role(self, role: str) -> List[UserInDB]: ...
    @abstractmethod
    def count_users(self) -> int: ...
    @abstractmethod
    def create_user(self, data: Data) -> UserInDB: ...
    @abstractmethod
    def update_user(self, user_id: int, data: Data) -> Optional[UserInDB]: ...
    @abstractmethod
    def delete_user(self, user_id: int) -> bool: ...

    # ===============================================================
    # 학부
    # ===============================================================
    @abstractmethod
    def get_all_faculties(self) -> List[Faculty]: ...
    @abstractmethod
    def get_faculty(self, faculty_id: int) -> Optional[Faculty]: ...
    @abstractmethod
    def create_faculty(self, data: Data) -> Faculty: ...
    @abstractmethod
    def update_faculty(self, faculty_id: int, data: Data) -> Optional[Faculty]: ...
    @abstractmethod
    def delete_faculty(self, faculty_id: int) -> bool: ...

    # ===============================================================
    # 그룹
    # ===============================================================
    @abstractmethod
    def get_all_groups(self) -> List[Group]: ...
    @abstractmethod
    def get_groups_by_faculty(self, faculty_id: int) -> List[Group]: ...
    @abstractmethod
    def get_groups_by_teacher(self, teacher_id: int) -> List[Group]: ...
    @abstractmethod
    def get_group(self, group_id: int) -> Optional[Group]: ...
    @abstractmethod
    def create_group(self, data: Data) -> Group: ...
    @abstractmethod
    def update_group(self, group_id: int, data: Data) -> Optional[Group]: ...
    @abstractmethod
    def delete_group(self, group_id: int) -> bool: ...

    # ===============================================================
    # 교사
    # ===============================================================
    @abstractmethod
    def get_all_teachers(self) -> List[Teacher]: ...
    @abstractmethod
    def get_teacher(self, teacher_id: int) -> Optional[Teacher]: ...
    @abstractmethod
    def create_teacher(self, data: Data) -> Teacher: ...
    @abstractmethod
    def update_teacher(self, teacher_id: int, data: Data) -> Optional[Teacher]: ...
    @abstractmethod
    def delete_teacher(self, teacher_id: int) -> bool: ...

    # ===============================================================
    # 학생
    # ===============================================================
    @abstractmethod
    def get_all_students(self) -> List[Student]: ...
    @abstractmethod
    def get_students_by_group(self, group_id: int) -> List[Student]: ...
    @abstractmethod
    def get_student(self, student_id: int) -> Optional[Student]: ...
    @abstractmethod
    def create_student(self, data: Data) -> Student: ...
    @abstractmethod
    def update_student(self, student_id: int, data: Data) -> Optional[Student]: ...
    @abstractmethod
    def delete_student(self, student_id: int) -> bool: ...

    # ===============================================================
    # 학사 기간
    # ===============================================================
    @abstractmethod
    def get_all_periods(self) -> List[Period]: ...
    @abstractmethod
    def get_period(self, period_id: int) -> Optional[Period]: ...
    @abstractmethod
    def create_period(self, data: Data) -> Period: ...
    @abstractmethod
    def delete_period(self, period_id: int) -> bool: ...

    # ===============================================================
    # 신체 측정 (samples)
    # ===============================================================
    @abstractmethod
    def get_physical_states(self) -> List[PhysicalState]: ...
    @abstractmethod
    def get_physical_states_by_student(self, student_id: int) -> List[PhysicalState]: ...
    @abstractmethod
    def get_physical_state(self, state_id: int) -> Optional[PhysicalState]: ...
    @abstractmethod
    def create_physical_state(self, data: Data) -> PhysicalState: ...
    @abstractmethod
    def update_physical_state(self, state_id: int, data: Data) -> Optional[PhysicalState]: ...
    @abstractmethod
    def delete_physical_state(self, state_id: int) -> bool: ...

    # ===============================================================
    # 일반 체력 검사 (tests)
    # ===============================================================
    @abstractmethod
    def get_physical_tests(self) -> List[PhysicalTest]: ...
    @abstractmethod
    def get_physical_tests_by_student(self, student_id: int) -> List[PhysicalTest]: ...
    @abstractmethod
    def get_physical_tests_by_teacher(self, teacher_id: int) -> List[PhysicalTest]: ...
    @abstractmethod
    def get_physical_test(self, test_id: int) -> Optional[PhysicalTest]: ...
    @abstractmethod
    def create_physical_test(self, data: Data) -> PhysicalTest: ...
    @abstractmethod
    def update_physical_test(self, test_id: int, data: Data) -> Optional[PhysicalTest]: ...
    @abstractmethod
    def delete_physical_test(self, test_id: int) -> bool: ...

    # ===============================================================
    # 종목별 실기 기록
    # ===============================================================
    @abstractmethod
    def get_sport_results_by_student(self, student_id: int) -> List[SportResult]: ...
    @abstractmethod
    def get_sport_results_by_period(self, period_id: int) -> List[SportResult]: ...
    @abstractmethod
    def get_sport_results_by_period_and_teacher(self, teacher_id: int, period_id: int) -> List[SportResult]: ...
    @abstractmethod
    def get_sport_result(self, sport_result_id: int) -> Optional[SportResult]: ...
    @abstractmethod
    def create_sport_result(self, data: Data) -> SportResult: ...
    @abstractmethod
    def update_sport_result(self, sport_result_id: int, data: Data) -> Optional[SportResult]: ...
    @abstractmethod
    def delete_sport_result(self, sport_result_id: int) -> bool: ...

    # ===============================================================
    # 종합 평가
    # ===============================================================
    @abstractmethod
    def get_results_by_student(self, student_id: int) -> List[Result]: ...
    @abstractmethod
    def get_results_by_group(self, group_id: int) -> List[Result]: ...
    @abstractmethod
    def get_results_by_period(self, period_id: int) -> List[Result]: ...
    @abstractmethod
    def get_result(self, result_id: int) -> Optional[Result]: ...
    @abstractmethod
    def create_result(self, data: Data) -> Result: ...
    @abstractmethod
    def update_result(self, result_id: int, data: Data) -> Optional[Result]: ...
    @abstractmethod
    def delete_result(self, result_id: int) -> bool: ...

    # ===============================================================
    # 트랜잭션 (메모리 구현은 아무것도 하지 않음)
    # ===============================================================
    def rollback(self) -> None:
        pass
