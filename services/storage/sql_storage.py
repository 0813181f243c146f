"""
services/storage/sql_storage.py

SQLAlchemy 세션 기반 저장소.
- ORM 행은 밖으로 내보내지 않고 항상 pydantic 스키마로 변환해 반환
- 목록은 기본키 오름차순 (같은 학생·기간 기록이 여러 개면 마지막이 최신)
- 참조 중인 레코드 삭제 시 EntityInUseError (DB FK 오류 대신 400 응답용)
"""

import logging
from typing import List, Optional, Type

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from models.faculty import Faculty as FacultyModel
from models.group import Group as GroupModel
from models.period import Period as PeriodModel
from models.physical_state import PhysicalState as PhysicalStateModel
from models.physical_tests import PhysicalTest as PhysicalTestModel
from models.result import Result as ResultModel
from models.sport_results import SportResult as SportResultModel
from models.student import Student as StudentModel
from models.teacher import Teacher as TeacherModel
from models.users import User as UserModel
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

logger = logging.getLogger(__name__)


def _pk(model):
    return model.__mapper__.primary_key[0]


def _columns(model, data: Data) -> Data:
    # 모델에 없는 키(화면 전용 값 등)는 버린다
    names = set(model.__table__.columns.keys())
    return {k: v for k, v in data.items() if k in names}


class DatabaseStorage(Storage):
    def __init__(self, db: Session):
        self.db = db

    # ==========================================================
    # [공통 헬퍼]
    # ==========================================================
    def _get(self, model, schema: Type, pk: int):
        row = self.db.get(model, pk)
        return schema.model_validate(row) if row is not None else None

    def _list(self, model, schema: Type, *criteria) -> list:
        stmt = select(model).where(*criteria).order_by(_pk(model))
        return [schema.model_validate(row) for row in self.db.scalars(stmt)]

    def _create(self, model, schema: Type, data: Data):
        row = model(**_columns(model, data))
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return schema.model_validate(row)

    def _update(self, model, schema: Type, pk: int, data: Data):
        row = self.db.get(model, pk)
        if row is None:
            return None
        for key, value in _columns(model, data).items():
            if key != _pk(model).name:
                setattr(row, key, value)
        self.db.commit()
        self.db.refresh(row)
        return schema.model_validate(row)

    def _delete(self, model, pk: int, *cascade) -> bool:
        row = self.db.get(model, pk)
        if row is None:
            return False
        for dependent in cascade:
            self.db.delete(dependent)
        if cascade:
            # 참조하는 쪽(계정)을 먼저 지워야 FK 제약에 걸리지 않음
            self.db.flush()
        self.db.delete(row)
        self.db.commit()
        return True

    def _exists(self, model, *criteria) -> bool:
        stmt = select(func.count()).select_from(model).where(*criteria)
        return self.db.scalar(stmt) > 0

    def _ensure_unused(self, label: str, pk: int, *checks) -> None:
        for model, criterion in checks:
            if self._exists(model, criterion):
                logger.info("Refusing to delete %s %s: referenced by %s", label, pk, model.__tablename__)
                raise EntityInUseError(f"{label} {pk} is still referenced by {model.__tablename__}")

    def _teacher_student_ids(self, teacher_id: int):
        return (
            select(StudentModel.student_id)
            .join(GroupModel, StudentModel.group_id == GroupModel.group_id)
            .where(GroupModel.teacher_id == teacher_id)
        )

    def rollback(self) -> None:
        self.db.rollback()

    # ==========================================================
    # [사용자]
    # ==========================================================
    def get_user(self, user_id: int) -> Optional[UserInDB]:
        return self._get(UserModel, UserInDB, user_id)

    def get_user_by_username(self, username: str) -> Optional[UserInDB]:
        users = self._list(UserModel, UserInDB, UserModel.username == username)
        return users[0] if users else None

    def get_user_by_student(self, student_id: int) -> Optional[UserInDB]:
        users = self._list(UserModel, UserInDB, UserModel.student_id == student_id)
        return users[0] if users else None

    def get_user_by_teacher(self, teacher_id: int) -> Optional[UserInDB]:
        users = self._list(UserModel, UserInDB, UserModel.teacher_id == teacher_id)
        return users[0] if users else None

    def get_users_by_role(self, role: str) -> List[UserInDB]:
        return self._list(UserModel, UserInDB, UserModel.role == role)

    def count_users(self) -> int:
        return self.db.scalar(select(func.count()).select_from(UserModel))

    def create_user(self, data: Data) -> UserInDB:
        data = dict(data)
        if data.get("visual_settings") is None:
            data["visual_settings"] = {}
        return self._create(UserModel, UserInDB, data)

    def update_user(self, user_id: int, data: Data) -> Optional[UserInDB]:
        return self._update(UserModel, UserInDB, user_id, data)

    def delete_user(self, user_id: int) -> bool:
        return self._delete(UserModel, user_id)

    # ==========================================================
    # [학부]
    # ==========================================================
    def get_all_faculties(self) -> List[Faculty]:
        return self._list(FacultyModel, Faculty)

    def get_faculty(self, faculty_id: int) -> Optional[Faculty]:
        return self._get(FacultyModel, Faculty, faculty_id)

    def _ensure_unique_faculty_name(self, data: Data, faculty_id: Optional[int] = None) -> None:
        name = data.get("name")
        if name is None:
            return
        criteria = [FacultyModel.name == name]
        if faculty_id is not None:
            criteria.append(FacultyModel.faculty_id != faculty_id)
        if self._exists(FacultyModel, *criteria):
            raise DuplicateEntityError("Faculty name already exists")

    def create_faculty(self, data: Data) -> Faculty:
        self._ensure_unique_faculty_name(data)
        return self._create(FacultyModel, Faculty, data)

    def update_faculty(self, faculty_id: int, data: Data) -> Optional[Faculty]:
        if self.db.get(FacultyModel, faculty_id) is None:
            return None
        self._ensure_unique_faculty_name(data, faculty_id)
        return self._update(FacultyModel, Faculty, faculty_id, data)

    def delete_faculty(self, faculty_id: int) -> bool:
        self._ensure_unused("Faculty", faculty_id, (GroupModel, GroupModel.faculty_id == faculty_id))
        return self._delete(FacultyModel, faculty_id)

    # ==========================================================
    # [그룹]
    # ==========================================================
    def get_all_groups(self) -> List[Group]:
        return self._list(GroupModel, Group)

    def get_groups_by_faculty(self, faculty_id: int) -> List[Group]:
        return self._list(GroupModel, Group, GroupModel.faculty_id == faculty_id)

    def get_groups_by_teacher(self, teacher_id: int) -> List[Group]:
        return self._list(GroupModel, Group, GroupModel.teacher_id == teacher_id)

    def get_group(self, group_id: int) -> Optional[Group]:
        return self._get(GroupModel, Group, group_id)

    def create_group(self, data: Data) -> Group:
        return self._create(GroupModel, Group, data)

    def update_group(self, group_id: int, data: Data) -> Optional[Group]:
        return self._update(GroupModel, Group, group_id, data)

    def delete_group(self, group_id: int) -> bool:
        self._ensure_unused("Group", group_id, (StudentModel, StudentModel.group_id == group_id))
        return self._delete(GroupModel, group_id)

    # ==========================================================
    # [교사] - 연결된 로그인 계정은 교사와 함께 삭제
    # ==========================================================
    def get_all_teachers(self) -> List[Teacher]:
        return self._list(TeacherModel, Teacher)

    def get_teacher(self, teacher_id: int) -> Optional[Teacher]:
        return self._get(TeacherModel, Teacher, teacher_id)

    def create_teacher(self, data: Data) -> Teacher:
        return self._create(TeacherModel, Teacher, data)

    def update_teacher(self, teacher_id: int, data: Data) -> Optional[Teacher]:
        return self._update(TeacherModel, Teacher, teacher_id, data)

    def delete_teacher(self, teacher_id: int) -> bool:
        self._ensure_unused(
            "Teacher", teacher_id,
            (GroupModel, GroupModel.teacher_id == teacher_id),
            (ResultModel, ResultModel.assessed_by == teacher_id),
        )
        accounts = self.db.scalars(select(UserModel).where(UserModel.teacher_id == teacher_id)).all()
        return self._delete(TeacherModel, teacher_id, *accounts)

    # ==========================================================
    # [학생] - 연결된 로그인 계정은 학생과 함께 삭제, 기록이 있으면 거부
    # ==========================================================
    def get_all_students(self) -> List[Student]:
        return self._list(StudentModel, Student)

    def get_students_by_group(self, group_id: int) -> List[Student]:
        return self._list(StudentModel, Student, StudentModel.group_id == group_id)

    def get_student(self, student_id: int) -> Optional[Student]:
        return self._get(StudentModel, Student, student_id)

    def create_student(self, data: Data) -> Student:
        return self._create(StudentModel, Student, data)

    def update_student(self, student_id: int, data: Data) -> Optional[Student]:
        return self._update(StudentModel, Student, student_id, data)

    def delete_student(self, student_id: int) -> bool:
        self._ensure_unused(
            "Student", student_id,
            (PhysicalStateModel, PhysicalStateModel.student_id == student_id),
            (PhysicalTestModel, PhysicalTestModel.student_id == student_id),
            (SportResultModel, SportResultModel.student_id == student_id),
            (ResultModel, ResultModel.student_id == student_id),
        )
        accounts = self.db.scalars(select(UserModel).where(UserModel.student_id == student_id)).all()
        return self._delete(StudentModel, student_id, *accounts)

    # ==========================================================
    # [학사 기간] - 생성 후 수정 없음
    # ==========================================================
    def get_all_periods(self) -> List[Period]:
        return self._list(PeriodModel, Period)

    def get_period(self, period_id: int) -> Optional[Period]:
        return self._get(PeriodModel, Period, period_id)

    def create_period(self, data: Data) -> Period:
        return self._create(PeriodModel, Period, data)

    def delete_period(self, period_id: int) -> bool:
        self._ensure_unused(
            "Period", period_id,
            (PhysicalStateModel, PhysicalStateModel.period_id == period_id),
            (PhysicalTestModel, PhysicalTestModel.period_id == period_id),
            (SportResultModel, SportResultModel.period_id == period_id),
            (ResultModel, ResultModel.period_id == period_id),
        )
        return self._delete(PeriodModel, period_id)

    # ==========================================================
    # [신체 측정]
    # ==========================================================
    def get_physical_states(self) -> List[PhysicalState]:
        return self._list(PhysicalStateModel, PhysicalState)

    def get_physical_states_by_student(self, student_id: int) -> List[PhysicalState]:
        return self._list(PhysicalStateModel, PhysicalState, PhysicalStateModel.student_id == student_id)

    def get_physical_state(self, state_id: int) -> Optional[PhysicalState]:
        return self._get(PhysicalStateModel, PhysicalState, state_id)

    def create_physical_state(self, data: Data) -> PhysicalState:
        return self._create(PhysicalStateModel, PhysicalState, data)

    def update_physical_state(self, state_id: int, data: Data) -> Optional[PhysicalState]:
        return self._update(PhysicalStateModel, PhysicalState, state_id, data)

    def delete_physical_state(self, state_id: int) -> bool:
        self._ensure_unused("Physical state", state_id, (ResultModel, ResultModel.state_id == state_id))
        return self._delete(PhysicalStateModel, state_id)

    # ==========================================================
    # [일반 체력 검사]
    # ==========================================================
    def get_physical_tests(self) -> List[PhysicalTest]:
        return self._list(PhysicalTestModel, PhysicalTest)

    def get_physical_tests_by_student(self, student_id: int) -> List[PhysicalTest]:
        return self._list(PhysicalTestModel, PhysicalTest, PhysicalTestModel.student_id == student_id)

    def get_physical_tests_by_teacher(self, teacher_id: int) -> List[PhysicalTest]:
        # 교사가 담당하는 그룹 학생들의 기록
        return self._list(
            PhysicalTestModel, PhysicalTest,
            PhysicalTestModel.student_id.in_(self._teacher_student_ids(teacher_id)),
        )

    def get_physical_test(self, test_id: int) -> Optional[PhysicalTest]:
        return self._get(PhysicalTestModel, PhysicalTest, test_id)

    def create_physical_test(self, data: Data) -> PhysicalTest:
        return self._create(PhysicalTestModel, PhysicalTest, data)

    def update_physical_test(self, test_id: int, data: Data) -> Optional[PhysicalTest]:
        return self._update(PhysicalTestModel, PhysicalTest, test_id, data)

    def delete_physical_test(self, test_id: int) -> bool:
        self._ensure_unused("Physical test", test_id, (ResultModel, ResultModel.test_id == test_id))
        return self._delete(PhysicalTestModel, test_id)

    # ==========================================================
    # [종목별 실기 기록]
    # ==========================================================
    def get_sport_results_by_student(self, student_id: int) -> List[SportResult]:
        return self._list(SportResultModel, SportResult, SportResultModel.student_id == student_id)

    def get_sport_results_by_period(self, period_id: int) -> List[SportResult]:
        return self._list(SportResultModel, SportResult, SportResultModel.period_id == period_id)

    def get_sport_results_by_period_and_teacher(self, teacher_id: int, period_id: int) -> List[SportResult]:
        return self._list(
            SportResultModel, SportResult,
            SportResultModel.period_id == period_id,
            SportResultModel.student_id.in_(self._teacher_student_ids(teacher_id)),
        )

    def get_sport_result(self, sport_result_id: int) -> Optional[SportResult]:
        return self._get(SportResultModel, SportResult, sport_result_id)

    def create_sport_result(self, data: Data) -> SportResult:
        return self._create(SportResultModel, SportResult, data)

    def update_sport_result(self, sport_result_id: int, data: Data) -> Optional[SportResult]:
        return self._update(SportResultModel, SportResult, sport_result_id, data)

    def delete_sport_result(self, sport_result_id: int) -> bool:
        self._ensure_unused(
            "Sport result", sport_result_id,
            (ResultModel, ResultModel.sport_result_id == sport_result_id),
        )
        return self._delete(SportResultModel, sport_result_id)

    # ==========================================================
    # [종합 평가]
    # ==========================================================
    def get_results_by_student(self, student_id: int) -> List[Result]:
        return self._list(ResultModel, Result, ResultModel.student_id == student_id)

    def get_results_by_group(self, group_id: int) -> List[Result]:
        # 그룹 소속 학생 전원의 평가
        members = select(StudentModel.student_id).where(StudentModel.group_id == group_id)
        return self._list(ResultModel, Result, ResultModel.student_id.in_(members))

    def get_results_by_period(self, period_id: int) -> List[Result]:
        return self._list(ResultModel, Result, ResultModel.period_id == period_id)

    def get_result(self, result_id: int) -> Optional[Result]:
        return self._get(ResultModel, Result, result_id)

    def create_result(self, data: Data) -> Result:
        return self._create(ResultModel, Result, data)

    def update_result(self, result_id: int, data: Data) -> Optional[Result]:
        return self._update(ResultModel, Result, result_id, data)

    def delete_result(self, result_id: int) -> bool:
        return self._delete(ResultModel, result_id)
