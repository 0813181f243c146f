"""
services/report_service.py

학생/그룹 보고서용 데이터 가공 (차트 · PDF 공용).
모두 순수 함수 - DB 접근이나 상태 변경 없음, 같은 입력이면 항상 같은 출력.

행(row)은 camelCase 키를 가진 dict(API 응답 그대로) 또는 스키마/ORM 객체 모두 받는다.
"""

import re
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Sequence

from schemas.common import to_camel
from schemas.enums import MedicalGroup
from schemas.physical_tests import PHYSICAL_TEST_FIELDS
from schemas.reports import (
    ExerciseScore,
    GroupSportReportEntry,
    MedicalGroupCount,
    PhysicalTestValue,
)
from services.scoring import EXERCISE_CATALOG, score

PHYSICAL_TEST_LABELS = {
    "push_ups": "Отжимания",
    "leg_hold": "Удержание ног",
    "tapping_test": "Теппинг-тест",
    "running_in_place": "Бег на месте",
    "half_squat": "Полуприсед",
    "pull_ups": "Подтягивания",
    "plank": "Планка",
    "forward_bend": "Наклон вперед",
    "long_jump": "Прыжок в длину",
}

MEDICAL_GROUP_LABELS = {
    MedicalGroup.BASIC.value: "Основная",
    MedicalGroup.PREPARATORY.value: "Подготовительная",
    MedicalGroup.SPECIAL.value: "Специальная",
}


# ==========================================================
# [공통] 행 접근 헬퍼
# ==========================================================
def _to_snake(key: str) -> str:
    return re.sub(r"(?<!^)([A-Z])", r"_\1", key).lower()


def _field(row: Any, key: str) -> Any:
    """camelCase 키로 값 조회 (dict 는 camel/snake 둘 다, 객체는 snake 속성)"""
    if row is None:
        return None
    if isinstance(row, Mapping):
        if key in row:
            return row[key]
        return row.get(_to_snake(key))
    return getattr(row, _to_snake(key), None)


def _same_id(left: Any, right: Any) -> bool:
    try:
        return int(left) == int(right)
    except (TypeError, ValueError):
        return False


def _select_last(rows: Iterable[Any], student_id: Optional[int], period_id: Optional[int]) -> Any:
    """
    조건에 맞는 마지막 행 (조회 순서 기준).
    같은 학생·기간에 행이 여러 개면 마지막 것이 보고서에 반영된다.
    student_id 가 없는 행은 이미 해당 학생 것으로 간주.
    """
    last = None
    for row in rows:
        row_student = _field(row, "studentId")
        if student_id is not None and row_student is not None and not _same_id(row_student, student_id):
            continue
        if period_id is not None and not _same_id(_field(row, "periodId"), period_id):
            continue
        last = row
    return last


# ==========================================================
# [1] 학생 실기 점수 보고서
# ==========================================================
def build_sport_report(student_id: Optional[int], period_id: Optional[int], sport_results: Sequence[Any]) -> List[ExerciseScore]:
    """
    학생 1명 + 기간 1개 → 11종 실기 점수 (카탈로그 순서 고정)

    - 해당 기간 기록이 없으면 전 종목 0점 (빈 리스트가 아님)
    - period_id=None 이면 기간 구분 없이 마지막 기록 사용
    """
    row = _select_last(sport_results or [], student_id, period_id)
    return [
        ExerciseScore(
            exercise_name=item.name,
            short_name=item.short_name,
            score=score(item.key, _field(row, item.key)),
        )
        for item in EXERCISE_CATALOG
    ]


def total_score(scores: Iterable[ExerciseScore]) -> int:
    return sum(s.score for s in scores)


# ==========================================================
# [2] 그룹 실기 점수 보고서 (교사용 표)
# ==========================================================
def build_group_sport_report(students: Sequence[Any], sport_results: Sequence[Any], period_id: int) -> List[GroupSportReportEntry]:
    entries = []
    for student in students:
        student_id = _field(student, "studentId")
        own_rows = [r for r in sport_results if _same_id(_field(r, "studentId"), student_id)]
        scores = build_sport_report(student_id, period_id, own_rows)
        entries.append(GroupSportReportEntry(
            student_id=student_id,
            full_name=_field(student, "fullName") or "",
            scores=scores,
            total=total_score(scores),
        ))
    return entries


# ==========================================================
# [3] 일반 체력 검사 요약 (채점 없이 원점수)
# ==========================================================
def build_physical_test_summary(physical_tests: Sequence[Any], period_id: Optional[int], student_id: Optional[int] = None) -> List[PhysicalTestValue]:
    row = _select_last(physical_tests or [], student_id, period_id)
    return [
        PhysicalTestValue(
            key=field,
            test_name=PHYSICAL_TEST_LABELS[field],
            value=_field(row, to_camel(field)),
        )
        for field in PHYSICAL_TEST_FIELDS
    ]


# ==========================================================
# [4] 의료 그룹 분포 (관리자/교사 대시보드)
# ==========================================================
def medical_group_distribution(students: Iterable[Any]) -> List[MedicalGroupCount]:
    counts = {group: 0 for group in MEDICAL_GROUP_LABELS}
    for student in students:
        group = _field(student, "medicalGroup")
        group = getattr(group, "value", group)
        # 미지정/알 수 없는 값은 기본 그룹으로 집계
        counts[group if group in counts else MedicalGroup.BASIC.value] += 1
    return [
        MedicalGroupCount(medical_group=group, name=MEDICAL_GROUP_LABELS[group], value=count)
        for group, count in counts.items()
    ]


# ==========================================================
# [5] 학사 기간 표시명 (PDF 머리말)
# ==========================================================
def period_label(period_of_study: Optional[str]) -> str:
    """course_2_start → "Начало 2 курса", semester_3 → "3 семестр" """
    if not period_of_study:
        return "Все периоды"
    value = getattr(period_of_study, "value", period_of_study)
    match = re.fullmatch(r"course_(\d+)_start|semester_(\d+)", value)
    if match is None:
        return value
    course, semester = match.groups()
    return f"Начало {course} курса" if course else f"{semester} семестр"
