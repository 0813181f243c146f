from typing import List, Optional, Union

from schemas.common import CamelModel


# ==========================================================
# [실기 점수 보고서]
# ==========================================================
class ExerciseScore(CamelModel):
    exercise_name: str     # 전체 명칭 (러시아어)
    short_name: str        # 차트 축 라벨용 약칭
    score: int             # 0 ~ 10 (0 = 기록 없음)


class SportReport(CamelModel):
    student_id: int
    period_id: Optional[int] = None
    scores: List[ExerciseScore]
    total: int


class GroupSportReportEntry(CamelModel):
    student_id: int
    full_name: str
    scores: List[ExerciseScore]
    total: int


# ==========================================================
# [체력 검사 / 의료 그룹 요약]
# ==========================================================
class PhysicalTestValue(CamelModel):
    key: str
    test_name: str
    value: Optional[Union[int, float]] = None


class MedicalGroupCount(CamelModel):
    medical_group: str
    name: str
    value: int
