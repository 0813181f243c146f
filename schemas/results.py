from datetime import datetime
from typing import Optional

from schemas.common import CamelModel
from schemas.enums import Assessment


class ResultFields(CamelModel):
    student_id: Optional[int] = None
    period_id: Optional[int] = None
    test_id: Optional[int] = None             # 근거 체력 검사
    state_id: Optional[int] = None            # 근거 신체 측정
    sport_result_id: Optional[int] = None     # 근거 실기 기록
    assessment: Optional[Assessment] = None
    comments: Optional[str] = None
    assessed_by: Optional[int] = None         # 평가 교사 ID


class ResultCreate(ResultFields):
    student_id: int
    period_id: int


class ResultUpdate(ResultFields):
    pass


class Result(ResultCreate):
    result_id: int
    assessed_at: Optional[datetime] = None
