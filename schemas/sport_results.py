from typing import Optional

from pydantic import field_validator

from schemas.common import CamelModel

# ✅ 원기록 컬럼 (점수 계산 대상 11종 + 혼자 토스 횟수)
RAW_RESULT_FIELDS = (
    "basketball_freethrow", "basketball_dribble", "basketball_leading",
    "volleyball_solo_pass", "volleyball_upper_pass", "volleyball_lower_pass",
    "volleyball_serve", "swimming25m", "swimming50m", "swimming100m",
    "running100m", "running500m1000m",
)


class SportResultFields(CamelModel):
    student_id: Optional[int] = None
    period_id: Optional[int] = None

    basketball_freethrow: Optional[str] = None
    basketball_dribble: Optional[str] = None
    basketball_leading: Optional[str] = None
    volleyball_solo_pass: Optional[str] = None
    volleyball_upper_pass: Optional[str] = None
    volleyball_lower_pass: Optional[str] = None
    volleyball_serve: Optional[str] = None
    swimming25m: Optional[str] = None
    swimming50m: Optional[str] = None
    swimming100m: Optional[str] = None
    running100m: Optional[str] = None
    running500m1000m: Optional[str] = None

    # 폼은 숫자/문자열 어느 쪽으로든 보낼 수 있음 → 문자열로 통일, 빈 값은 None
    @field_validator(*RAW_RESULT_FIELDS, mode="before")
    @classmethod
    def _raw_to_str(cls, v):
        if v is None or isinstance(v, bool):
            return v
        if isinstance(v, (int, float)):
            return str(v)
        if isinstance(v, str) and not v.strip():
            return None
        return v


class SportResultCreate(SportResultFields):
    student_id: int
    period_id: int


class SportResultUpdate(SportResultFields):
    pass


class SportResult(SportResultCreate):
    sport_result_id: int
