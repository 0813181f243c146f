from schemas.common import CamelModel
from schemas.enums import PeriodOfStudy


class PeriodCreate(CamelModel):
    period_of_study: PeriodOfStudy   # 12개 고정 값 중 하나


class Period(PeriodCreate):
    period_id: int
