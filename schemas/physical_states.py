from datetime import date as date_type
from typing import Optional

from schemas.common import CamelModel


class PhysicalStateFields(CamelModel):
    student_id: Optional[int] = None
    period_id: Optional[int] = None
    date: Optional[date_type] = None

    height: Optional[float] = None
    weight: Optional[float] = None
    ketle_index: Optional[float] = None
    chest_circumference: Optional[float] = None
    waist_circumference: Optional[float] = None
    posture: Optional[str] = None
    vital_capacity: Optional[float] = None
    hand_strength: Optional[float] = None
    orthostatic_test: Optional[float] = None
    shtange_test: Optional[float] = None
    martine_test: Optional[float] = None
    heart_rate: Optional[float] = None
    blood_pressure: Optional[float] = None
    pulse_pressure: Optional[float] = None


class PhysicalStateCreate(PhysicalStateFields):
    student_id: int


class PhysicalStateUpdate(PhysicalStateFields):
    pass


class PhysicalState(PhysicalStateCreate):
    state_id: int
