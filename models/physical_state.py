from sqlalchemy import Column, Integer, Float, String, Date, ForeignKey
from database.db import Base

class PhysicalState(Base):
    __tablename__ = "physical_state"  # 신체 측정(샘플) 테이블

    state_id = Column(Integer, primary_key=True, index=True)                       # 측정 고유 ID
    student_id = Column(Integer, ForeignKey("student.student_id"), nullable=False)
    period_id = Column(Integer, ForeignKey("period.period_id"), nullable=True)
    date = Column(Date)                                                            # 측정일

    height = Column(Float)                   # 신장 (cm)
    weight = Column(Float)                   # 체중 (kg)
    ketle_index = Column(Float)              # 케틀레 지수
    chest_circumference = Column(Float)      # 가슴둘레
    waist_circumference = Column(Float)      # 허리둘레
    posture = Column(String(100))            # 자세 소견
    vital_capacity = Column(Float)           # 폐활량
    hand_strength = Column(Float)            # 악력
    orthostatic_test = Column(Float)         # 기립 검사
    shtange_test = Column(Float)             # 슈탄게 검사 (숨 참기, 초)
    martine_test = Column(Float)             # 마르티네 검사
    heart_rate = Column(Float)               # 심박수
    blood_pressure = Column(Float)           # 혈압
    pulse_pressure = Column(Float)           # 맥압
