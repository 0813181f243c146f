from sqlalchemy import Column, Integer, String
from database.db import Base

class Period(Base):
    __tablename__ = "period"  # 학사 기간 테이블 (생성 후 변경 불가)

    period_id = Column(Integer, primary_key=True, index=True)        # 기간 고유 ID
    period_of_study = Column(String(30), nullable=False)             # course_1_start, semester_1 ... semester_8
