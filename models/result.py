from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from database.db import Base

class Result(Base):
    __tablename__ = "result"  # 기간별 종합 평가 테이블

    result_id = Column(Integer, primary_key=True, index=True)                      # 평가 고유 ID
    student_id = Column(Integer, ForeignKey("student.student_id"), nullable=False)
    period_id = Column(Integer, ForeignKey("period.period_id"), nullable=False)

    # ✅ 평가 근거가 된 기록 (모두 선택)
    test_id = Column(Integer, ForeignKey("physical_tests.test_id"), nullable=True)
    state_id = Column(Integer, ForeignKey("physical_state.state_id"), nullable=True)
    sport_result_id = Column(Integer, ForeignKey("sport_results.sport_result_id"), nullable=True)

    assessment = Column(String(20))                                                # excellent / good / satisfactory / poor
    comments = Column(Text)
    assessed_by = Column(Integer, ForeignKey("teacher.teacher_id"), nullable=True)
    assessed_at = Column(DateTime, server_default=func.now())
