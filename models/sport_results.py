from sqlalchemy import Column, Integer, String, ForeignKey
from database.db import Base

class SportResult(Base):
    __tablename__ = "sport_results"  # 종목별 실기 원기록 테이블 (점수는 조회 시 계산)

    sport_result_id = Column(Integer, primary_key=True, index=True)                # 기록 고유 ID
    student_id = Column(Integer, ForeignKey("student.student_id"), nullable=False)
    period_id = Column(Integer, ForeignKey("period.period_id"), nullable=False)

    # ✅ 원기록은 폼 입력 그대로 문자열 저장 (횟수 또는 초)
    basketball_freethrow = Column(String(20))      # 자유투 성공 수
    basketball_dribble = Column(String(20))        # 투스텝 기술
    basketball_leading = Column(String(20))        # 빠른 드리블 기술
    volleyball_solo_pass = Column(String(20))      # 혼자 머리 위 토스 횟수
    volleyball_upper_pass = Column(String(20))     # 2인 오버핸드 패스
    volleyball_lower_pass = Column(String(20))     # 2인 언더핸드 패스
    volleyball_serve = Column(String(20))          # 서브 성공 수
    swimming25m = Column(String(20))               # 수영 25m (초)
    swimming50m = Column(String(20))               # 수영 50m (초)
    swimming100m = Column(String(20))              # 수영 100m (초)
    running100m = Column(String(20))               # 100m 달리기 (초)
    running500m1000m = Column(String(20))          # 500m(여) / 1000m(남) 달리기 (초)
