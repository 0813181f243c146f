from sqlalchemy import Column, Integer, String, DateTime, JSON, ForeignKey, func
from database.db import Base

class User(Base):
    __tablename__ = "users"  # 로그인 계정 테이블

    id = Column(Integer, primary_key=True, index=True)                        # 계정 고유 ID
    username = Column(String(100), nullable=False, unique=True, index=True)   # 로그인 아이디
    password = Column(String(255), nullable=False)                            # 비밀번호 해시 (응답에 절대 포함하지 않음)
    role = Column(String(20), nullable=False)                                 # admin / teacher / student
    full_name = Column(String(200))                                           # 표시 이름

    # ✅ 역할별 연결 레코드 (학생 계정 → student, 교사 계정 → teacher)
    student_id = Column(Integer, ForeignKey("student.student_id"), nullable=True)
    teacher_id = Column(Integer, ForeignKey("teacher.teacher_id"), nullable=True)

    visual_settings = Column(JSON, nullable=False, default=dict)              # 화면 설정 (테마 등)
    created_at = Column(DateTime, server_default=func.now())
