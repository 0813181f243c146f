from sqlalchemy import Column, Integer, String, Date
from sqlalchemy.orm import relationship
from database.db import Base

class Teacher(Base):
    __tablename__ = "teacher"  # 교사 프로필 테이블

    teacher_id = Column(Integer, primary_key=True, index=True)       # 교사 고유 ID
    full_name = Column(String(200), nullable=False)                  # 이름
    position = Column(String(100))                                   # 직위 (예: Senior Lecturer)
    date_of_birth = Column(Date)
    educational_department = Column(String(200))                     # 소속 학과
    phone = Column(String(30))
    nationality = Column(String(100))

    # ✅ 담당 그룹 (1:N)
    groups = relationship("Group", back_populates="teacher")
