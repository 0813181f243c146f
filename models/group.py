from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base

class Group(Base):
    __tablename__ = "group"  # 학습 그룹(반) 테이블

    group_id = Column(Integer, primary_key=True, index=True)         # 그룹 고유 ID
    name = Column(String(100), nullable=False)                       # 그룹명 (예: PE-101)
    year = Column(Integer)                                           # 입학 연도

    # ==========================================================
    # [관계 설정]
    # ==========================================================

    # ✅ 소속 학부 (N:1)
    faculty_id = Column(Integer, ForeignKey("faculty.faculty_id"), nullable=False)

    # ✅ 담당 교사 (N:1) - Teacher.groups 와 연결
    teacher_id = Column(Integer, ForeignKey("teacher.teacher_id"), nullable=True)
    teacher = relationship("Teacher", back_populates="groups", foreign_keys=[teacher_id])

    students = relationship("Student", back_populates="group")
