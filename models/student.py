from sqlalchemy import Column, Integer, String, Date, Text, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base

class Student(Base):
    __tablename__ = "student"  # 학생 프로필 테이블

    student_id = Column(Integer, primary_key=True, index=True)       # 학생 고유 ID
    full_name = Column(String(200), nullable=False)                  # 이름 (성 이름 부칭)
    gender = Column(String(10))                                      # male / female / other
    date_of_birth = Column(Date)
    place_of_birth = Column(String(200))
    group_id = Column(Integer, ForeignKey("group.group_id"), nullable=True)
    medical_group = Column(String(20), default="basic")              # basic / preparatory / special
    medical_diagnosis = Column(Text)
    previous_illnesses = Column(Text)
    active_sports = Column(Text)
    previous_sports = Column(Text)
    additional_info = Column(Text)
    phone = Column(String(30))
    nationality = Column(String(100))
    address = Column(String(300))
    school_graduated = Column(String(200))
    educational_department = Column(String(200))

    group = relationship("Group", back_populates="students")
