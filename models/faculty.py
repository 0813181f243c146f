from sqlalchemy import Column, Integer, String, Text
from database.db import Base

class Faculty(Base):
    __tablename__ = "faculty"  # 학부 테이블

    faculty_id = Column(Integer, primary_key=True, index=True)       # 학부 고유 ID
    name = Column(String(200), nullable=False, unique=True)          # 학부명
    description = Column(Text)                                       # 설명
