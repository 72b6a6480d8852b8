from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Date, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.database import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)

    gender = Column(String(10), nullable=True)  # Male, Female, Other
    phone = Column(String(16), nullable=True)
    dob = Column(Date, nullable=True)
    class_name = Column(String(50), nullable=True)
    section_name = Column(String(50), nullable=True)
    roll = Column(Integer, nullable=True)
    admission_date = Column(Date, nullable=True)

    father_name = Column(String(100), nullable=True)
    father_phone = Column(String(16), nullable=True)
    mother_name = Column(String(100), nullable=True)
    mother_phone = Column(String(16), nullable=True)
    guardian_name = Column(String(100), nullable=True)
    guardian_phone = Column(String(16), nullable=True)
    relation_of_guardian = Column(String(50), nullable=True)

    current_address = Column(String(500), nullable=True)
    permanent_address = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="student")

    __table_args__ = (
        Index("ix_students_class_section", "class_name", "section_name"),
    )
