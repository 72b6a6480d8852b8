from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.database import Base

# Role ids are shared with the rest of the school system; students are always 3.
STUDENT_ROLE_ID = 3


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    role_id = Column(Integer, nullable=False, default=STUDENT_ROLE_ID)
    is_active = Column(Boolean, default=True, nullable=False)
    has_system_access = Column(Boolean, default=False, nullable=False)

    # Audit trail: who created/last changed the record, who last reviewed its status
    reporter_id = Column(Integer, nullable=True)
    last_updated_by = Column(Integer, nullable=True)
    status_reviewer_id = Column(Integer, nullable=True)
    status_changed_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    student = relationship(
        "Student", back_populates="user", uselist=False,
        cascade="all, delete-orphan", passive_deletes=True,
    )
