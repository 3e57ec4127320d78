from sqlalchemy import Column, String, DateTime, Date, Integer, CheckConstraint, func
from sqlalchemy.dialects.postgresql import UUID, JSONB

from drivingschool.db.base import Base

class User(Base):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=False), primary_key=True, server_default=func.gen_random_uuid())
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False)
    password = Column(String, nullable=False)
    role = Column(String, nullable=False, default="student")  # admin, instructor, student
    phone = Column(String)
    address = Column(String)
    birthdate = Column(Date)
    license_number = Column(String)

    # Élèves
    progress = Column(JSONB)

    # Moniteurs
    specialty = Column(String)
    years_experience = Column(Integer, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("role IN ('admin', 'instructor', 'student')", name="users_role_check"),
    )
