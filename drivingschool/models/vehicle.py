from sqlalchemy import Column, String, DateTime, Integer, CheckConstraint, func
from sqlalchemy.dialects.postgresql import UUID

from drivingschool.db.base import Base

class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(UUID(as_uuid=False), primary_key=True, server_default=func.gen_random_uuid())
    model = Column(String, nullable=False)
    year = Column(Integer, nullable=False)
    registration = Column(String, unique=True, nullable=False)
    transmission = Column(String, nullable=False)  # manual, automatic
    fuel = Column(String, nullable=False)  # petrol, diesel, electric, hybrid
    status = Column(String, nullable=False, default="available")  # available, reserved, maintenance
    image = Column(String)
    last_maintenance = Column(DateTime(timezone=True))
    fuel_level = Column(Integer)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("status IN ('available', 'reserved', 'maintenance')", name="vehicles_status_check"),
        CheckConstraint("fuel_level IS NULL OR fuel_level BETWEEN 0 AND 100", name="vehicles_fuel_level_check"),
    )
