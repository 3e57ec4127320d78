from sqlalchemy import Column, String, Text, DateTime, ForeignKey, CheckConstraint, func
from sqlalchemy.dialects.postgresql import UUID, ExcludeConstraint

from drivingschool.db.base import Base

class Lesson(Base):
    __tablename__ = "lessons"

    id = Column(UUID(as_uuid=False), primary_key=True, server_default=func.gen_random_uuid())
    student_id = Column(UUID(as_uuid=False), ForeignKey("users.id", ondelete="SET NULL"), index=True)
    instructor_id = Column(UUID(as_uuid=False), ForeignKey("users.id", ondelete="SET NULL"), index=True)
    vehicle_id = Column(UUID(as_uuid=False), ForeignKey("vehicles.id", ondelete="SET NULL"))
    starts_at = Column(DateTime(timezone=True), nullable=False, index=True)
    ends_at = Column(DateTime(timezone=True), nullable=False)
    type = Column(String, nullable=False, default="driving")  # driving, code, exam
    status = Column(String, nullable=False, default="scheduled")  # scheduled, completed, cancelled
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("starts_at < ends_at", name="lessons_window_check"),
        CheckConstraint("status IN ('scheduled', 'completed', 'cancelled')", name="lessons_status_check"),
    )

# Une ressource (moniteur, élève, véhicule) ne peut pas être réservée
# deux fois sur des créneaux qui se chevauchent. Les leçons annulées
# restent en base mais ne bloquent plus rien.
_lessons = Lesson.__table__
for _column in ("instructor_id", "student_id", "vehicle_id"):
    _lessons.append_constraint(
        ExcludeConstraint(
            (func.tstzrange(_lessons.c.starts_at, _lessons.c.ends_at), "&&"),
            (_lessons.c[_column], "="),
            name=f"lessons_{_column.replace('_id', '')}_no_overlap",
            using="gist",
            where=_lessons.c.status != "cancelled",
        )
    )
