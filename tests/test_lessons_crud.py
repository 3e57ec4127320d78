"""
Unit tests for lesson booking against the in-memory database.
"""

import asyncio

import pytest
from pydantic import ValidationError

from drivingschool.crud import lessons
from drivingschool.errors import (
    BackendError,
    InvalidLessonWindow,
    NotFoundError,
    SchedulingConflictError,
)
from drivingschool.schemas.lesson import LessonCreate, LessonStatus, LessonType, LessonUpdate

from tests.conftest import at


def booking(**fields):
    data = {
        "student_id": "stud-2",
        "instructor_id": "inst-1",
        "vehicle_id": None,
        "starts_at": at(19, 10),
        "ends_at": at(19, 11),
    }
    data.update(fields)
    return LessonCreate(**data)


class TestCreateLesson:
    """Test cases for create_lesson."""

    def test_create(self, db, people):
        lesson = asyncio.run(lessons.create_lesson(db, booking(student_id="stud-1", vehicle_id="veh-1")))

        assert lesson.status == LessonStatus.SCHEDULED
        assert lesson.student_name == "Jean Dupont"
        assert lesson.instructor_name == "Pierre Martin"
        assert lesson.vehicle_model == "Peugeot 208"
        assert len(people.rows("lessons")) == 1

    def test_default_end(self, db, people):
        lesson = asyncio.run(lessons.create_lesson(db, booking(ends_at=None)))

        assert lesson.ends_at == at(19, 11, 30)

    def test_code_lesson_drops_vehicle(self, db, people):
        lesson = asyncio.run(lessons.create_lesson(db, booking(type=LessonType.CODE, vehicle_id="veh-1")))

        assert lesson.vehicle_id is None
        assert lesson.title == "Séance de code"

    def test_instructor_conflict_is_rejected(self, db, people, seed_lesson):
        """Same instructor 09:00-10:30 blocks a 10:00-11:00 booking."""
        seed_lesson("L1", at(19, 9), at(19, 10, 30))

        with pytest.raises(SchedulingConflictError) as exc:
            asyncio.run(lessons.create_lesson(db, booking()))

        assert exc.value.conflicts == ["Le moniteur Pierre Martin est déjà réservé de 09:00 à 10:30"]
        assert exc.value.status_code == 409
        assert len(people.rows("lessons")) == 1
        assert not [q for q in people.queries if q.operation == "insert"]

    def test_back_to_back_is_accepted(self, db, people, seed_lesson):
        seed_lesson("L1", at(19, 9), at(19, 10, 30))

        asyncio.run(lessons.create_lesson(db, booking(starts_at=at(19, 10, 30), ends_at=at(19, 12))))

        assert len(people.rows("lessons")) == 2

    def test_invalid_window(self, db, people):
        with pytest.raises(InvalidLessonWindow):
            asyncio.run(lessons.create_lesson(db, booking(starts_at=at(19, 11), ends_at=at(19, 10))))

        assert people.rows("lessons") == []

    def test_exclusion_violation_maps_to_conflict(self, db, people):
        """A concurrent booking caught by the database raises the same error."""
        people.fail_next("lessons", "insert", "23P01")

        with pytest.raises(SchedulingConflictError) as exc:
            asyncio.run(lessons.create_lesson(db, booking()))

        assert exc.value.conflicts == [lessons.RACE_MESSAGE]

    def test_check_violation_maps_to_invalid_window(self, db, people):
        people.fail_next("lessons", "insert", "23514")

        with pytest.raises(InvalidLessonWindow):
            asyncio.run(lessons.create_lesson(db, booking()))

    def test_backend_failure(self, db, people):
        people.fail_next("lessons", "select", "XX000")

        with pytest.raises(BackendError) as exc:
            asyncio.run(lessons.create_lesson(db, booking()))

        assert exc.value.status_code == 502


class TestCancelLesson:
    """Cancellation is a soft delete."""

    def test_cancel_keeps_row(self, db, people, seed_lesson):
        seed_lesson("L1", at(19, 9), at(19, 10, 30))

        lesson = asyncio.run(lessons.cancel_lesson(db, "L1"))

        assert lesson.status == LessonStatus.CANCELLED
        assert people.rows("lessons")[0]["status"] == "cancelled"

    def test_cancelled_slot_can_be_booked_again(self, db, people, seed_lesson):
        seed_lesson("L1", at(19, 9), at(19, 10, 30))
        asyncio.run(lessons.cancel_lesson(db, "L1"))

        asyncio.run(lessons.create_lesson(db, booking()))

        assert len(people.rows("lessons")) == 2

    def test_complete(self, db, people, seed_lesson):
        seed_lesson("L1", at(19, 9), at(19, 10, 30))

        assert asyncio.run(lessons.complete_lesson(db, "L1")).status == LessonStatus.COMPLETED

    def test_unknown_lesson(self, db, people):
        with pytest.raises(NotFoundError):
            asyncio.run(lessons.cancel_lesson(db, "missing"))


class TestUpdateLesson:
    """Test cases for update_lesson."""

    def test_move_onto_busy_instructor(self, db, people, seed_lesson):
        seed_lesson("L1", at(19, 9), at(19, 10, 30))
        seed_lesson("L2", at(19, 14), at(19, 15, 30), instructor_id="inst-2", student_id="stud-2", vehicle_id=None)

        with pytest.raises(SchedulingConflictError):
            asyncio.run(lessons.update_lesson(db, "L2", LessonUpdate(instructor_id="inst-1", starts_at=at(19, 9, 30),
                                                                     ends_at=at(19, 11))))

    def test_extend_own_lesson(self, db, people, seed_lesson):
        seed_lesson("L1", at(19, 9), at(19, 10, 30))

        lesson = asyncio.run(lessons.update_lesson(db, "L1", LessonUpdate(ends_at=at(19, 11))))

        assert lesson.ends_at == at(19, 11)

    def test_notes_only(self, db, people, seed_lesson):
        seed_lesson("L1", at(19, 9), at(19, 10, 30))

        lesson = asyncio.run(lessons.update_lesson(db, "L1", LessonUpdate(notes="Révision créneau")))

        assert lesson.notes == "Révision créneau"

    def test_reject_reversed_window(self, db, people, seed_lesson):
        seed_lesson("L1", at(19, 9), at(19, 10, 30))

        with pytest.raises(InvalidLessonWindow):
            asyncio.run(lessons.update_lesson(db, "L1", LessonUpdate(ends_at=at(19, 8))))


class TestListLessons:
    """Window and ownership filters."""

    def test_overlapping_window(self, db, people, seed_lesson):
        seed_lesson("L1", at(19, 9), at(19, 10, 30))
        seed_lesson("L2", at(26, 9), at(26, 10, 30), instructor_id="inst-2", student_id="stud-2")
        seed_lesson("L3", at(20, 9), at(20, 10), status="cancelled")

        result = asyncio.run(lessons.list_lessons(db, start=at(19, 0), end=at(26, 0)))

        assert [l.id for l in result] == ["L1"]

    def test_include_cancelled_and_student_filter(self, db, people, seed_lesson):
        seed_lesson("L1", at(19, 9), at(19, 10, 30))
        seed_lesson("L2", at(20, 9), at(20, 10), student_id="stud-2", status="cancelled")

        result = asyncio.run(lessons.list_lessons(db, student_id="stud-2", include_cancelled=True))

        assert [l.id for l in result] == ["L2"]


class TestReactivateLesson:
    """A cancelled lesson only comes back if its slot is still free."""

    def test_complete_cancelled_lesson_over_new_booking(self, db, people, seed_lesson):
        seed_lesson("L1", at(19, 9), at(19, 10, 30), status="cancelled")
        seed_lesson("L2", at(19, 9), at(19, 10, 30))

        with pytest.raises(SchedulingConflictError):
            asyncio.run(lessons.complete_lesson(db, "L1"))

        assert people.rows("lessons")[0]["status"] == "cancelled"
        assert not [q for q in people.queries if q.operation == "update"]

    def test_complete_cancelled_lesson_on_free_slot(self, db, people, seed_lesson):
        seed_lesson("L1", at(19, 9), at(19, 10, 30), status="cancelled")

        assert asyncio.run(lessons.complete_lesson(db, "L1")).status == LessonStatus.COMPLETED

    def test_reschedule_cancelled_lesson_over_new_booking(self, db, people, seed_lesson):
        seed_lesson("L1", at(19, 9), at(19, 10, 30), status="cancelled")
        seed_lesson("L2", at(19, 10), at(19, 11), student_id="stud-2", vehicle_id=None)

        with pytest.raises(SchedulingConflictError) as exc:
            asyncio.run(lessons.update_lesson(db, "L1", LessonUpdate(status=LessonStatus.SCHEDULED)))

        assert exc.value.conflicts == ["Le moniteur Pierre Martin est déjà réservé de 10:00 à 11:00"]

    def test_status_change_exclusion_violation(self, db, people, seed_lesson):
        """A concurrent booking caught by the database on a status change raises a conflict."""
        seed_lesson("L1", at(19, 9), at(19, 10, 30), status="cancelled")
        people.fail_next("lessons", "update", "23P01")

        with pytest.raises(SchedulingConflictError) as exc:
            asyncio.run(lessons.complete_lesson(db, "L1"))

        assert exc.value.conflicts == [lessons.RACE_MESSAGE]


class TestUpdateDatabaseErrors:
    """Constraint violations on update map to the same errors as on create."""

    def test_exclusion_violation(self, db, people, seed_lesson):
        seed_lesson("L1", at(19, 9), at(19, 10, 30))
        people.fail_next("lessons", "update", "23P01")

        with pytest.raises(SchedulingConflictError) as exc:
            asyncio.run(lessons.update_lesson(db, "L1", LessonUpdate(ends_at=at(19, 11))))

        assert exc.value.conflicts == [lessons.RACE_MESSAGE]

    def test_check_violation(self, db, people, seed_lesson):
        seed_lesson("L1", at(19, 9), at(19, 10, 30))
        people.fail_next("lessons", "update", "23514")

        with pytest.raises(InvalidLessonWindow):
            asyncio.run(lessons.update_lesson(db, "L1", LessonUpdate(ends_at=at(19, 11))))


class TestLessonUpdateValidation:
    """Required lesson fields cannot be cleared."""

    @pytest.mark.parametrize("field", ["student_id", "instructor_id", "starts_at", "ends_at", "type", "status"])
    def test_null_required_field(self, field):
        with pytest.raises(ValidationError):
            LessonUpdate(**{field: None})

    def test_vehicle_and_notes_can_be_cleared(self):
        update = LessonUpdate(vehicle_id=None, notes=None)

        assert update.model_dump(exclude_unset=True) == {"vehicle_id": None, "notes": None}

    def test_clear_vehicle(self, db, people, seed_lesson):
        seed_lesson("L1", at(19, 9), at(19, 10, 30))

        lesson = asyncio.run(lessons.update_lesson(db, "L1", LessonUpdate(vehicle_id=None)))

        assert lesson.vehicle_id is None
        assert lesson.instructor_id == "inst-1"
