from drivingschool.models.user import User
from drivingschool.models.vehicle import Vehicle
from drivingschool.models.lesson import Lesson
from drivingschool.models.notification import Notification

__all__ = ["User", "Vehicle", "Lesson", "Notification"]
