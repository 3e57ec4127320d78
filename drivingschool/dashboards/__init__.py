from drivingschool.dashboards.admin import AdminDashboard
from drivingschool.dashboards.base import RoleView
from drivingschool.dashboards.instructor import InstructorDashboard
from drivingschool.dashboards.student import StudentDashboard
from drivingschool.schemas.user import Role

DASHBOARDS = {
    Role.ADMIN: AdminDashboard(),
    Role.INSTRUCTOR: InstructorDashboard(),
    Role.STUDENT: StudentDashboard(),
}

def dashboard_for(role: Role) -> RoleView:
    return DASHBOARDS[Role(role)]

__all__ = ["DASHBOARDS", "RoleView", "dashboard_for"]
