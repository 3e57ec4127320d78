import asyncio
from typing import Any, Dict

from drivingschool.auth.session import Session
from drivingschool.core.progress import summarize_progress
from drivingschool.crud import students
from drivingschool.dashboards.base import RoleView
from drivingschool.db.supabase import SupabaseClient
from drivingschool.schemas.user import Role

class StudentDashboard(RoleView):
    role = Role.STUDENT
    editable_fields = RoleView.editable_fields | {"birthdate"}

    async def _overview(self, db: SupabaseClient, session: Session) -> Dict[str, Any]:
        student, stats = await asyncio.gather(
            students.get_student(db, session.user.id),
            students.get_student_stats(db, session.user.id),
        )
        return {
            "role": self.role.value,
            "profile": student,
            "progress": summarize_progress(student.progress),
            **stats,
        }

    async def dashboard(self, db: SupabaseClient, session: Session) -> Dict[str, Any]:
        return await self._overview(db, session)

    async def profile(self, db: SupabaseClient, session: Session) -> Dict[str, Any]:
        return await self._overview(db, session)

    def calendar_filters(self, session: Session) -> Dict[str, str]:
        return {"student_id": session.user.id}
