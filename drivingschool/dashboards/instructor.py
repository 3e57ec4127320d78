import asyncio
from typing import Any, Dict

from drivingschool.auth.session import Session
from drivingschool.crud import instructors
from drivingschool.dashboards.base import RoleView
from drivingschool.db.supabase import SupabaseClient
from drivingschool.schemas.user import Role

class InstructorDashboard(RoleView):
    role = Role.INSTRUCTOR
    editable_fields = RoleView.editable_fields | {"specialty"}

    async def _overview(self, db: SupabaseClient, session: Session) -> Dict[str, Any]:
        profile, stats, upcoming = await asyncio.gather(
            instructors.get_instructor(db, session.user.id),
            instructors.get_instructor_stats(db, session.user.id),
            instructors.get_upcoming_lessons(db, session.user.id),
        )
        return {
            "role": self.role.value,
            "profile": profile,
            "stats": stats,
            "upcoming_lessons": upcoming,
        }

    async def dashboard(self, db: SupabaseClient, session: Session) -> Dict[str, Any]:
        return await self._overview(db, session)

    async def profile(self, db: SupabaseClient, session: Session) -> Dict[str, Any]:
        return await self._overview(db, session)

    def calendar_filters(self, session: Session) -> Dict[str, str]:
        return {"instructor_id": session.user.id}
