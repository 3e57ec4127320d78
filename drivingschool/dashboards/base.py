from datetime import date
from typing import Any, Dict, FrozenSet

from drivingschool.auth.session import Session
from drivingschool.core.calendar import build_week, week_window
from drivingschool.crud import lessons, users
from drivingschool.db.supabase import SupabaseClient
from drivingschool.schemas.lesson import WeekSchedule
from drivingschool.schemas.user import Role, UserPublic

class RoleView:
    """Vues propres à un rôle : tableau de bord, profil, calendrier"""

    role: Role
    editable_fields: FrozenSet[str] = frozenset({"name", "email", "phone", "address"})

    async def dashboard(self, db: SupabaseClient, session: Session) -> Dict[str, Any]:
        raise NotImplementedError

    async def profile(self, db: SupabaseClient, session: Session) -> Dict[str, Any]:
        row = await users.get_user(db, session.user.id)
        row.pop("password", None)
        return {"role": self.role.value, "profile": row}

    async def update_profile(self, db: SupabaseClient, session: Session, changes: Dict[str, Any]) -> UserPublic:
        allowed = {key: value for key, value in changes.items() if key in self.editable_fields}
        row = await users.update_user(db, session.user.id, allowed)
        return UserPublic(id=row["id"], name=row["name"], email=row["email"], role=row["role"])

    def calendar_filters(self, session: Session) -> Dict[str, str]:
        return {}

    async def calendar(self, db: SupabaseClient, session: Session, reference: date) -> WeekSchedule:
        start, end = week_window(reference)
        filters = self.calendar_filters(session)
        week_lessons = await lessons.list_lessons(db, start=start, end=end, **filters)
        return build_week(week_lessons, reference, **filters)
