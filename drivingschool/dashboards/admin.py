from typing import Any, Dict

from drivingschool.auth.session import Session
from drivingschool.crud import stats
from drivingschool.dashboards.base import RoleView
from drivingschool.db.supabase import SupabaseClient
from drivingschool.schemas.user import Role

class AdminDashboard(RoleView):
    role = Role.ADMIN

    async def dashboard(self, db: SupabaseClient, session: Session) -> Dict[str, Any]:
        return {"role": self.role.value, "stats": await stats.admin_stats(db)}
