"""Notifications des utilisateurs."""
import logging
from typing import List

from drivingschool.db.supabase import SupabaseClient
from drivingschool.errors import NotFoundError
from drivingschool.schemas.notification import NotificationCreate, NotificationResponse

logger = logging.getLogger(__name__)

NOTIFICATIONS = "notifications"

async def list_notifications(db: SupabaseClient, user_id: str) -> List[NotificationResponse]:
    response = await db.execute(
        db.table(NOTIFICATIONS)
        .select("*")
        .eq("user_id", user_id)
        .order("created_at", desc=True),
        "récupération notifications",
        message="Erreur lors du chargement des notifications"
    )
    return [NotificationResponse(**row) for row in response.data or []]

def unread_count(notifications: List[NotificationResponse]) -> int:
    return sum(1 for n in notifications if not n.is_read)

async def mark_as_read(db: SupabaseClient, notification_id: str, user_id: str) -> None:
    response = await db.execute(
        db.table(NOTIFICATIONS)
        .update({"is_read": True})
        .eq("id", notification_id)
        .eq("user_id", user_id),
        "notification lue",
        message="Erreur lors du marquage de la notification comme lue"
    )
    if not response.data:
        raise NotFoundError("Notification non trouvée")

async def mark_all_as_read(db: SupabaseClient, user_id: str) -> None:
    await db.execute(
        db.table(NOTIFICATIONS)
        .update({"is_read": True})
        .eq("user_id", user_id)
        .eq("is_read", False),
        "notifications lues",
        message="Erreur lors du marquage des notifications"
    )

async def create_notification(db: SupabaseClient, data: NotificationCreate) -> NotificationResponse:
    record = {**data.model_dump(mode="json"), "is_read": False}
    response = await db.execute(
        db.table(NOTIFICATIONS).insert(record),
        "création notification",
        message="Erreur lors de l'envoi de la notification"
    )
    logger.info(f"Notification envoyée à {data.user_id}")
    return NotificationResponse(**response.data[0])
