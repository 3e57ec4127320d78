from fastapi import APIRouter, Depends, status

from drivingschool.auth.dependencies import get_current_session, require_admin
from drivingschool.auth.session import Session
from drivingschool.crud import notifications
from drivingschool.db.supabase import SupabaseClient, get_supabase
from drivingschool.schemas.notification import NotificationCreate, NotificationList, NotificationResponse

router = APIRouter(prefix="/notifications", tags=["Notifications"])

@router.get("", response_model=NotificationList)
async def list_notifications(
    session: Session = Depends(get_current_session),
    db: SupabaseClient = Depends(get_supabase)
):
    items = await notifications.list_notifications(db, session.user.id)
    return NotificationList(unread_count=notifications.unread_count(items), notifications=items)

@router.post("/read-all")
async def mark_all_as_read(
    session: Session = Depends(get_current_session),
    db: SupabaseClient = Depends(get_supabase)
):
    await notifications.mark_all_as_read(db, session.user.id)
    return {"success": True}

@router.post("/{notification_id}/read")
async def mark_as_read(
    notification_id: str,
    session: Session = Depends(get_current_session),
    db: SupabaseClient = Depends(get_supabase)
):
    await notifications.mark_as_read(db, notification_id, session.user.id)
    return {"success": True}

@router.post(
    "",
    response_model=NotificationResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)]
)
async def send_notification(request: NotificationCreate, db: SupabaseClient = Depends(get_supabase)):
    return await notifications.create_notification(db, request)
