from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from enum import Enum

class NotificationType(str, Enum):
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"
    ERROR = "error"

class NotificationCreate(BaseModel):
    user_id: str = Field(..., description="Destinataire")
    title: str = Field(..., min_length=1, description="Titre")
    message: str = Field(..., min_length=1, description="Message")
    type: NotificationType = NotificationType.INFO

class NotificationResponse(BaseModel):
    id: str
    user_id: str
    title: str
    message: str
    type: NotificationType = NotificationType.INFO
    is_read: bool = False
    created_at: Optional[datetime] = None

class NotificationList(BaseModel):
    unread_count: int
    notifications: List[NotificationResponse]
