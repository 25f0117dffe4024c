from pydantic import BaseModel
from typing import Optional, Dict, Any
from datetime import datetime


class PushTokenBase(BaseModel):
    """Base push token fields"""
    user_id: str  # UUID as string
    expo_push_token: str


class PushTokenCreate(PushTokenBase):
    """Push token creation model"""
    pass


class PushToken(PushTokenBase):
    """Complete push token model from database"""
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ExpoPushMessage(BaseModel):
    """Expo push notification message format"""
    to: str
    title: str
    body: str
    data: Optional[Dict[str, Any]] = None
    sound: str = "default"
    priority: str = "high"
    channelId: str = "default"


class ExpoPushTicket(BaseModel):
    """Expo push notification response ticket"""
    status: str
    id: Optional[str] = None
    message: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
