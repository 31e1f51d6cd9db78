"""User account model"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class UserCreate(BaseModel):
    """User creation model"""
    id: str  # "user_<uuid4>"
    name: str
    email: str
    password_hash: str


class User(UserCreate):
    """Complete user model from database"""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserPublic(BaseModel):
    """User fields safe to return to clients"""
    user_id: str
    name: str
    email: str
