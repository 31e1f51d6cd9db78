"""Todo domain model"""
from datetime import datetime
from typing import Optional, Union
from pydantic import BaseModel, field_validator


class TodoBase(BaseModel):
    """Base todo fields"""
    text: str
    completed: bool = False
    comments: int = 0
    time: str = "0"  # free-form duration, e.g. "1h 20min"
    date: Optional[str] = None
    label: str = "Dev"
    start: Optional[str] = None
    end: Optional[str] = None

    @field_validator("time", mode="before")
    @classmethod
    def coerce_time(cls, value: Union[str, int, float, None]) -> str:
        if value is None or value == "":
            return "0"
        return str(value)


class TodoCreate(TodoBase):
    """Todo creation model"""
    pass


class TodoUpdate(BaseModel):
    """Todo update model - all fields optional"""
    text: Optional[str] = None
    completed: Optional[bool] = None
    time: Optional[str] = None
    date: Optional[str] = None
    label: Optional[str] = None


class Todo(TodoBase):
    """Complete todo model from database"""
    id: str
    user_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
