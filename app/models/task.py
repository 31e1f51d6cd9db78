"""Calendar task domain model (a block on the day timeline)"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, model_validator

DEFAULT_TASK_TITLE = "New Task"
DEFAULT_TASK_COLOR = "bg-blue-100 border-l-4 border-blue-500"


class TaskBase(BaseModel):
    """Base task fields for creation"""
    title: str = DEFAULT_TASK_TITLE
    start_slot: int = Field(..., ge=0)
    end_slot: int = Field(..., ge=1)
    start: str  # "HH:MM" label of start_slot
    end: str  # "HH:MM" label of end_slot
    date: str  # YYYY-MM-DD
    color: str = DEFAULT_TASK_COLOR

    @model_validator(mode="after")
    def check_slot_order(self) -> "TaskBase":
        if self.start_slot >= self.end_slot:
            raise ValueError("start_slot must be before end_slot")
        return self


class TaskCreate(TaskBase):
    """Task creation model - the owner is attached by the repository"""
    id: str


class TaskUpdate(BaseModel):
    """Task update model - all fields optional"""
    title: Optional[str] = None
    start_slot: Optional[int] = Field(None, ge=0)
    end_slot: Optional[int] = Field(None, ge=1)
    start: Optional[str] = None
    end: Optional[str] = None
    date: Optional[str] = None
    color: Optional[str] = None


class Task(TaskBase):
    """Complete task model from database"""
    id: str
    user_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
