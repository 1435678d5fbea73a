from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from datetime import datetime, date as calendar_date
from typing import List, Optional

PRIORITY_PATTERN = "^(low|medium|high)$"


def _require_title(value: str) -> str:
    if not value.strip():
        raise ValueError("Title is required")
    return value


class TaskFields(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    priority: str = Field(default="medium", pattern=PRIORITY_PATTERN)
    category: str = "General"
    due_date: Optional[str] = None

    check_title = field_validator("title")(_require_title)

    @field_validator("priority", "category", mode="before")
    @classmethod
    def default_when_blank(cls, value, info: ValidationInfo):
        # Clients send null or "" for fields left untouched in the form
        if value is None or value == "":
            return cls.model_fields[info.field_name].default
        return value


class TaskCreate(TaskFields):
    pass


class TaskUpdate(TaskFields):
    completed: bool = False


class SubtaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)

    check_title = field_validator("title")(_require_title)


class SubtaskUpdate(BaseModel):
    completed: Optional[bool] = None


class SubtaskResponse(BaseModel):
    id: int
    task_id: int
    title: str
    completed: int

    model_config = ConfigDict(from_attributes=True)


class TaskResponse(BaseModel):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    priority: str
    category: str
    due_date: Optional[str] = None
    completed: int
    created_at: datetime
    subtasks: List[SubtaskResponse] = []

    model_config = ConfigDict(from_attributes=True)


class SuccessResponse(BaseModel):
    success: bool = True


class WeeklyCount(BaseModel):
    date: calendar_date
    count: int


class TaskStats(BaseModel):
    total: int
    completed: int
    high_priority_pending: int
    weekly: List[WeeklyCount]
