# app/models/task.py
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.user import UserRef


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ==== INPUT ====

class CreateTaskRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    assignee: Optional[str] = None
    due_date: Optional[datetime] = Field(None, alias="dueDate")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v):
        if not v.strip():
            raise ValueError("title must not be blank")
        return v.strip()


class UpdateTaskRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    assignee: Optional[str] = None
    due_date: Optional[datetime] = Field(None, alias="dueDate")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError("title must not be blank")
        return v.strip() if v is not None else v


class TaskQuery(BaseModel):
    status: Optional[TaskStatus] = None
    assignee: Optional[str] = None
    priority: Optional[TaskPriority] = None
    q: Optional[str] = None
    due_from: Optional[datetime] = None
    due_to: Optional[datetime] = None
    page: int = 1
    limit: int = 10


# ==== OUTPUT ====

class TaskOut(BaseModel):
    id: str
    project_id: str
    title: str
    description: str = ""
    status: TaskStatus
    priority: TaskPriority
    assignee: Optional[UserRef] = None
    due_date: Optional[datetime] = None
    created_by: Optional[UserRef] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class TaskListResponse(BaseModel):
    tasks: List[TaskOut]
    pagination: Pagination


class DeleteTaskResponse(BaseModel):
    ok: bool = True
    id: str
