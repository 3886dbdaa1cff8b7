# app/models/dashboard.py
from pydantic import BaseModel

class ProjectSummary(BaseModel):
    total: int
    todo: int
    in_progress: int
    done: int
    overdue: int
    completion_rate: int
