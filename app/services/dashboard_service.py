# app/services/dashboard_service.py
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from app.helper import _as_utc
from app.models.dashboard import ProjectSummary
from app.models.task import TaskStatus
from app.repositories.task_repository import TaskRepository
from app.services.access import ensure_project_access
from app.services.project_service import get_project_or_404


def summarize(tasks: List[Dict[str, Any]], now: Optional[datetime] = None) -> Dict[str, int]:
    now = _as_utc(now) or datetime.now(timezone.utc)

    counts = {s.value: 0 for s in TaskStatus}
    overdue = 0
    for task in tasks:
        status = task.get("status")
        if status in counts:
            counts[status] += 1
        due = _as_utc(task.get("due_date"))
        if due is not None and due < now and status != TaskStatus.DONE.value:
            overdue += 1

    total = len(tasks)
    done = counts[TaskStatus.DONE.value]
    return {
        "total": total,
        "todo": counts[TaskStatus.TODO.value],
        "in_progress": counts[TaskStatus.IN_PROGRESS.value],
        "done": done,
        "overdue": overdue,
        "completion_rate": round(done / total * 100) if total > 0 else 0,
    }


def get_project_summary(db, project_id: str, user: Dict[str, Any]) -> ProjectSummary:
    """
    KPI cards for the project dashboard:
    - total / todo / in progress / done
    - overdue (due date passed, not done)
    - completion rate in percent
    """
    tasks = TaskRepository(db)
    project = get_project_or_404(db, project_id)
    ensure_project_access(user, project, tasks, detail="Access denied to this project dashboard")
    return ProjectSummary(**summarize(tasks.list_by_project(project_id)))
