# app/services/export_service.py
import csv
import io
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Tuple

from app.helper import UserRefResolver, _export_filename, _iso
from app.repositories.task_repository import TaskRepository
from app.repositories.user_repository import UserRepository
from app.services.access import ensure_project_access
from app.services.project_service import get_project_or_404

logger = logging.getLogger(__name__)

CSV_HEADER = [
    "ID",
    "Title",
    "Description",
    "Status",
    "Priority",
    "Assignee",
    "Assignee Email",
    "Due Date",
    "Created By",
    "Created At",
    "Updated At",
]


def _row(task: Dict[str, Any], resolve: UserRefResolver) -> List[str]:
    assignee = resolve(task.get("assignee_id")) or {}
    creator = resolve(task.get("created_by")) or {}
    return [
        task["id"],
        task.get("title") or "",
        task.get("description") or "",
        task.get("status") or "",
        task.get("priority") or "",
        assignee.get("name", ""),
        assignee.get("email", ""),
        _iso(task.get("due_date")),
        creator.get("name", ""),
        _iso(task.get("created_at")),
        _iso(task.get("updated_at")),
    ]


def tasks_to_csv(tasks: List[Dict[str, Any]], resolve: UserRefResolver) -> str:
    buf = io.StringIO()
    csv.writer(buf, lineterminator="\n").writerow(CSV_HEADER)
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for task in tasks:
        writer.writerow(_row(task, resolve))
    return buf.getvalue()


def export_project_tasks(db, project_id: str, user: Dict[str, Any]) -> Tuple[str, str]:
    """
    Returns (filename, csv_text) for every task of the project, newest first.
    """
    tasks = TaskRepository(db)
    project = get_project_or_404(db, project_id)
    ensure_project_access(user, project, tasks)

    rows = tasks.list_by_project(project_id)
    content = tasks_to_csv(rows, UserRefResolver(UserRepository(db)))
    filename = _export_filename(project.get("name", ""), datetime.now(timezone.utc).date())
    logger.info("Exported %d task(s) of project %s for user %s", len(rows), project_id, user["id"])
    return filename, content
