# app/services/access.py
import logging
from typing import Any, Callable, Dict

from fastapi import HTTPException

from app.models.user import UserRole
from app.repositories.task_repository import TaskRepository

logger = logging.getLogger(__name__)


def is_admin(user: Dict[str, Any]) -> bool:
    return user.get("role") == UserRole.ADMIN.value


def has_project_access(
    user: Dict[str, Any],
    project: Dict[str, Any],
    has_assigned_task: Callable[[], bool],
) -> bool:
    """
    Admin, OR listed in the project's members, OR assignee of at least one
    task in the project. `has_assigned_task` is only called when the first
    two checks fail.
    """
    if is_admin(user):
        return True
    if user["id"] in (project.get("members") or []):
        return True
    return has_assigned_task()


def ensure_project_access(
    user: Dict[str, Any],
    project: Dict[str, Any],
    tasks: TaskRepository,
    detail: str = "Access denied to this project",
) -> None:
    if has_project_access(user, project, lambda: tasks.has_assigned_task(project["id"], user["id"])):
        return
    logger.warning("User %s denied access to project %s", user["id"], project["id"])
    raise HTTPException(status_code=403, detail=detail)


def ensure_can_modify_task(
    user: Dict[str, Any],
    task: Dict[str, Any],
    project: Dict[str, Any],
    tasks: TaskRepository,
) -> None:
    if is_admin(user):
        return
    ensure_project_access(user, project, tasks)
    if task.get("assignee_id") != user["id"]:
        logger.warning("User %s tried to modify task %s assigned to %s",
                       user["id"], task["id"], task.get("assignee_id"))
        raise HTTPException(status_code=403, detail="You can only update tasks assigned to you")
