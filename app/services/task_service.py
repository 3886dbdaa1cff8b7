# app/services/task_service.py
import logging
from typing import Any, Dict, List, Optional

from fastapi import HTTPException

from app.helper import UserRefResolver, _as_utc, _page_count
from app.models.task import (
    CreateTaskRequest, Pagination, TaskListResponse, TaskOut, TaskQuery, UpdateTaskRequest,
)
from app.repositories.task_repository import TaskRepository
from app.repositories.user_repository import UserRepository
from app.services.access import ensure_can_modify_task, ensure_project_access
from app.services.project_service import get_project_or_404

logger = logging.getLogger(__name__)


def to_task_out(task: Dict[str, Any], resolve: UserRefResolver) -> TaskOut:
    return TaskOut(
        id=task["id"],
        project_id=task["project_id"],
        title=task["title"],
        description=task.get("description") or "",
        status=task["status"],
        priority=task["priority"],
        assignee=resolve(task.get("assignee_id")),
        due_date=task.get("due_date"),
        created_by=resolve(task.get("created_by")),
        created_at=task.get("created_at"),
        updated_at=task.get("updated_at"),
    )


def get_task_or_404(db, task_id: str) -> Dict[str, Any]:
    task = TaskRepository(db).get(task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


def _check_assignee(users: UserRepository, assignee_id: Optional[str]) -> None:
    if assignee_id and not users.get(assignee_id):
        raise HTTPException(status_code=400, detail=f"Unknown assignee: {assignee_id}")


# ---------- Filtering ----------

def _matches_text(task: Dict[str, Any], q: str) -> bool:
    terms = [t for t in q.lower().split() if t]
    if not terms:
        return True
    haystack = f"{task.get('title') or ''}\n{task.get('description') or ''}".lower()
    return any(term in haystack for term in terms)


def filter_tasks(tasks: List[Dict[str, Any]], query: TaskQuery) -> List[Dict[str, Any]]:
    due_from = _as_utc(query.due_from)
    due_to = _as_utc(query.due_to)

    out = []
    for task in tasks:
        if query.status and task.get("status") != query.status.value:
            continue
        if query.priority and task.get("priority") != query.priority.value:
            continue
        if query.assignee and task.get("assignee_id") != query.assignee:
            continue
        if due_from or due_to:
            due = _as_utc(task.get("due_date"))
            if due is None:
                continue
            if due_from and due < due_from:
                continue
            if due_to and due > due_to:
                continue
        if query.q and not _matches_text(task, query.q):
            continue
        out.append(task)
    return out


def paginate(items: List[Any], page: int, limit: int):
    start = (page - 1) * limit
    return items[start:start + limit], Pagination(
        page=page,
        limit=limit,
        total=len(items),
        pages=_page_count(len(items), limit),
    )


# ---------- CRUD ----------

def create_task(db, project_id: str, req: CreateTaskRequest, user: Dict[str, Any]) -> TaskOut:
    tasks = TaskRepository(db)
    users = UserRepository(db)

    project = get_project_or_404(db, project_id)
    ensure_project_access(user, project, tasks)

    assignee_id = req.assignee or None
    _check_assignee(users, assignee_id)

    task = tasks.create(
        {
            "project_id": project_id,
            "title": req.title,
            "description": req.description or "",
            "status": req.status.value,
            "priority": req.priority.value,
            "assignee_id": assignee_id,
            "due_date": _as_utc(req.due_date),
            "created_by": user["id"],
        }
    )
    logger.info("Task %s created in project %s by %s", task["id"], project_id, user["id"])
    return to_task_out(task, UserRefResolver(users))


def list_tasks(db, project_id: str, query: TaskQuery, user: Dict[str, Any]) -> TaskListResponse:
    tasks = TaskRepository(db)
    project = get_project_or_404(db, project_id)
    ensure_project_access(user, project, tasks)

    matched = filter_tasks(tasks.list_by_project(project_id), query)
    page_items, pagination = paginate(matched, query.page, query.limit)

    resolve = UserRefResolver(UserRepository(db))
    return TaskListResponse(
        tasks=[to_task_out(t, resolve) for t in page_items],
        pagination=pagination,
    )


def get_task(db, task_id: str, user: Dict[str, Any]) -> TaskOut:
    task = get_task_or_404(db, task_id)
    project = get_project_or_404(db, task["project_id"])
    ensure_project_access(user, project, TaskRepository(db), detail="Access denied to this task")
    return to_task_out(task, UserRefResolver(UserRepository(db)))


def update_task(db, task_id: str, req: UpdateTaskRequest, user: Dict[str, Any]) -> TaskOut:
    tasks = TaskRepository(db)
    users = UserRepository(db)

    task = get_task_or_404(db, task_id)
    project = get_project_or_404(db, task["project_id"])
    ensure_can_modify_task(user, task, project, tasks)

    changes: Dict[str, Any] = {}
    for field, value in req.model_dump(exclude_unset=True).items():
        if field in ("title", "status", "priority") and value is None:
            continue
        if field == "assignee":
            _check_assignee(users, value or None)
            changes["assignee_id"] = value or None
        elif field == "due_date":
            changes["due_date"] = _as_utc(value)
        elif field in ("status", "priority"):
            changes[field] = value.value
        elif field == "description":
            changes[field] = value or ""
        else:
            changes[field] = value

    updated = tasks.update(task_id, changes) if changes else task
    if not updated:
        raise HTTPException(status_code=404, detail="Task not found")
    logger.info("Task %s updated by %s: %s", task_id, user["id"], sorted(changes))
    return to_task_out(updated, UserRefResolver(users))


def delete_task(db, task_id: str) -> Dict[str, Any]:
    if not TaskRepository(db).delete(task_id):
        raise HTTPException(status_code=404, detail="Task not found")
    logger.info("Task %s deleted", task_id)
    return {"ok": True, "id": task_id}
