# app/routes/task_routes.py
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from fastapi.responses import Response

from app.config import settings
from app.helper import _content_disposition
from app.deps import get_current_user, get_db, require_roles
from app.models.task import (
    CreateTaskRequest,
    DeleteTaskResponse,
    TaskListResponse,
    TaskOut,
    TaskPriority,
    TaskQuery,
    TaskStatus,
    UpdateTaskRequest,
)
from app.services.export_service import export_project_tasks
from app.services.task_service import create_task, delete_task, get_task, list_tasks, update_task

router = APIRouter(tags=["tasks"])


def task_query(
    status: Optional[TaskStatus] = Query(None),
    assignee: Optional[str] = Query(None, description="Assignee user id"),
    priority: Optional[TaskPriority] = Query(None),
    q: Optional[str] = Query(None, description="Search in title & description"),
    due_from: Optional[datetime] = Query(None, alias="dueFrom"),
    due_to: Optional[datetime] = Query(None, alias="dueTo"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
) -> TaskQuery:
    return TaskQuery(
        status=status,
        assignee=assignee,
        priority=priority,
        q=q,
        due_from=due_from,
        due_to=due_to,
        page=page,
        limit=limit,
    )


@router.post("/projects/{project_id}/tasks", response_model=TaskOut,
             status_code=status.HTTP_201_CREATED, summary="Create a task in a project")
def create_task_endpoint(
    req: CreateTaskRequest,
    project_id: str = Path(...),
    db = Depends(get_db),
    user = Depends(get_current_user),
):
    return create_task(db, project_id, req, user)


@router.get("/projects/{project_id}/tasks", response_model=TaskListResponse,
            summary="List project tasks with filters, search & pagination")
def list_tasks_endpoint(
    project_id: str = Path(...),
    query: TaskQuery = Depends(task_query),
    db = Depends(get_db),
    user = Depends(get_current_user),
):
    return list_tasks(db, project_id, query, user)


@router.get("/projects/{project_id}/tasks/export.csv", summary="Export project tasks to CSV",
            response_class=Response)
def export_tasks_endpoint(
    project_id: str = Path(...),
    db = Depends(get_db),
    user = Depends(get_current_user),
):
    filename, content = export_project_tasks(db, project_id, user)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": _content_disposition(filename)},
    )


@router.get("/tasks/{task_id}", response_model=TaskOut, summary="Get a task by id")
def get_task_endpoint(
    task_id: str = Path(...),
    db = Depends(get_db),
    user = Depends(get_current_user),
):
    return get_task(db, task_id, user)


@router.patch("/tasks/{task_id}", response_model=TaskOut,
              summary="Update a task (admin or assignee only)")
def update_task_endpoint(
    req: UpdateTaskRequest,
    task_id: str = Path(...),
    db = Depends(get_db),
    user = Depends(get_current_user),
):
    return update_task(db, task_id, req, user)


@router.delete("/tasks/{task_id}", response_model=DeleteTaskResponse,
               summary="Delete a task (admin only)")
def delete_task_endpoint(
    task_id: str = Path(...),
    db = Depends(get_db),
    _admin = Depends(require_roles(["admin"])),
):
    return delete_task(db, task_id)
