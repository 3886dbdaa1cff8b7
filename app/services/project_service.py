# app/services/project_service.py
import logging
from typing import Any, Dict, Iterable, List, Optional

from fastapi import HTTPException

from app.helper import UserRefResolver
from app.models.project import CreateProjectRequest, ProjectOut, UpdateProjectRequest
from app.repositories.base import EPOCH
from app.repositories.project_repository import ProjectRepository
from app.repositories.task_repository import TaskRepository
from app.repositories.user_repository import UserRepository
from app.services.access import ensure_project_access, is_admin

logger = logging.getLogger(__name__)


def _dedupe(ids: Iterable[str]) -> List[str]:
    seen = set()
    out = []
    for i in ids:
        if i and i not in seen:
            seen.add(i)
            out.append(i)
    return out


def _validate_user_ids(users: UserRepository, ids: List[str]) -> None:
    missing = [i for i in ids if not users.get(i)]
    if missing:
        raise HTTPException(status_code=400, detail=f"Unknown user id(s): {missing}")


def _ensure_key_free(projects: ProjectRepository, key: str, own_id: Optional[str] = None) -> None:
    existing = projects.get_by_key(key)
    if existing and existing["id"] != own_id:
        raise HTTPException(status_code=409, detail=f"Project key '{key}' already exists")


def to_project_out(project: Dict[str, Any], resolve: UserRefResolver) -> ProjectOut:
    members = [ref for ref in (resolve(m) for m in project.get("members") or []) if ref]
    return ProjectOut(
        id=project["id"],
        name=project["name"],
        key=project["key"],
        members=members,
        created_by=resolve(project.get("created_by")),
        created_at=project.get("created_at"),
        updated_at=project.get("updated_at"),
    )


def get_project_or_404(db, project_id: str) -> Dict[str, Any]:
    project = ProjectRepository(db).get(project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


def create_project(db, req: CreateProjectRequest, owner: Dict[str, Any]) -> ProjectOut:
    projects = ProjectRepository(db)
    users = UserRepository(db)

    _ensure_key_free(projects, req.key)
    members = _dedupe(req.members)
    _validate_user_ids(users, members)

    project = projects.create(
        {
            "name": req.name,
            "key": req.key,
            "members": members,
            "created_by": owner["id"],
        }
    )
    logger.info("Project %s (%s) created by %s", project["id"], project["key"], owner["id"])
    return to_project_out(project, UserRefResolver(users))


def list_projects(db, user: Dict[str, Any]) -> List[ProjectOut]:
    projects = ProjectRepository(db)
    if is_admin(user):
        visible = projects.all()
    else:
        # member of, or assignee of a task inside
        by_id = {p["id"]: p for p in projects.list_for_member(user["id"])}
        for project_id in TaskRepository(db).project_ids_for_assignee(user["id"]):
            if project_id not in by_id:
                project = projects.get(project_id)
                if project:
                    by_id[project_id] = project
        visible = list(by_id.values())

    visible.sort(key=lambda p: p.get("created_at") or EPOCH, reverse=True)
    resolve = UserRefResolver(UserRepository(db))
    return [to_project_out(p, resolve) for p in visible]


def get_project(db, project_id: str, user: Dict[str, Any]) -> ProjectOut:
    project = get_project_or_404(db, project_id)
    ensure_project_access(user, project, TaskRepository(db))
    return to_project_out(project, UserRefResolver(UserRepository(db)))


def update_project(db, project_id: str, req: UpdateProjectRequest) -> ProjectOut:
    projects = ProjectRepository(db)
    users = UserRepository(db)
    get_project_or_404(db, project_id)

    changes = req.model_dump(exclude_unset=True, exclude_none=True)
    if "key" in changes:
        _ensure_key_free(projects, changes["key"], own_id=project_id)
    if "members" in changes:
        changes["members"] = _dedupe(changes["members"])
        _validate_user_ids(users, changes["members"])

    project = projects.update(project_id, changes) if changes else projects.get(project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    logger.info("Project %s updated: %s", project_id, sorted(changes))
    return to_project_out(project, UserRefResolver(users))


def delete_project(db, project_id: str) -> Dict[str, Any]:
    projects = ProjectRepository(db)
    if not projects.delete(project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    deleted_tasks = TaskRepository(db).delete_by_project(project_id)
    logger.info("Project %s deleted with %d task(s)", project_id, deleted_tasks)
    return {"ok": True, "id": project_id, "deleted_tasks": deleted_tasks}


def add_members(db, project_id: str, user_ids: List[str]) -> ProjectOut:
    projects = ProjectRepository(db)
    users = UserRepository(db)
    project = get_project_or_404(db, project_id)

    new_ids = _dedupe(user_ids)
    _validate_user_ids(users, new_ids)
    members = _dedupe(list(project.get("members") or []) + new_ids)

    project = projects.update(project_id, {"members": members})
    logger.info("Project %s members added: %s", project_id, new_ids)
    return to_project_out(project, UserRefResolver(users))


def remove_member(db, project_id: str, user_id: str) -> ProjectOut:
    projects = ProjectRepository(db)
    project = get_project_or_404(db, project_id)

    members = [m for m in project.get("members") or [] if m != user_id]
    project = projects.update(project_id, {"members": members})
    logger.info("Project %s member removed: %s", project_id, user_id)
    return to_project_out(project, UserRefResolver(UserRepository(db)))
