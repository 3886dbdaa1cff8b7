# app/routes/project_routes.py
from typing import List
from fastapi import APIRouter, Depends, Path, status
from app.deps import get_current_user, get_db, require_roles
from app.models.project import (
    AddMembersRequest,
    CreateProjectRequest,
    DeleteProjectResponse,
    ProjectOut,
    UpdateProjectRequest,
)
from app.services.project_service import (
    add_members,
    create_project,
    delete_project,
    get_project,
    list_projects,
    remove_member,
    update_project,
)

router = APIRouter(prefix="/projects", tags=["projects"])

admin_only = require_roles(["admin"])


@router.post("", response_model=ProjectOut, status_code=status.HTTP_201_CREATED,
             summary="Create a new project (admin only)")
def create_project_endpoint(
    req: CreateProjectRequest,
    db = Depends(get_db),
    admin = Depends(admin_only),
):
    return create_project(db, req, admin)


@router.get("", response_model=List[ProjectOut], summary="Projects visible to the current user")
def list_projects_endpoint(db = Depends(get_db), user = Depends(get_current_user)):
    return list_projects(db, user)


@router.get("/{project_id}", response_model=ProjectOut, summary="Get a project by id")
def get_project_endpoint(
    project_id: str = Path(...),
    db = Depends(get_db),
    user = Depends(get_current_user),
):
    return get_project(db, project_id, user)


@router.patch("/{project_id}", response_model=ProjectOut, summary="Update a project (admin only)")
def update_project_endpoint(
    req: UpdateProjectRequest,
    project_id: str = Path(...),
    db = Depends(get_db),
    _admin = Depends(admin_only),
):
    return update_project(db, project_id, req)


@router.delete("/{project_id}", response_model=DeleteProjectResponse,
               summary="Delete a project and its tasks (admin only)")
def delete_project_endpoint(
    project_id: str = Path(...),
    db = Depends(get_db),
    _admin = Depends(admin_only),
):
    return delete_project(db, project_id)


@router.post("/{project_id}/members", response_model=ProjectOut,
             summary="Add members to a project (admin only)")
def add_project_members(
    payload: AddMembersRequest,
    project_id: str = Path(...),
    db = Depends(get_db),
    _admin = Depends(admin_only),
):
    return add_members(db, project_id, payload.user_ids)


@router.delete("/{project_id}/members/{user_id}", response_model=ProjectOut,
               summary="Remove a member from a project (admin only)")
def remove_project_member(
    project_id: str = Path(...),
    user_id: str = Path(...),
    db = Depends(get_db),
    _admin = Depends(admin_only),
):
    return remove_member(db, project_id, user_id)
