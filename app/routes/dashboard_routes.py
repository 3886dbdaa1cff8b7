# app/routes/dashboard_routes.py
from fastapi import APIRouter, Depends, Path
from app.models.dashboard import ProjectSummary
from app.services.dashboard_service import get_project_summary

from app.deps import get_current_user, get_db
router = APIRouter(prefix="/projects", tags=["dashboard"])


@router.get("/{project_id}/summary", response_model=ProjectSummary)
def get_dashboard_summary(
    project_id: str = Path(..., description="Project id"),
    db = Depends(get_db),
    user = Depends(get_current_user),
):
    return get_project_summary(db, project_id, user)
