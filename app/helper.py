import math
import re
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional
from urllib.parse import quote

from app.repositories.user_repository import UserRepository


def _as_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Naive datetimes from clients are taken as UTC so they compare with the
    timezone-aware values stored in Firestore.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


def _export_filename(project_name: str, today: date) -> str:
    """
    "Team Kanban Project" -> "Team_Kanban_Project_tasks_2025-01-31.csv"
    """
    base = re.sub(r"\s+", "_", project_name.strip()) or "project"
    base = base.replace('"', "")
    return f"{base}_tasks_{today.isoformat()}.csv"


def _content_disposition(filename: str) -> str:
    """
    Header values go out as latin-1, so non-ASCII names get an ASCII
    `filename` fallback plus the RFC 5987 `filename*` form.
    """
    ascii_name = filename.encode("ascii", "ignore").decode("ascii").replace("\\", "").lstrip("_")
    if ascii_name == filename:
        return f'attachment; filename="{filename}"'
    if ascii_name.startswith("tasks_"):
        ascii_name = f"project_{ascii_name}"
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"


def _iso(dt: Optional[datetime]) -> str:
    return _as_utc(dt).isoformat() if dt else ""


class UserRefResolver:
    """
    Resolves user ids to {id, name, email} once per request ("populate").
    """

    def __init__(self, users: UserRepository):
        self.users = users
        self._cache: Dict[str, Optional[Dict[str, Any]]] = {}

    def __call__(self, user_id: Optional[str]) -> Optional[Dict[str, Any]]:
        if not user_id:
            return None
        if user_id not in self._cache:
            user = self.users.get(user_id)
            self._cache[user_id] = (
                {"id": user["id"], "name": user.get("name", ""), "email": user["email"]}
                if user else None
            )
        return self._cache[user_id]
