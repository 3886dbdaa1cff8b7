from __future__ import annotations

from typing import Any, Dict, List, Set

from app.repositories.base import FirestoreRepository, EPOCH


class TaskRepository(FirestoreRepository):
    collection_name = "tasks"

    def list_by_project(self, project_id: str) -> List[Dict[str, Any]]:
        """
        All tasks of a project, newest first. Filtering, text search and
        paging happen in the service on top of this list.
        """
        tasks = self.find("project_id", "==", project_id)
        tasks.sort(key=lambda t: t.get("created_at") or EPOCH, reverse=True)
        return tasks

    def has_assigned_task(self, project_id: str, user_id: str) -> bool:
        query = (
            self.collection
            .where("project_id", "==", project_id)
            .where("assignee_id", "==", user_id)
            .limit(1)
        )
        return any(True for _ in query.stream())

    def project_ids_for_assignee(self, user_id: str) -> Set[str]:
        return {t["project_id"] for t in self.find("assignee_id", "==", user_id) if t.get("project_id")}

    def delete_by_project(self, project_id: str) -> int:
        count = 0
        for snap in self.collection.where("project_id", "==", project_id).stream():
            snap.reference.delete()
            count += 1
        return count
