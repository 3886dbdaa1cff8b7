from __future__ import annotations

from typing import Any, Dict, List, Optional

from app.repositories.base import FirestoreRepository


class ProjectRepository(FirestoreRepository):
    collection_name = "projects"

    def get_by_key(self, key: str) -> Optional[Dict[str, Any]]:
        docs = self.find("key", "==", key, limit=1)
        return docs[0] if docs else None

    def list_for_member(self, user_id: str) -> List[Dict[str, Any]]:
        return self.find("members", "array_contains", user_id)
