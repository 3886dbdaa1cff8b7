from __future__ import annotations

from typing import Any, Dict, Optional

from app.repositories.base import FirestoreRepository


class UserRepository(FirestoreRepository):
    collection_name = "users"

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        docs = self.find("email", "==", email.strip().lower(), limit=1)
        return docs[0] if docs else None
