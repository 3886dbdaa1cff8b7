from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FirestoreRepository:
    """
    Thin wrapper over one Firestore collection. Documents are returned as
    plain dicts with the document id under "id".
    """

    collection_name: str = ""

    def __init__(self, db):
        self.db = db

    @property
    def collection(self):
        return self.db.collection(self.collection_name)

    @staticmethod
    def _to_dict(snap) -> Dict[str, Any]:
        data = snap.to_dict() or {}
        data["id"] = snap.id
        return data

    def get(self, doc_id: str) -> Optional[Dict[str, Any]]:
        if not doc_id:
            return None
        snap = self.collection.document(doc_id).get()
        if not snap.exists:
            return None
        return self._to_dict(snap)

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        now = utcnow()
        doc = {**data, "created_at": now, "updated_at": now}
        ref = self.collection.document()
        ref.set(doc)
        return {**doc, "id": ref.id}

    def update(self, doc_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        ref = self.collection.document(doc_id)
        if not ref.get().exists:
            return None
        ref.update({**changes, "updated_at": utcnow()})
        return self.get(doc_id)

    def delete(self, doc_id: str) -> bool:
        ref = self.collection.document(doc_id)
        if not ref.get().exists:
            return False
        ref.delete()
        return True

    def find(self, field: str, op: str, value: Any, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        query = self.collection.where(field, op, value)
        if limit:
            query = query.limit(limit)
        return [self._to_dict(snap) for snap in query.stream()]

    def all(self) -> List[Dict[str, Any]]:
        return [self._to_dict(snap) for snap in self.collection.stream()]
