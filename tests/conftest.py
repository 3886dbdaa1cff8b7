import uuid
from copy import deepcopy

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.core.security import create_access_token, hash_password
from app.deps import get_db
from app.main import app
from app.repositories.project_repository import ProjectRepository
from app.repositories.task_repository import TaskRepository
from app.repositories.user_repository import UserRepository


# ---------- in-memory document store (subset of the Firestore client API) ----------

_MISSING = object()


class FakeSnapshot:
    def __init__(self, reference, data):
        self.reference = reference
        self.id = reference.id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return deepcopy(self._data) if self._data is not None else None


class FakeDocumentReference:
    def __init__(self, store, doc_id):
        self._store = store
        self.id = doc_id

    def get(self):
        return FakeSnapshot(self, self._store.get(self.id))

    def set(self, data, merge=False):
        if merge and self.id in self._store:
            self._store[self.id].update(deepcopy(data))
        else:
            self._store[self.id] = deepcopy(data)

    def update(self, data):
        if self.id not in self._store:
            raise KeyError(f"No document to update: {self.id}")
        self._store[self.id].update(deepcopy(data))

    def delete(self):
        self._store.pop(self.id, None)


class FakeQuery:
    def __init__(self, store, filters=(), limit=None):
        self._store = store
        self._filters = tuple(filters)
        self._limit = limit

    def where(self, field, op, value):
        return FakeQuery(self._store, self._filters + ((field, op, value),), self._limit)

    def limit(self, count):
        return FakeQuery(self._store, self._filters, count)

    @staticmethod
    def _match(data, field, op, value):
        current = data.get(field, _MISSING)
        if current is _MISSING:
            return False
        if op == "==":
            return current == value
        if op == "array_contains":
            return isinstance(current, list) and value in current
        raise NotImplementedError(op)

    def stream(self):
        count = 0
        for doc_id, data in list(self._store.items()):
            if all(self._match(data, f, op, v) for f, op, v in self._filters):
                yield FakeSnapshot(FakeDocumentReference(self._store, doc_id), data)
                count += 1
                if self._limit and count >= self._limit:
                    return


class FakeCollection(FakeQuery):
    def document(self, doc_id=None):
        return FakeDocumentReference(self._store, doc_id or uuid.uuid4().hex[:20])


class FakeFirestore:
    def __init__(self):
        self._collections = {}

    def collection(self, name):
        return FakeCollection(self._collections.setdefault(name, {}))


# ---------- fixtures ----------

@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    monkeypatch.setattr(settings, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def db():
    return FakeFirestore()


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def make_user(db, name, email, role="member", password="secret123"):
    return UserRepository(db).create(
        {
            "name": name,
            "email": email,
            "password_hash": hash_password(password),
            "role": role,
        }
    )


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user)}"}


def add_task(db, project, creator, **fields):
    data = {
        "project_id": project["id"],
        "title": "Task",
        "description": "",
        "status": "todo",
        "priority": "medium",
        "assignee_id": None,
        "due_date": None,
        "created_by": creator["id"],
    }
    data.update(fields)
    return TaskRepository(db).create(data)


@pytest.fixture
def admin(db):
    return make_user(db, "Admin User", "admin@example.com", role="admin")


@pytest.fixture
def member(db):
    return make_user(db, "Member User", "member@example.com")


@pytest.fixture
def outsider(db):
    return make_user(db, "Outsider", "outsider@example.com")


@pytest.fixture
def project(db, admin, member):
    return ProjectRepository(db).create(
        {
            "name": "Team Kanban Project",
            "key": "KAN",
            "members": [admin["id"], member["id"]],
            "created_by": admin["id"],
        }
    )
