"""
Seed Firestore with demo data:
  - admin@example.com / Admin@123 (admin)
  - member@example.com / Member@123 (member)
  - project "Team Kanban Project" (KAN) with both users as members
  - a handful of tasks across all statuses

Usage: python scripts/seed.py [--dry-run]
"""
import argparse
import logging
from datetime import datetime, timezone

from app.core.firebase import get_firestore
from app.core.security import hash_password
from app.models.task import TaskPriority, TaskStatus
from app.models.user import UserRole
from app.repositories.project_repository import ProjectRepository
from app.repositories.task_repository import TaskRepository
from app.repositories.user_repository import UserRepository

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger("seed")

USERS = [
    {"name": "Admin User", "email": "admin@example.com", "password": "Admin@123", "role": UserRole.ADMIN},
    {"name": "Member User", "email": "member@example.com", "password": "Member@123", "role": UserRole.MEMBER},
]

PROJECT = {"name": "Team Kanban Project", "key": "KAN"}

# (title, description, status, priority, assignee index, due date)
TASKS = [
    ("Set up development environment", "Configure the local toolchain and Firestore access",
     TaskStatus.DONE, TaskPriority.HIGH, 0, "2024-01-15"),
    ("Implement user authentication", "JWT-based authentication with login and registration",
     TaskStatus.DONE, TaskPriority.HIGH, 0, "2024-01-20"),
    ("Design database schema", "Collections for users, projects and tasks",
     TaskStatus.DONE, TaskPriority.MEDIUM, 1, "2024-01-18"),
    ("Build project management API", "CRUD operations for projects with role-based access",
     TaskStatus.IN_PROGRESS, TaskPriority.HIGH, 0, "2024-02-01"),
    ("Create task board UI", "Kanban columns for todo, in progress and done",
     TaskStatus.IN_PROGRESS, TaskPriority.MEDIUM, 1, "2024-02-05"),
    ("Add CSV export", "Export project tasks to CSV",
     TaskStatus.TODO, TaskPriority.LOW, 1, "2024-02-10"),
    ("Write API documentation", None,
     TaskStatus.TODO, TaskPriority.MEDIUM, None, None),
]


def _ensure_user(users: UserRepository, seed_user: dict) -> dict:
    existing = users.get_by_email(seed_user["email"])
    if existing:
        logger.info("User %s already exists", seed_user["email"])
        return existing
    user = users.create(
        {
            "name": seed_user["name"],
            "email": seed_user["email"],
            "password_hash": hash_password(seed_user["password"]),
            "role": seed_user["role"].value,
        }
    )
    logger.info("User %s created", seed_user["email"])
    return user


def seed(db) -> None:
    users = UserRepository(db)
    projects = ProjectRepository(db)
    tasks = TaskRepository(db)

    created = [_ensure_user(users, seed_user) for seed_user in USERS]
    admin = created[0]

    project = projects.get_by_key(PROJECT["key"])
    if project:
        logger.info("Project %s already exists, skipping tasks", PROJECT["key"])
        return

    project = projects.create(
        {**PROJECT, "members": [u["id"] for u in created], "created_by": admin["id"]}
    )
    logger.info("Project %s created", project["key"])

    for title, description, status, priority, assignee_idx, due in TASKS:
        tasks.create(
            {
                "project_id": project["id"],
                "title": title,
                "description": description or "",
                "status": status.value,
                "priority": priority.value,
                "assignee_id": created[assignee_idx]["id"] if assignee_idx is not None else None,
                "due_date": datetime.fromisoformat(due).replace(tzinfo=timezone.utc) if due else None,
                "created_by": admin["id"],
            }
        )
    logger.info("%d tasks created", len(TASKS))


def main():
    ap = argparse.ArgumentParser(description="Seed KanbanLite demo data into Firestore")
    ap.add_argument("--dry-run", action="store_true", help="only print what would be seeded")
    args = ap.parse_args()

    if args.dry_run:
        logger.info("Would seed %d users, project %s and %d tasks", len(USERS), PROJECT["key"], len(TASKS))
        return
    seed(get_firestore())


if __name__ == "__main__":
    main()
