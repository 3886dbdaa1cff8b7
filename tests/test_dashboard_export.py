import csv
import io
from datetime import date, datetime, timedelta, timezone
from urllib.parse import quote

from app.helper import _content_disposition, _export_filename
from app.repositories.project_repository import ProjectRepository
from app.services.dashboard_service import summarize
from app.services.export_service import CSV_HEADER
from tests.conftest import add_task, auth_headers

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def test_summarize_counts_and_overdue():
    past = NOW - timedelta(days=1)
    future = NOW + timedelta(days=1)
    tasks = [
        {"status": "todo", "due_date": past},          # overdue
        {"status": "in_progress", "due_date": past},   # overdue
        {"status": "done", "due_date": past},          # done, not overdue
        {"status": "todo", "due_date": future},
        {"status": "todo", "due_date": None},
    ]
    assert summarize(tasks, now=NOW) == {
        "total": 5,
        "todo": 3,
        "in_progress": 1,
        "done": 1,
        "overdue": 2,
        "completion_rate": 20,
    }


def test_summarize_rounds_completion_rate():
    tasks = [{"status": "done"}, {"status": "done"}, {"status": "todo"}]
    assert summarize(tasks, now=NOW)["completion_rate"] == 67


def test_summary_of_empty_project(client, member, project):
    r = client.get(f"/projects/{project['id']}/summary", headers=auth_headers(member))
    assert r.status_code == 200
    assert r.json() == {
        "total": 0, "todo": 0, "in_progress": 0, "done": 0, "overdue": 0, "completion_rate": 0,
    }


def test_summary_endpoint(client, db, admin, member, project):
    add_task(db, project, admin, status="done")
    add_task(db, project, admin, status="todo", due_date=datetime(2000, 1, 1, tzinfo=timezone.utc))
    r = client.get(f"/projects/{project['id']}/summary", headers=auth_headers(admin))
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 2
    assert body["done"] == 1
    assert body["overdue"] == 1
    assert body["completion_rate"] == 50


def test_summary_missing_project(client, admin):
    assert client.get("/projects/nope/summary", headers=auth_headers(admin)).status_code == 404


def test_export_csv(client, db, admin, member, project):
    add_task(db, project, admin, title='Say "hello", world', description="line one",
             status="in_progress", priority="high", assignee_id=member["id"],
             due_date=datetime(2024, 2, 1, tzinfo=timezone.utc))
    add_task(db, project, admin, title="Unassigned")

    r = client.get(f"/projects/{project['id']}/tasks/export.csv", headers=auth_headers(member))
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    disposition = r.headers["content-disposition"]
    assert disposition.startswith('attachment; filename="Team_Kanban_Project_tasks_')
    assert disposition.endswith('.csv"')

    lines = r.text.strip("\n").split("\n")
    assert lines[0] == ",".join(CSV_HEADER)
    assert len(lines) - 1 == 2
    assert all(line.startswith('"') for line in lines[1:])

    rows = {row["Title"]: row for row in csv.DictReader(io.StringIO(r.text))}
    quoted = rows['Say "hello", world']
    assert quoted["Assignee"] == "Member User"
    assert quoted["Assignee Email"] == "member@example.com"
    assert quoted["Status"] == "in_progress"
    assert quoted["Due Date"].startswith("2024-02-01T00:00:00")
    assert quoted["Created By"] == "Admin User"

    blank = rows["Unassigned"]
    assert blank["Assignee"] == ""
    assert blank["Due Date"] == ""
    assert blank["Description"] == ""


def test_export_row_count_matches_project_tasks(client, db, admin, project):
    for i in range(12):
        add_task(db, project, admin, title=f"T{i}")
    r = client.get(f"/projects/{project['id']}/tasks/export.csv", headers=auth_headers(admin))
    rows = list(csv.reader(io.StringIO(r.text)))
    assert len(rows) - 1 == 12


def test_export_empty_project_has_header_only(client, admin, project):
    r = client.get(f"/projects/{project['id']}/tasks/export.csv", headers=auth_headers(admin))
    assert r.text == ",".join(CSV_HEADER) + "\n"


def test_export_non_ascii_project_name(client, db, admin):
    project = ProjectRepository(db).create(
        {"name": "Проект Канбан", "key": "RU", "members": [admin["id"]], "created_by": admin["id"]}
    )
    add_task(db, project, admin, title="Задача")

    r = client.get(f"/projects/{project['id']}/tasks/export.csv", headers=auth_headers(admin))
    assert r.status_code == 200
    disposition = r.headers["content-disposition"]
    assert 'filename="project_tasks_' in disposition
    assert "filename*=UTF-8''" + quote("Проект_Канбан_tasks_") in disposition
    assert "Задача" in r.text


def test_content_disposition_keeps_plain_ascii_names():
    name = _export_filename("Café Board", date(2024, 1, 31))
    assert _content_disposition("Board_tasks_2024-01-31.csv") == 'attachment; filename="Board_tasks_2024-01-31.csv"'
    assert _content_disposition(name) == (
        "attachment; filename=\"Caf_Board_tasks_2024-01-31.csv\"; "
        "filename*=UTF-8''Caf%C3%A9_Board_tasks_2024-01-31.csv"
    )
