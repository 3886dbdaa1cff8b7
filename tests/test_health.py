import inspect

from fastapi.routing import APIRoute

from app.main import app


def test_healthcheck(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_api_endpoints_run_in_threadpool():
    # Firestore calls block, so endpoints are plain functions
    endpoints = [r.endpoint for r in app.routes if isinstance(r, APIRoute)]
    assert endpoints
    assert not [e.__name__ for e in endpoints if inspect.iscoroutinefunction(e)]
