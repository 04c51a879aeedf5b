"""Shared fixtures."""

import json
import os

# Must be set before stoneforged.web.database is imported
os.environ["DATABASE_URL"] = "sqlite://"

import httpx
import pytest

from stoneforged.client import ProspectAPIClient
from stoneforged.constants import SEED_PROSPECTS, SEEDED_COUNT_HEADER


class FakeProspectService:
    """In-memory stand-in for the prospects REST service."""

    def __init__(self):
        self.rows: dict[int, dict] = {}
        self.next_id = 1
        self.requests: list[tuple[str, str]] = []
        self.down = False
        self.fail_paths: set[tuple[str, str]] = set()

    def add_row(self, **fields) -> int:
        row_id = fields.pop("id", None) or self.next_id
        self.rows[row_id] = {"id": row_id, **fields}
        self.next_id = max(self.next_id, row_id + 1)
        return row_id

    def handler(self, request: httpx.Request) -> httpx.Response:
        method, path = request.method, request.url.path
        self.requests.append((method, path))

        if self.down:
            raise httpx.ConnectError("connection refused", request=request)
        if (method, path) in self.fail_paths:
            return httpx.Response(500, json={"detail": "boom"})

        if method == "GET" and path == "/api/prospects":
            rows = sorted(self.rows.values(), key=lambda r: r.get("score") or 0, reverse=True)
            return httpx.Response(200, json=rows)

        if method == "POST" and path == "/api/prospects":
            body = json.loads(request.content)
            new_id = self.add_row(**body)
            return httpx.Response(200, json={"success": True, "id": new_id})

        if method == "DELETE" and path.startswith("/api/prospects/"):
            row_id = int(path.rsplit("/", 1)[1])
            removed = self.rows.pop(row_id, None) is not None
            return httpx.Response(200, json={"success": removed})

        if method == "GET" and path == "/api/seed":
            inserted = 0
            for row in SEED_PROSPECTS:
                if row["id"] not in self.rows:
                    self.add_row(**row)
                    inserted += 1
            return httpx.Response(
                200, text="Examples added!", headers={SEEDED_COUNT_HEADER: str(inserted)}
            )

        if method == "GET" and path == "/api/health":
            return httpx.Response(
                200, json={"status": "healthy", "database": True, "version": "test", "uptime_seconds": 1}
            )

        return httpx.Response(404, json={"detail": "Not Found"})


@pytest.fixture
def fake_service():
    return FakeProspectService()


@pytest.fixture
def api_client(fake_service):
    """ProspectAPIClient wired to the fake service."""
    client = ProspectAPIClient(
        "http://testserver",
        transport=httpx.MockTransport(fake_service.handler),
    )
    yield client
    client.close()


@pytest.fixture
def db_session():
    """Fresh tables and a session on the in-memory database."""
    from stoneforged.web.database import Base, SessionLocal, engine

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    """Create test client."""
    from fastapi.testclient import TestClient
    from stoneforged.web.app import create_app

    app = create_app()
    return TestClient(app)
