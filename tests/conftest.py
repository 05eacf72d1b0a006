import io
import shutil
from pathlib import Path
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from blogcms.config import settings
from blogcms.database import Base, get_db
from blogcms.main import app
from blogcms.models.user import User
from blogcms.client.api import BlogApiClient
from blogcms.client.credentials import TokenCredentials

TEST_DB_URL = "sqlite:///./test_blogcms.db"

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def seed_users(db):
    users = {
        "admin": User(username="Admin", email="admin@example.com", role="admin"),
        "writer": User(username="Writer", email="writer@example.com", role="employee"),
        "editor": User(username="Editor", email="editor@example.com", role="employee"),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


@pytest.fixture
def upload_dir(monkeypatch):
    test_upload_dir = Path("test_uploads_runtime") / uuid4().hex / "uploads"
    test_upload_dir.mkdir(parents=True, exist_ok=True)
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(test_upload_dir))
    yield test_upload_dir
    shutil.rmtree(test_upload_dir.parent.parent, ignore_errors=True)


def get_token(client, email: str) -> str:
    resp = client.post("/api/auth/login", json={"email": email})
    assert resp.status_code == 200, resp.text
    return resp.json()["access_token"]


def auth_headers(client, email: str) -> dict:
    return {"Authorization": f"Bearer {get_token(client, email)}"}


def api_for(client, email: str) -> BlogApiClient:
    return BlogApiClient(TokenCredentials(get_token(client, email)), http=client)


def png_bytes(width: int = 4, height: int = 3, fmt: str = "PNG") -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color=(200, 30, 30)).save(buf, fmt)
    return buf.getvalue()


def create_post(client, headers, title="Hello", description="", content="") -> dict:
    resp = client.post(
        "/api/posts",
        headers=headers,
        json={"title": title, "description": description, "content": content},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()
