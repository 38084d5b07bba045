"""
테스트 공용 픽스처

- JWT_SECRET은 app.main import 전에 설정 (모듈 레벨 create_app)
- bcrypt cost는 최소값(4)으로 낮춰 테스트 속도 확보
"""
import os

os.environ.setdefault("JWT_SECRET", "tests-secret-key-with-at-least-32-bytes")

import pytest
from fastapi.testclient import TestClient

from shared import InMemoryCredentialStore, Settings
from app.main import create_app


TEST_SECRET = "tests-secret-key-with-at-least-32-bytes"


@pytest.fixture
def settings(tmp_path):
    """낮은 bcrypt cost + 임시 정적 파일 디렉터리"""
    (tmp_path / "index.html").write_text("<html><body>Welcome to Chirpy</body></html>", encoding="utf-8")
    return Settings(jwt_secret=TEST_SECRET, bcrypt_rounds=4, static_root=str(tmp_path))


@pytest.fixture
def store():
    return InMemoryCredentialStore()


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
