"""
Zeo Tourism - Test Configuration and Fixtures
"""
import os
import shutil
import tempfile

import pytest

# Point storage at throwaway directories before the app reads its settings
TEST_ROOT = tempfile.mkdtemp(prefix="zeo-tests-")
os.environ["DATA_DIR"] = os.path.join(TEST_ROOT, "data")
os.environ["UPLOADS_DIR"] = os.path.join(TEST_ROOT, "uploads")
os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret-key-for-testing"

from fastapi.testclient import TestClient

from zeo_api.main import app
from zeo_api.core.config import settings
from zeo_api.auth.rate_limiter import rate_limiter
from seed_data import create_sample_data


@pytest.fixture
def data_dir():
    """Fresh seeded data directory for each test"""
    shutil.rmtree(settings.data_dir, ignore_errors=True)
    create_sample_data(settings.data_dir)
    yield settings.data_dir
    shutil.rmtree(settings.data_dir, ignore_errors=True)


@pytest.fixture
def client(data_dir):
    """Test client; entering it runs the lifespan, which loads the data directory"""
    rate_limiter.reset()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_token(client) -> str:
    response = client.post(
        "/api/auth/login",
        json={"email": settings.admin_email, "password": settings.admin_password}
    )
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def admin_headers(admin_token) -> dict:
    return {"Authorization": f"Bearer {admin_token}"}


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(TEST_ROOT, ignore_errors=True)
