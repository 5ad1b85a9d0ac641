import pytest
from fastapi.testclient import TestClient

from verify_backend.main import app

API_PREFIX = "/verify/api/v1"

# A revealed server seed and the commitment that was shown before its draw
SERVER_SEED = "b2184bbbbb1e9dc438f99ba24e3610999adb419bc8bc5ed2f9d200e174f4a8fb"
SERVER_SEED_HASH = "c6656428c631747b6d9c89232eab201ad8dc187f19f74dda18dbaf67dc1a8268"
CLIENT_SEED = "77ecfa83b02c6f630d7636bd3af18b7f"


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
