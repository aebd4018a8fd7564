"""
Shared fixtures for the picturebox HTTP tests.

Every test gets its own upload directory under ``tmp_path`` and an app built
around it, so uploads never leak between tests or into the working tree.
"""
import base64
import re

import pytest
from fastapi.testclient import TestClient

from picturebox.config import Settings
from picturebox.main import create_app

# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
)

IMG_SRC_PATTERN = re.compile(r'<img src="(/uploads/[^"]+)"')


def gallery_urls(html: str) -> list[str]:
    return IMG_SRC_PATTERN.findall(html)


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def app_settings(upload_dir):
    return Settings(app_name="AI SDLC MCP", upload_dir=str(upload_dir), log_level="WARNING")


@pytest.fixture
def app(app_settings):
    return create_app(app_settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def png_bytes():
    return PNG_BYTES
