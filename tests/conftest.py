from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from filedesk.config.config_settings.config_schema import AppConfig
from filedesk.main import create_app
from filedesk.utils.jwt_utils import create_token
from tests.helpers import API_PREFIX

TEST_SECRET = "filedesk-test-secret"


@pytest.fixture
def storage_root(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def app_config(tmp_path, storage_root) -> AppConfig:
    return AppConfig(
        server={"api_prefix": API_PREFIX},
        database={"url": f"sqlite+aiosqlite:///{tmp_path / 'filedesk.db'}"},
        logging={"enable_file": False},
        security_settings={"secret": TEST_SECRET, "jwt_issuer": "filedesk"},
        storage_clients={
            "local_disk": {
                "type": "local",
                "params": {
                    "base_path": str(storage_root),
                    "base_url": "http://testserver/files",
                    "mount_path": "/files",
                },
            },
        },
        storage_profiles={
            "general_files": {
                "client": "local_disk",
                "default_folder": "files/{year}/{month:02d}",
                "allowed_file_types": ["image/png", "text/plain"],
                "max_file_size": 2000,
                "max_upload_files": 5,
            },
            "profile_pictures": {
                "client": "local_disk",
                "default_folder": "profile-pictures",
                "allowed_file_types": ["image/png", "image/jpeg"],
                "max_file_size": 1000,
                "max_upload_files": 1,
            },
        },
    )


@pytest.fixture
def app(app_config):
    return create_app(app_config)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(app_config):
    """生成带指定 capabilities 的 Authorization 头"""
    def make(*capabilities, subject="user-1", expires_delta=timedelta(minutes=5)):
        token = create_token(
            app_config.security_settings,
            subject=subject,
            capabilities=list(capabilities),
            expires_delta=expires_delta,
        )
        return {"Authorization": f"Bearer {token}"}
    return make
