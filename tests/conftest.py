"""Test configuration and fixtures for storx-mcp."""

import json

import boto3
import pytest
from moto import mock_aws

from storx_mcp.dispatcher import Dispatcher
from storx_mcp.objectstorage import S3ClientConfig, StorxStorageClient

TEST_CONFIG = {
    "access_key_id": "test_key",
    "secret_access_key": "test_secret",
    "region_name": "us-east-1",
}

CREDENTIAL_ENV_VARS = (
    "STORX_ACCESS_KEY",
    "STORX_SECRET_KEY",
    "STORX_ENDPOINT",
    "STORX_REGION",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_ENDPOINT_URL",
    "AWS_REGION",
)


@pytest.fixture
def s3_backend():
    """Mocked S3 backend with a raw boto3 client for arranging state."""
    with mock_aws():
        yield boto3.client(
            "s3",
            aws_access_key_id=TEST_CONFIG["access_key_id"],
            aws_secret_access_key=TEST_CONFIG["secret_access_key"],
            region_name=TEST_CONFIG["region_name"],
        )


@pytest.fixture
def storage(s3_backend):
    """Storage client pointed at the mocked backend."""
    return StorxStorageClient.from_config(S3ClientConfig(**TEST_CONFIG))


@pytest.fixture
def dispatcher(storage):
    """Dispatcher over the mocked backend."""
    return Dispatcher(storage)


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point HOME and cwd at an empty directory and clear credential variables."""
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for name in CREDENTIAL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return home


@pytest.fixture
def write_config(tmp_path):
    """Write a claude_desktop_config.json with the given server env."""

    def _write(env, server_key="storx", directory=None):
        target = (directory or tmp_path) / "claude_desktop_config.json"
        target.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "mcpServers": {
                server_key: {"command": "storx-mcp", "args": ["serve"], "env": env}
            }
        }
        target.write_text(json.dumps(payload))
        return target

    return _write
