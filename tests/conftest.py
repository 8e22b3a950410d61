"""Shared fixtures: isolated environment and mocked AWS Secrets Manager."""
import json

import boto3
import pytest
from moto import mock_aws

REGION = "us-east-1"

SAMPLE_SECRET = {
    "dbname": "d",
    "port": 5432,
    "username": "u",
    "password": "p",
    "host": "h",
    "dbsslmode": "require",
}


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Fake AWS credentials, no real AWS config, no stray toolkit env vars."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()
    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setattr("pathlib.Path.home", lambda: fake_home)

    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "aws-config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "aws-credentials"))
    for var in ("AWS_DEFAULT_REGION", "AWS_REGION", "AWS_PROFILE", "region", "DBSECRETS_CONFIG"):
        monkeypatch.delenv(var, raising=False)
    return fake_home


@pytest.fixture
def sample_secret():
    return dict(SAMPLE_SECRET)


@pytest.fixture
def sm_client():
    """Secrets Manager client backed by moto."""
    with mock_aws():
        yield boto3.client("secretsmanager", region_name=REGION)


@pytest.fixture
def string_secret(sm_client, monkeypatch):
    """A text secret whose id is exported as DB_SECRET, with region set."""
    sm_client.create_secret(Name="prod/app/db", SecretString=json.dumps(SAMPLE_SECRET))
    monkeypatch.setenv("DB_SECRET", "prod/app/db")
    monkeypatch.setenv("region", REGION)
    return "prod/app/db"
