import json
import pytest
from unittest.mock import MagicMock
from typing import Dict, Any

from app.config import Settings
from app.utils.storage import ObjectStorage

SIGNED_URL = (
    "https://storage.googleapis.com/demo-bucket/gallery/optimized/image1.jpg"
    "?X-Goog-Algorithm=GOOG4-RSA-SHA256"
    "&X-Goog-Credential=gallery%40demo-project.iam.gserviceaccount.com%2F20261019%2Fauto%2Fstorage%2Fgoog4_request"
    "&X-Goog-Date=20261019T120000Z&X-Goog-Expires=3600&X-Goog-SignedHeaders=host"
    "&X-Goog-Signature=3f2a9c0d"
)


def make_settings(**overrides) -> Settings:
    """Build Settings without reading the process environment or a .env file."""
    values: Dict[str, Any] = {
        "storage_backend": "gcs",
        "google_cloud_project_id": "demo-project",
        "google_cloud_bucket_name": "demo-bucket",
        "google_cloud_key_file": None,
        "google_cloud_credentials": json.dumps({
            "type": "service_account",
            "project_id": "demo-project",
            "client_email": "gallery@demo-project.iam.gserviceaccount.com",
        }),
        "google_cloud_cdn_endpoint": None,
        "aws_access_key_id": None,
        "aws_secret_access_key": None,
        "aws_region": None,
        "s3_bucket_name": None,
        "signed_url_expiration": 3600,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def gcs_settings() -> Settings:
    """Complete configuration for the Google Cloud Storage backend."""
    return make_settings()


@pytest.fixture
def s3_settings() -> Settings:
    """Complete configuration for the Amazon S3 backend."""
    return make_settings(
        storage_backend="s3",
        google_cloud_project_id=None,
        google_cloud_bucket_name=None,
        google_cloud_credentials=None,
        aws_region="us-east-1",
        s3_bucket_name="demo-bucket",
        aws_access_key_id="AKIATEST",
        aws_secret_access_key="secret",
    )


@pytest.fixture
def signed_url() -> str:
    return SIGNED_URL


@pytest.fixture
def mock_storage(signed_url):
    """An ObjectStorage where every object exists and signing returns `signed_url`."""
    storage = MagicMock(spec=ObjectStorage)
    storage.bucket_name = "demo-bucket"
    storage.exists.return_value = True
    storage.generate_signed_url.return_value = signed_url
    return storage


@pytest.fixture
def settings_factory():
    """Returns `make_settings` so tests can build partial configurations."""
    return make_settings
