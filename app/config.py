from typing import List, Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Storage backend
    storage_backend: Literal["gcs", "s3"] = "gcs"

    # Google Cloud Configuration
    google_cloud_project_id: Optional[str] = None
    google_cloud_bucket_name: Optional[str] = None
    google_cloud_key_file: Optional[str] = None
    google_cloud_credentials: Optional[str] = None  # inline service account JSON
    google_cloud_cdn_endpoint: Optional[str] = None  # e.g. "https://cdn.example.com"

    # AWS Configuration
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: Optional[str] = None

    # S3 Configuration
    s3_bucket_name: Optional[str] = None

    # Signed URL Configuration
    signed_url_expiration: int = 3600  # seconds

    # Gallery Configuration
    gallery_directory: str = "gallery"
    gallery_images: List[str] = [
        "image1.jpg",
        "image2.jpg",
        "image3.jpg",
        "image4.jpg",
        "image5.jpg",
    ]
    gallery_api_base_url: str = "http://localhost:8000"

    # Application Settings
    log_level: str = "INFO"  # overridden by LOG_LEVEL

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings."""
    return settings
