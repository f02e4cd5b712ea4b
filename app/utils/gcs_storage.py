from datetime import timedelta
from typing import Dict, Optional

from google.cloud import storage
from google.oauth2 import service_account

from app.utils.logger import logger
from app.utils.storage import ObjectStorage


class GCSStorage(ObjectStorage):
    def __init__(
        self,
        project_id: str,
        bucket_name: str,
        key_file: Optional[str] = None,
        credentials_info: Optional[Dict] = None,
    ):
        if key_file:
            logger.debug("Using key file authentication")
            self.client = storage.Client.from_service_account_json(key_file, project=project_id)
        else:
            logger.debug("Using credentials string authentication")
            credentials = service_account.Credentials.from_service_account_info(credentials_info)
            self.client = storage.Client(project=project_id, credentials=credentials)
        self.bucket_name = bucket_name
        self.bucket = self.client.bucket(bucket_name)

    def exists(self, object_key: str) -> bool:
        logger.debug(f"Checking file: gs://{self.bucket_name}/{object_key}")
        return self.bucket.blob(object_key).exists()

    def generate_signed_url(self, object_key: str, expiration: int = 3600) -> str:
        """
        Generate a V4 signed URL for a GET on the object.
        Expires after `expiration` seconds (default: 1 hour).
        """
        blob = self.bucket.blob(object_key)
        return blob.generate_signed_url(
            version="v4",
            expiration=timedelta(seconds=expiration),
            method="GET",
        )
