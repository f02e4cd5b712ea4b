import json
import traceback
from typing import Optional
from urllib.parse import urlsplit

from app.config import Settings
from app.exceptions import (
    ClientInitError,
    ConfigurationMissingError,
    CredentialParseError,
    ObjectNotFoundError,
    SignedUrlError,
    StoragePackageUnavailableError,
    StoreOperationError,
    ValidationFailedError,
)
from app.models.schemas import ImageReference
from app.utils.logger import logger
from app.utils.storage import ObjectStorage


def _describe(value: Optional[str]) -> str:
    return "SET" if value else "NOT SET"


def check_configuration(settings: Settings) -> None:
    """Raise ConfigurationMissingError for the first required setting that is absent"""
    if settings.storage_backend == "s3":
        if not settings.aws_region:
            raise ConfigurationMissingError("AWS region not configured")
        if not settings.s3_bucket_name:
            raise ConfigurationMissingError("Amazon S3 bucket name not configured")
        if not (settings.aws_access_key_id and settings.aws_secret_access_key):
            raise ConfigurationMissingError("AWS credentials not configured")
        return

    if not settings.google_cloud_project_id:
        raise ConfigurationMissingError("Google Cloud project ID not configured")
    if not settings.google_cloud_bucket_name:
        raise ConfigurationMissingError("Google Cloud Storage bucket name not configured")
    if not settings.google_cloud_key_file and not settings.google_cloud_credentials:
        raise ConfigurationMissingError("Google Cloud credentials not configured")


def rewrite_to_cdn(signed_url: str, cdn_endpoint: str) -> str:
    """
    Swap the origin of a signed URL for the CDN endpoint.
    Path and query string are copied verbatim so the signature stays valid.
    """
    parts = urlsplit(signed_url)
    path_and_query = parts.path + (f"?{parts.query}" if parts.query else "")

    origin = cdn_endpoint.rstrip("/")
    if "://" not in origin:
        origin = f"https://{origin}"
    return f"{origin}{path_and_query}"


class SignedUrlService:
    """Issues signed read URLs for gallery images, one request at a time."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def _log_configuration(self):
        s = self.settings
        logger.debug(f"Storage backend: {s.storage_backend}")
        if s.storage_backend == "s3":
            logger.debug(f"AWS_REGION: {_describe(s.aws_region)}")
            logger.debug(f"S3_BUCKET_NAME: {_describe(s.s3_bucket_name)}")
            logger.debug(f"AWS_ACCESS_KEY_ID: {_describe(s.aws_access_key_id)}")
        else:
            logger.debug(f"GOOGLE_CLOUD_PROJECT_ID: {_describe(s.google_cloud_project_id)}")
            logger.debug(f"GOOGLE_CLOUD_BUCKET_NAME: {_describe(s.google_cloud_bucket_name)}")
            logger.debug(f"GOOGLE_CLOUD_KEY_FILE: {_describe(s.google_cloud_key_file)}")
            logger.debug(f"GOOGLE_CLOUD_CREDENTIALS: {_describe(s.google_cloud_credentials)}")

    def create_storage(self) -> ObjectStorage:
        if self.settings.storage_backend == "s3":
            return self._create_s3_storage()
        return self._create_gcs_storage()

    def _create_gcs_storage(self) -> ObjectStorage:
        s = self.settings
        try:
            from app.utils.gcs_storage import GCSStorage
        except ImportError as e:
            logger.error(f"Failed to import google-cloud-storage: {str(e)}")
            raise StoragePackageUnavailableError("Google Cloud Storage package not available")

        credentials_info = None
        if not s.google_cloud_key_file:
            try:
                credentials_info = json.loads(s.google_cloud_credentials)
            except json.JSONDecodeError as e:
                logger.error(f"Failed to parse GOOGLE_CLOUD_CREDENTIALS: {str(e)}")
                raise CredentialParseError("Invalid Google Cloud credentials format")

        try:
            storage = GCSStorage(
                project_id=s.google_cloud_project_id,
                bucket_name=s.google_cloud_bucket_name,
                key_file=s.google_cloud_key_file,
                credentials_info=credentials_info,
            )
        except Exception as e:
            logger.error(f"Failed to initialize Google Cloud Storage: {str(e)}")
            raise ClientInitError(f"Failed to initialize Google Cloud Storage: {e}")

        logger.info("Google Cloud Storage client initialized")
        return storage

    def _create_s3_storage(self) -> ObjectStorage:
        s = self.settings
        try:
            from app.utils.s3_storage import S3Storage
        except ImportError as e:
            logger.error(f"Failed to import boto3: {str(e)}")
            raise StoragePackageUnavailableError("Amazon S3 package not available")

        try:
            storage = S3Storage(
                region=s.aws_region,
                bucket_name=s.s3_bucket_name,
                access_key_id=s.aws_access_key_id,
                secret_access_key=s.aws_secret_access_key,
            )
        except Exception as e:
            logger.error(f"Failed to initialize Amazon S3: {str(e)}")
            raise ClientInitError(f"Failed to initialize Amazon S3: {e}")

        logger.info("Amazon S3 client initialized")
        return storage

    def issue(self, directory: Optional[str], filename: Optional[str], original: bool = False) -> str:
        """
        Return a signed URL for `{directory}/{optimized|original}/{filename}`.

        Stages run in order: configuration, parameters, client construction,
        existence check, signing, CDN rewrite. Each raises its own SignedUrlError.
        """
        self._log_configuration()
        check_configuration(self.settings)

        logger.debug(f"Request params: directory={directory}, filename={filename}, original={original}")
        if not directory or not filename:
            logger.error("Missing required parameters")
            raise ValidationFailedError("Missing required parameters: directory and filename")

        reference = ImageReference.from_flag(directory, filename, original)
        storage = self.create_storage()
        object_key = reference.object_key

        try:
            if not storage.exists(object_key):
                logger.error(f"File not found: {object_key}")
                raise ObjectNotFoundError(object_key)

            signed_url = storage.generate_signed_url(
                object_key, expiration=self.settings.signed_url_expiration
            )
            logger.info(f"Generated signed URL for {object_key}")

            cdn_endpoint = self.settings.google_cloud_cdn_endpoint
            if cdn_endpoint:
                signed_url = rewrite_to_cdn(signed_url, cdn_endpoint)
                logger.debug(f"Using CDN URL for {object_key}")
            else:
                logger.debug(f"Using direct storage URL for {object_key}")

            return signed_url

        except SignedUrlError:
            raise

        except Exception as e:
            logger.error(f"Storage operation failed: {str(e)}")
            raise StoreOperationError(
                f"Storage operation failed: {str(e) or type(e).__name__}",
                details=traceback.format_exc(),
            )
