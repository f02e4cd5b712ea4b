import boto3
from botocore.config import Config
from botocore.exceptions import NoCredentialsError, ClientError
from app.utils.logger import logger
from app.utils.storage import ObjectStorage

_MISSING_CODES = {"404", "NoSuchKey", "NotFound"}


class S3Storage(ObjectStorage):
    def __init__(self, region: str, bucket_name: str, access_key_id: str, secret_access_key: str):
        self.s3_client = boto3.client(
            's3',
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            region_name=region,
            config=Config(signature_version='s3v4')
        )
        self.bucket_name = bucket_name

    def exists(self, object_key: str) -> bool:
        """
        HEAD the object. S3 answers 404 for a missing key only when the caller
        holds s3:ListBucket; otherwise it answers 403, which is raised as an error.
        """
        try:
            self.s3_client.head_object(Bucket=self.bucket_name, Key=object_key)
            return True
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') in _MISSING_CODES:
                return False
            logger.error(f"S3 head_object failed: {str(e)}")
            raise

    def generate_signed_url(self, object_key: str, expiration: int = 3600) -> str:
        """
        Generate a presigned URL for secure access to an S3 object.
        Expires after `expiration` seconds (default: 1 hour).
        """
        try:
            url = self.s3_client.generate_presigned_url(
                'get_object',
                Params={
                    'Bucket': self.bucket_name,
                    'Key': object_key
                },
                ExpiresIn=expiration
            )
            return url
        except (NoCredentialsError, ClientError) as e:
            logger.error(f"S3 presigned URL generation failed: {str(e)}")
            raise
