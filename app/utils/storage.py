from abc import ABC, abstractmethod


class ObjectStorage(ABC):
    """Read-only view of a bucket: existence checks and signed read URLs."""

    bucket_name: str

    @abstractmethod
    def exists(self, object_key: str) -> bool:
        """Return True when the object is present in the bucket."""

    @abstractmethod
    def generate_signed_url(self, object_key: str, expiration: int = 3600) -> str:
        """
        Generate a signed URL granting read access to a single object.
        Expires after `expiration` seconds (default: 1 hour).
        """
