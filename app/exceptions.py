"""Errors raised while issuing a signed URL.

Every failure stage of the issuance endpoint has its own exception class.
The exception handler registered in ``app.main`` turns any ``SignedUrlError``
into an ``ErrorResponse`` body with the class's HTTP status code.
"""

from typing import Optional


class SignedUrlError(Exception):
    """Base exception for signed URL issuance failures

    Attributes:
        message: Human-readable error message returned as ``error``
        details: Optional diagnostic text (usually a traceback)
    """

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ConfigurationMissingError(SignedUrlError):
    """A required setting (project, bucket or credentials) is not set"""


class ValidationFailedError(SignedUrlError):
    """The request is missing ``directory`` or ``filename``"""

    status_code = 400


class StoragePackageUnavailableError(SignedUrlError):
    """The storage SDK cannot be imported"""


class CredentialParseError(SignedUrlError):
    """Inline credentials are not valid JSON"""


class ClientInitError(SignedUrlError):
    """The storage client could not be constructed"""


class ObjectNotFoundError(SignedUrlError):
    """The requested object does not exist in the bucket"""

    status_code = 404

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"File not found: {key}")


class StoreOperationError(SignedUrlError):
    """The existence check or signing call failed"""


class UnexpectedError(SignedUrlError):
    """Any failure outside the staged checks"""
