from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional


class Resolution(str, Enum):
    OPTIMIZED = "optimized"
    ORIGINAL = "original"


class ImageReference(BaseModel):
    directory: str = Field(..., min_length=1)
    filename: str = Field(..., min_length=1)
    resolution: Resolution = Resolution.OPTIMIZED

    @classmethod
    def from_flag(cls, directory: str, filename: str, original: bool) -> "ImageReference":
        resolution = Resolution.ORIGINAL if original else Resolution.OPTIMIZED
        return cls(directory=directory, filename=filename, resolution=resolution)

    @property
    def object_key(self) -> str:
        """Bucket key laid out as ``{directory}/{optimized|original}/{filename}``"""
        return f"{self.directory}/{self.resolution.value}/{self.filename}"


class SignedUrlResponse(BaseModel):
    signedUrl: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None  # Traceback for store/unexpected failures
