from enum import Enum
from pydantic import BaseModel
from typing import List, Optional, Sequence

SETUP_CHECKLIST = [
    "Set GOOGLE_CLOUD_PROJECT_ID in your .env file",
    "Set GOOGLE_CLOUD_BUCKET_NAME in your .env file",
    "Set either GOOGLE_CLOUD_KEY_FILE or GOOGLE_CLOUD_CREDENTIALS",
    "Ensure your service account has Storage Object Viewer permissions",
    "Verify your bucket structure: bucket/<directory>/optimized/ and bucket/<directory>/original/",
    "Check that your image files exist in both subdirectories",
    "For the S3 backend, grant s3:GetObject and s3:ListBucket; without ListBucket a missing object answers 403, not 404",
]


class GallerySelection:
    """Currently selected image and its index in a fixed, non-empty ordering."""

    def __init__(self, filenames: Sequence[str]):
        if not filenames:
            raise ValueError("Gallery needs at least one image")
        self.filenames = list(filenames)
        self.index = 0

    @property
    def filename(self) -> str:
        return self.filenames[self.index]

    def select(self, index: int) -> bool:
        """Make `index` current. Returns True when the selected filename changed."""
        if not 0 <= index < len(self.filenames):
            raise IndexError(f"Image index {index} out of range")
        previous = self.filename
        self.index = index
        return self.filename != previous

    def next(self) -> bool:
        return self.select((self.index + 1) % len(self.filenames))

    def previous(self) -> bool:
        return self.select((self.index - 1 + len(self.filenames)) % len(self.filenames))


class MainImageState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class ThumbnailSlot(BaseModel):
    filename: str
    url: Optional[str] = None  # None while the slot is loading
    selected: bool = False

    @property
    def loading(self) -> bool:
        return self.url is None


class ErrorBanner(BaseModel):
    message: str
    details: Optional[str] = None
    checklist: List[str] = SETUP_CHECKLIST


class GalleryView(BaseModel):
    loading: bool
    selected_index: int
    selected_filename: str
    main_image: MainImageState
    original_url: Optional[str] = None
    thumbnails: List[ThumbnailSlot]
    error: Optional[ErrorBanner] = None
