import asyncio
from typing import Dict, Optional, Sequence, Set

import httpx

from app.config import Settings
from app.models.gallery import (
    ErrorBanner,
    GallerySelection,
    GalleryView,
    MainImageState,
    ThumbnailSlot,
)
from app.services.signed_url_client import SignedUrlClient, SignedUrlFetchError
from app.utils.logger import logger


class GalleryService:
    """
    Client-side gallery state: thumbnail URLs for every image, a full-resolution
    URL for the selected one, and the most recent fetch error.

    Thumbnails load strictly one at a time and the loop stops at the first
    failure. Each selection change starts an independent full-resolution load;
    earlier loads are never cancelled, so a late response for a previous
    selection can overwrite the main image.
    """

    def __init__(self, client: SignedUrlClient, filenames: Sequence[str]):
        self.client = client
        self.selection = GallerySelection(filenames)
        self.thumbnail_urls: Dict[str, str] = {}
        self.original_url: Optional[str] = None
        self.loading = True
        # The initial selection is always loaded, so the main image starts out loading
        self.original_loading = True
        self._original_generation = 0
        self.error: Optional[SignedUrlFetchError] = None
        self._pending: Set[asyncio.Task] = set()

    @classmethod
    def from_settings(cls, settings: Settings, http_client: Optional[httpx.AsyncClient] = None) -> "GalleryService":
        client = SignedUrlClient(
            base_url=settings.gallery_api_base_url,
            directory=settings.gallery_directory,
            http_client=http_client,
        )
        return cls(client, settings.gallery_images)

    async def _fetch(self, filename: str, original: bool) -> Optional[str]:
        # Every request clears the banner first, so it shows the latest failure
        self.error = None
        try:
            return await self.client.fetch_signed_url(filename, original=original)
        except SignedUrlFetchError as e:
            self.error = e
            return None

    async def load_thumbnails(self) -> int:
        """Fetch optimized URLs in order. Returns the number of requests attempted."""
        self.loading = True
        logger.info("Starting to load optimized images...")
        attempted = 0

        for filename in self.selection.filenames:
            attempted += 1
            url = await self._fetch(filename, original=False)
            if url is None:
                # Stop on first error to avoid spamming
                logger.warning(f"Thumbnail loading stopped at {filename}")
                break
            self.thumbnail_urls[filename] = url

        self.loading = False
        logger.info(f"Finished loading optimized images. Got {len(self.thumbnail_urls)} URLs")
        return attempted

    def _begin_original_load(self) -> int:
        self._original_generation += 1
        self.original_loading = True
        return self._original_generation

    async def load_original(self, filename: Optional[str] = None, generation: Optional[int] = None):
        filename = filename or self.selection.filename
        if generation is None:
            generation = self._begin_original_load()
        self.original_url = await self._fetch(filename, original=True)
        # Only the most recent load ends the loading state; a stale one still overwrites the URL
        if generation == self._original_generation:
            self.original_loading = False

    async def start(self):
        """Load all thumbnails and, alongside, the initial selection's full-resolution URL"""
        await asyncio.gather(self.load_thumbnails(), self.load_original())

    def _spawn_original_load(self) -> asyncio.Task:
        generation = self._begin_original_load()
        task = asyncio.create_task(self.load_original(self.selection.filename, generation))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    # Selection methods must run inside the event loop; they return the
    # full-resolution load they started, or None if the selection did not change.
    def select(self, index: int) -> Optional[asyncio.Task]:
        if not self.selection.select(index):
            return None
        return self._spawn_original_load()

    def next(self) -> Optional[asyncio.Task]:
        if not self.selection.next():
            return None
        return self._spawn_original_load()

    def previous(self) -> Optional[asyncio.Task]:
        if not self.selection.previous():
            return None
        return self._spawn_original_load()

    async def wait_pending(self):
        """Wait for every full-resolution load started by a selection change"""
        while self._pending:
            pending = list(self._pending)
            await asyncio.gather(*pending)
            self._pending.difference_update(pending)

    def view(self) -> GalleryView:
        if self.original_loading:
            main_image = MainImageState.LOADING
        elif self.original_url:
            main_image = MainImageState.READY
        else:
            main_image = MainImageState.FAILED

        thumbnails = [
            ThumbnailSlot(
                filename=filename,
                url=self.thumbnail_urls.get(filename),
                selected=index == self.selection.index,
            )
            for index, filename in enumerate(self.selection.filenames)
        ]

        banner = None
        if self.error is not None:
            banner = ErrorBanner(message=self.error.message, details=self.error.details)

        return GalleryView(
            loading=self.loading,
            selected_index=self.selection.index,
            selected_filename=self.selection.filename,
            main_image=main_image,
            original_url=self.original_url,
            thumbnails=thumbnails,
            error=banner,
        )

    async def close(self):
        await self.client.close()
