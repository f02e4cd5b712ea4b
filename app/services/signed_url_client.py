import httpx
from typing import Optional
from app.utils.logger import logger


class SignedUrlFetchError(Exception):
    """A signed URL request failed; `details` holds the server's diagnostic text if any"""

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class SignedUrlClient:
    """Async client for the `/api/signed-url` endpoint"""

    def __init__(
        self,
        base_url: str,
        directory: str,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.endpoint = f"{base_url.rstrip('/')}/api/signed-url"
        self.directory = directory
        self._owns_client = http_client is None
        # No request timeout: the signed URL's own expiry is the only deadline
        self._client = http_client or httpx.AsyncClient(timeout=None)

    async def fetch_signed_url(self, filename: str, original: bool = False) -> str:
        """Request one signed URL. Raises SignedUrlFetchError on any failure, no retries."""
        params = {
            "directory": self.directory,
            "filename": filename,
            "original": "true" if original else "false",
        }
        logger.debug(f"Fetching {'original' if original else 'optimized'} URL for {filename}")

        try:
            response = await self._client.get(self.endpoint, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Error fetching signed URL: {str(e)}")
            raise SignedUrlFetchError(str(e) or "Unknown error occurred")

        logger.debug(f"Response status: {response.status_code}")

        if not response.is_success:
            logger.error(f"HTTP error! status: {response.status_code} {response.text}")
            try:
                body = response.json()
            except ValueError:
                raise SignedUrlFetchError(
                    f"Server error: {response.status_code} - {response.text}"
                )
            if not isinstance(body, dict):
                body = {}
            raise SignedUrlFetchError(
                body.get("error") or f"Server error: {response.status_code}",
                details=body.get("details"),
            )

        if "application/json" not in response.headers.get("content-type", ""):
            logger.error(f"Non-JSON response: {response.text}")
            raise SignedUrlFetchError("Invalid server response format")

        try:
            data = response.json()
        except ValueError as e:
            raise SignedUrlFetchError(str(e) or "Unknown error occurred")

        if not isinstance(data, dict):
            raise SignedUrlFetchError("Invalid server response format")

        if data.get("error"):
            logger.error(f"Error fetching signed URL: {data['error']}")
            raise SignedUrlFetchError(data["error"], details=data.get("details"))

        signed_url = data.get("signedUrl")
        if not signed_url:
            raise SignedUrlFetchError("Invalid server response format")

        logger.debug(f"Successfully got signed URL for {filename}")
        return signed_url

    async def close(self):
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()
