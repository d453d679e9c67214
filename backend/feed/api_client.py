from typing import Any, Optional

import httpx

from feed.shots import Shot

GENERATE_CONTENT_PATH = "/api/generate-content"


class ContentApiClient:
    """Async HTTP client for the content-generation endpoint."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        )

    async def __aenter__(self) -> "ContentApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def fetch_content(self) -> dict[str, Any]:
        """
        Request one generated card.

        Raises:
            httpx.HTTPError: transport failure or non-2xx status
            ValueError: body is not a JSON object
        """
        response = await self.client.post(GENERATE_CONTENT_PATH)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError("Expected a JSON object from the content endpoint")
        return data

    async def fetch_shot(self) -> Shot:
        return Shot.from_payload(await self.fetch_content())
