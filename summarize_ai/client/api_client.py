"""HTTP client for the summarization API."""

from typing import Any, Callable, List, Optional, TypeVar

import httpx
from pydantic import ValidationError

from summarize_ai.core.config import settings
from summarize_ai.schemas import (
    SummarizeResponse,
    SummaryDetail,
    SummaryLength,
    SummaryListItem,
)

T = TypeVar("T")


class APIError(Exception):
    """Non-2xx response (or transport failure) from the API."""

    def __init__(self, status_code: Optional[int], message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class SummarizeClient:
    """Thin async wrapper around the /api endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.SUMMARIZE_API_URL).rstrip("/")
        self._transport = transport
        # Summaries can take as long as the upstream completion call
        self._timeout = timeout or settings.LLM_TIMEOUT_SECONDS + 30.0

    async def _request(self, method: str, path: str, fallback: str, **kwargs) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise APIError(None, str(e) or fallback) from e

        if response.is_error:
            try:
                message = response.json().get("error") or fallback
            except (ValueError, AttributeError):
                message = fallback
            raise APIError(response.status_code, message)
        return response

    @staticmethod
    def _decode(response: httpx.Response, fallback: str, parse: Callable[[Any], T]) -> T:
        """Parse a 2xx body, turning gateway pages and bad shapes into APIError."""
        try:
            return parse(response.json())
        except (ValueError, ValidationError, AttributeError, TypeError) as e:
            raise APIError(response.status_code, fallback) from e

    async def summarize(
        self, filename: str, content: bytes, length: SummaryLength = SummaryLength.MEDIUM
    ) -> SummarizeResponse:
        fallback = "Summarization failed"
        response = await self._request(
            "POST",
            "/summarize",
            fallback,
            files={"pdf": (filename, content, "application/pdf")},
            data={"length": SummaryLength.normalize(length).value},
        )
        return self._decode(response, fallback, SummarizeResponse.model_validate)

    async def list_summaries(self) -> List[SummaryListItem]:
        fallback = "Failed to fetch summaries"
        response = await self._request("GET", "/summaries", fallback)
        return self._decode(
            response, fallback, lambda body: [SummaryListItem.model_validate(item) for item in body]
        )

    async def get_summary(self, summary_id: str) -> SummaryDetail:
        fallback = "Failed to fetch summary"
        response = await self._request("GET", f"/summaries/{summary_id}", fallback)
        return self._decode(response, fallback, SummaryDetail.model_validate)

    async def delete_summary(self, summary_id: str) -> str:
        fallback = "Failed to delete"
        response = await self._request("DELETE", f"/summaries/{summary_id}", fallback)
        return self._decode(response, fallback, lambda body: body.get("message", ""))

    async def health(self) -> dict:
        fallback = "Health check failed"
        response = await self._request("GET", "/health", fallback)
        return self._decode(response, fallback, dict)
