from __future__ import annotations

import base64
from typing import Optional

import httpx

from .constants import ACTION_NAME, PING_PATH, UPLOAD_PATH, RetryPolicy
from .errors import ServerUnreachable, UploadFailed
from .logging import ZeklinLogger
from .models import UploadPayload
from .retry import with_retry
from .utils import compact_json

RETRYABLE_ERRORS = (httpx.HTTPError,)


def basic_auth_header(api_key_id: str, api_key: str) -> str:
    credentials = base64.b64encode(f"{api_key_id}:{api_key}".encode("utf-8")).decode("ascii")
    return f"Basic {credentials}"


class ZeklinClient:
    """Talks to the Zeklin results service."""

    def __init__(
        self,
        server_url: str,
        api_key_id: str,
        api_key: str,
        logger: Optional[ZeklinLogger] = None,
        *,
        timeout: float = RetryPolicy.REQUEST_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.server_url = server_url.rstrip("/")
        self._api_key_id = api_key_id
        self._api_key = api_key
        self.logger = logger
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
            headers={"User-Agent": ACTION_NAME},
        )

    async def liveness(self) -> None:
        """GET /ping until it answers 2xx; ServerUnreachable once retries run out."""
        endpoint = f"{self.server_url}{PING_PATH}"

        async def ping() -> None:
            async with self._client() as client:
                response = await client.get(endpoint)
            response.raise_for_status()

        try:
            await with_retry(
                ping,
                retry_on=RETRYABLE_ERRORS,
                description="Zeklin ping",
                logger=self.logger,
            )
        except httpx.HTTPError as exc:
            raise ServerUnreachable(f"Failed to ping Zeklin servers at {endpoint}: {exc}") from exc

        if self.logger:
            self.logger.debug("Zeklin server reachable", endpoint=endpoint)

    async def upload(self, payload: UploadPayload) -> None:
        """POST the payload as JSON with basic auth; UploadFailed once retries run out."""
        endpoint = f"{self.server_url}{UPLOAD_PATH}"
        body = compact_json(payload.to_dict()).encode("utf-8")
        headers = {
            "Content-Type": "application/json",
            "Authorization": basic_auth_header(self._api_key_id, self._api_key),
        }

        async def post() -> None:
            async with self._client() as client:
                response = await client.post(endpoint, content=body, headers=headers)
            response.raise_for_status()

        try:
            await with_retry(
                post,
                retry_on=RETRYABLE_ERRORS,
                description="Results upload",
                logger=self.logger,
            )
        except httpx.HTTPError as exc:
            raise UploadFailed(f"Failed to upload results to {endpoint}: {exc}") from exc

        if self.logger:
            self.logger.info("Results uploaded", endpoint=endpoint, bytes=len(body))
