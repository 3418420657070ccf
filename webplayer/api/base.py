"""
Base API Client - Shared HTTP plumbing for upstream JSON APIs.

This module provides the session handling, rate limiting, bounded retries
and error mapping used by every API client. Transport failures are retried;
HTTP status and decoding failures are not.
"""

import asyncio
import json
import logging
import time
from typing import Any, Dict, Optional, Type, TypeVar
from urllib.parse import quote, urlencode

import aiohttp
from pydantic import BaseModel, TypeAdapter, ValidationError

from webplayer.core.config_schemas import NetworkSettings
from webplayer.core.exceptions import APIError, APIErrorKind


logger = logging.getLogger(__name__)

M = TypeVar("M")

JSON_ACCEPT = "application/json, text/plain, */*"


class BaseAPIClient:
    """
    Base class for upstream API clients.

    Subclasses provide endpoint methods on top of ``_get_json`` and
    ``_validate``.
    """

    name = "api"

    def __init__(
        self,
        base_url: str,
        network: Optional[NetworkSettings] = None,
        rate_limit: float = 0.0,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize the client.

        Args:
            base_url: API root without trailing slash
            network: Timeout, header and retry settings
            rate_limit: Minimum seconds between requests
            session: Pre-configured HTTP session to use instead of an owned one
        """
        self.base_url = base_url.rstrip('/')
        self.network = network or NetworkSettings()
        self.rate_limit = rate_limit
        self._session = session
        self._owns_session = session is None
        self._last_request_time = 0.0

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session with proper configuration."""
        if self._session is None or (self._owns_session and self._session.closed):
            timeout = aiohttp.ClientTimeout(total=self.network.timeout)
            headers = self.network.headers()
            headers['Accept'] = JSON_ACCEPT

            self._session = aiohttp.ClientSession(timeout=timeout, headers=headers)
            self._owns_session = True

        return self._session

    @staticmethod
    def _path_segment(value: str) -> str:
        """
        Percent-encode one path segment.

        Raises:
            APIError: INVALID_URL if the value is empty
        """
        segment = quote(value.strip(), safe="")
        if not segment:
            raise APIError("Empty path segment", APIErrorKind.INVALID_URL, details=value)
        return segment

    def build_url(self, path: str, params: Optional[Dict[str, str]] = None) -> str:
        """Join an endpoint path onto the base URL and append query parameters."""
        url = f"{self.base_url}/{path.lstrip('/')}"
        if params:
            url = f"{url}?{urlencode(params)}"
        return url

    async def _rate_limit(self) -> None:
        """Enforce rate limiting between requests."""
        if self.rate_limit <= 0:
            return

        elapsed = time.monotonic() - self._last_request_time
        if elapsed < self.rate_limit:
            await asyncio.sleep(self.rate_limit - elapsed)

        self._last_request_time = time.monotonic()

    async def _get_bytes(self, url: str) -> bytes:
        """
        GET a URL with retries on transport errors.

        Args:
            url: Absolute URL

        Returns:
            Response body

        Raises:
            APIError: NETWORK_ERROR after exhausting retries, INVALID_RESPONSE
                for any status other than 200
        """
        await self._rate_limit()

        max_retries = self.network.max_retries
        last_exception: Optional[BaseException] = None

        for attempt in range(max_retries + 1):
            try:
                self.logger.debug(f"GET {url} (attempt {attempt + 1})")

                async with self.session.get(url) as response:
                    status = response.status
                    body = await response.read()

                if status != 200:
                    raise APIError(
                        f"Unexpected HTTP {status} from {self.name}",
                        APIErrorKind.INVALID_RESPONSE,
                        url=url,
                        status_code=status,
                        details=body[:500].decode('utf-8', errors='replace')
                    )

                return body

            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_exception = e
                self.logger.warning(f"Request failed (attempt {attempt + 1}): {e!r}")

                if attempt < max_retries:
                    await asyncio.sleep(self.network.retry_delay * (attempt + 1))

        raise APIError(
            f"Request to {self.name} failed after {max_retries + 1} attempts",
            APIErrorKind.NETWORK_ERROR,
            url=url,
            details=str(last_exception)
        )

    async def _get_json(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        """
        GET an endpoint and parse its JSON body.

        Raises:
            APIError: DECODING_ERROR if the body is not JSON, or any error
                raised by ``_get_bytes``
        """
        url = self.build_url(path, params)
        body = await self._get_bytes(url)

        try:
            return json.loads(body)
        except ValueError as e:
            raise APIError(
                f"Failed to decode response from {self.name}",
                APIErrorKind.DECODING_ERROR,
                url=url,
                details=str(e)
            )

    def _validate(self, model: Type[M], payload: Any, url: Optional[str] = None) -> M:
        """
        Validate a parsed payload against a model or type.

        Raises:
            APIError: DECODING_ERROR if the payload does not fit
        """
        try:
            if isinstance(model, type) and issubclass(model, BaseModel):
                return model.model_validate(payload)
            return TypeAdapter(model).validate_python(payload)
        except ValidationError as e:
            self.logger.debug(f"Validation failed for {model}: {e}")
            raise APIError(
                f"Unexpected response format from {self.name}",
                APIErrorKind.DECODING_ERROR,
                url=url,
                details=str(e)
            )

    async def close(self) -> None:
        """Clean up resources used by the client."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            self.logger.debug("HTTP session closed")
        self._session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url='{self.base_url}')"


__all__ = ["BaseAPIClient", "JSON_ACCEPT"]
