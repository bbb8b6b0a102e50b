"""
HTTP Client for CLI.

Async httpx wrapper for the BountyHub API and for the presigned storage
URLs the API hands out.

Two underlying httpx clients are used:
- API client: base URL + /api/v0, bearer token, short timeouts
- Transfer client: no credentials, long read/write timeouts for file bodies

Error statuses are converted to ApplicationError subclasses so commands
never have to inspect status codes themselves.
"""

import asyncio
from collections.abc import AsyncIterator, Callable
from pathlib import Path
from typing import IO, Any, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from bh import __version__
from bh.core.config import get_api_base_url, get_app_config, get_settings
from bh.core.exceptions import (
    STATUS_EXCEPTION_MAP,
    ApplicationError,
    ConfigurationError,
    ExternalServiceError,
    FileTransferError,
)
from bh.core.logging import get_logger, log_with_source
from bh.core.resilience import build_retrying

logger = get_logger(__name__)

TOKEN_PREFIX = "bhv"

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_token(token: str | None) -> str:
    """
    Check that a personal access token is present and well-formed.

    Raises:
        ConfigurationError: If the token is missing or lacks the bhv prefix
    """
    if not token:
        raise ConfigurationError(
            "Failed to get BOUNTYHUB_TOKEN: environment variable not set"
        )
    if not token.startswith(TOKEN_PREFIX):
        raise ConfigurationError(
            f"Invalid token format: token does not start with {TOKEN_PREFIX}"
        )
    return token


def error_for_response(response: httpx.Response) -> ApplicationError:
    """Translate an error response into the matching ApplicationError."""
    exc_cls = STATUS_EXCEPTION_MAP.get(response.status_code)
    if exc_cls is not None:
        return exc_cls()
    return ExternalServiceError(
        f"HTTP {response.status_code} {response.reason_phrase}".strip(),
        status_code=response.status_code,
    )


def _timeout_from_config(section: Any) -> httpx.Timeout:
    return httpx.Timeout(
        connect=section.connect,
        read=section.read,
        write=section.write,
        pool=section.pool,
    )


def open_upload_source(source: Path) -> tuple[IO[bytes], int]:
    """
    Open a local file for upload and return it with its size.

    Raises:
        FileTransferError: If the file cannot be stat-ed or opened
    """
    try:
        size = source.stat().st_size
        fh = open(source, "rb")
    except OSError as e:
        raise FileTransferError(f"Failed to open file '{source}': {e.strerror or e}") from e
    return fh, size


async def _iter_file(fh: IO[bytes], chunk_size: int) -> AsyncIterator[bytes]:
    while True:
        chunk = await asyncio.to_thread(fh.read, chunk_size)
        if not chunk:
            break
        yield chunk


class APIClient:
    """
    HTTP client for BountyHub API communication.

    Features:
    - Bearer authentication and bh/<version> User-Agent on API calls
    - Separate credential-free client for presigned storage URLs
    - Retry of connection-establishment failures
    - Structured logging of requests/responses (never URLs with signatures)
    - Error statuses raised as ApplicationError subclasses

    Usage:
        client = APIClient(base_url="https://bountyhub.org", token="bhv...")
        response = await client.delete("/workflows/jobs/<id>")
        await client.close()
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        api_timeout: httpx.Timeout | None = None,
        transfer_timeout: httpx.Timeout | None = None,
        retry_attempts: int | None = None,
        retry_wait_min: float | None = None,
        retry_wait_max: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the API client.

        Args:
            base_url: Service base URL, without the /api/v0 prefix.
            token: Personal access token.
            api_timeout: Timeout for API calls. Defaults to application.yaml.
            transfer_timeout: Timeout for storage transfers. Defaults to application.yaml.
            retry_attempts: Attempts per request. Defaults to application.yaml.
            retry_wait_min: Backoff lower bound. Defaults to application.yaml.
            retry_wait_max: Backoff upper bound. Defaults to application.yaml.
            transport: Custom httpx transport, shared by both clients (tests).
        """
        app_config = get_app_config().application

        self.base_url = base_url.rstrip("/")
        self.api_url = f"{self.base_url}{app_config.api.prefix}"
        self.user_agent = f"{app_config.api.user_agent}/{__version__}"
        self._authorization = f"Bearer {token}"

        self.api_timeout = api_timeout or _timeout_from_config(app_config.timeouts.api)
        self.transfer_timeout = transfer_timeout or _timeout_from_config(app_config.timeouts.transfer)

        self.retry_attempts = retry_attempts if retry_attempts is not None else app_config.retry.attempts
        self.retry_wait_min = retry_wait_min if retry_wait_min is not None else app_config.retry.wait_min
        self.retry_wait_max = retry_wait_max if retry_wait_max is not None else app_config.retry.wait_max

        self.chunk_size = app_config.transfer.chunk_size
        self.partial_suffix = app_config.transfer.partial_suffix

        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._transfer_client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the authenticated API client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.api_url,
                timeout=self.api_timeout,
                headers={
                    "Authorization": self._authorization,
                    "User-Agent": self.user_agent,
                    "Accept": "application/json",
                },
                transport=self._transport,
            )
        return self._client

    async def _get_transfer_client(self) -> httpx.AsyncClient:
        """Get or create the storage client. It never carries the token."""
        if self._transfer_client is None or self._transfer_client.is_closed:
            self._transfer_client = httpx.AsyncClient(
                timeout=self.transfer_timeout,
                headers={"User-Agent": self.user_agent},
                follow_redirects=True,
                transport=self._transport,
            )
        return self._transfer_client

    async def close(self) -> None:
        """Close both HTTP clients."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        if self._transfer_client and not self._transfer_client.is_closed:
            await self._transfer_client.aclose()
        self._client = None
        self._transfer_client = None

    async def _send(
        self,
        client: httpx.AsyncClient,
        build_request: Callable[[], httpx.Request],
        *,
        source: str,
        target: str,
        stream: bool = False,
    ) -> httpx.Response:
        """Send a request, retrying connection failures, and map transport errors."""
        try:
            async for attempt in build_retrying(
                self.retry_attempts, self.retry_wait_min, self.retry_wait_max,
            ):
                with attempt:
                    response = await client.send(build_request(), stream=stream)
        except httpx.TimeoutException as e:
            log_with_source(logger, source, "error", "Request timed out", target=target, error=type(e).__name__)
            raise ExternalServiceError(f"Request to {target} timed out") from e
        except httpx.HTTPError as e:
            log_with_source(logger, source, "error", "Request failed", target=target, error=str(e))
            raise ExternalServiceError(f"Request to {target} failed: {e}") from e
        return response

    async def request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make an HTTP request to the API.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API path below /api/v0 (e.g., /runner-registrations)
            **kwargs: Additional arguments for httpx.AsyncClient.build_request

        Returns:
            httpx.Response with a 2xx/3xx status

        Raises:
            ApplicationError: On error status or transport failure
        """
        client = await self._get_client()

        log_with_source(logger, "api", "debug", "API request", method=method, path=path)

        response = await self._send(
            client,
            lambda: client.build_request(method, path, **kwargs),
            source="api",
            target=path,
        )

        log_with_source(
            logger,
            "api",
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )

        if response.is_error:
            log_with_source(
                logger,
                "api",
                "warning",
                "API request rejected",
                method=method,
                path=path,
                status_code=response.status_code,
            )
            raise error_for_response(response)

        return response

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a PUT request."""
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request("DELETE", path, **kwargs)

    async def request_model(
        self,
        model: type[ModelT],
        method: str,
        path: str,
        **kwargs: Any,
    ) -> ModelT:
        """Make a request and parse the JSON body into `model`."""
        response = await self.request(method, path, **kwargs)
        try:
            return model.model_validate_json(response.content)
        except PydanticValidationError as e:
            log_with_source(logger, "api", "error", "Unexpected response body", path=path, model=model.__name__)
            raise ExternalServiceError(f"Unexpected response from {path}") from e

    async def download_to(self, url: str, destination: Path) -> int:
        """
        Stream a presigned URL into a local file.

        Bytes land in `<destination><partial_suffix>` first and are renamed
        onto `destination` once the body is complete. The partial file is
        removed on any failure. Missing parent directories are created only
        after storage answered 2xx.

        Returns:
            Number of bytes written
        """
        client = await self._get_transfer_client()
        host = httpx.URL(url).host

        log_with_source(logger, "storage", "debug", "Storage download", host=host)

        response = await self._send(
            client,
            lambda: client.build_request("GET", url),
            source="storage",
            target=host,
            stream=True,
        )

        partial = destination.with_name(destination.name + self.partial_suffix)
        written = 0
        completed = False
        try:
            if response.is_error:
                await response.aread()
                log_with_source(
                    logger, "storage", "warning", "Storage download rejected",
                    host=host, status_code=response.status_code,
                )
                raise error_for_response(response)

            destination.parent.mkdir(parents=True, exist_ok=True)
            with open(partial, "wb") as fh:
                async for chunk in response.aiter_bytes(self.chunk_size):
                    fh.write(chunk)
                    written += len(chunk)
            partial.replace(destination)
            completed = True
        except OSError as e:
            raise FileTransferError(f"Failed to write '{destination}': {e.strerror or e}") from e
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Download from {host} interrupted: {e}") from e
        finally:
            await response.aclose()
            if not completed:
                partial.unlink(missing_ok=True)

        log_with_source(logger, "storage", "info", "Download complete", host=host, bytes=written)
        return written

    async def upload_from(self, url: str, fh: IO[bytes], size: int) -> int:
        """
        Upload an open file to a presigned URL with PUT.

        The body is streamed with an explicit Content-Length; storage
        backends reject chunked uploads to presigned URLs. The caller owns
        `fh` and closes it.

        Returns:
            Number of bytes sent
        """
        client = await self._get_transfer_client()
        host = httpx.URL(url).host

        def build_request() -> httpx.Request:
            fh.seek(0)
            return client.build_request(
                "PUT",
                url,
                content=_iter_file(fh, self.chunk_size),
                headers={"Content-Length": str(size)},
            )

        log_with_source(logger, "storage", "debug", "Storage upload", host=host, bytes=size)

        response = await self._send(client, build_request, source="storage", target=host)

        if response.is_error:
            log_with_source(
                logger, "storage", "warning", "Storage upload rejected",
                host=host, status_code=response.status_code,
            )
            raise error_for_response(response)

        log_with_source(logger, "storage", "info", "Upload complete", host=host, bytes=size)
        return size


# Module-level client instance
_client: APIClient | None = None


def get_api_client() -> APIClient:
    """
    Get or create the API client singleton.

    Raises:
        ConfigurationError: If BOUNTYHUB_TOKEN is missing or malformed
    """
    global _client
    if _client is None:
        token = validate_token(get_settings().token)
        _client = APIClient(base_url=get_api_base_url(), token=token)
    return _client

