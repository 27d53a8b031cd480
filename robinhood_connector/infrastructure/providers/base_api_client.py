"""Shared HTTP transport for upstream provider clients.

BaseProviderAPIClient performs one request per call with a fresh
``httpx.AsyncClient`` and turns everything that can go wrong into a
``Failure(ProviderError)``:

    httpx timeout            -> ProviderUnavailableError(PROVIDER_TIMEOUT)
    httpx transport error    -> ProviderUnavailableError(PROVIDER_CONNECTION_FAILED)
    401 / 403                -> ProviderAuthenticationError
    429                      -> ProviderRateLimitError (numeric Retry-After only)
    404                      -> ProviderInvalidResponseError(PROVIDER_RESOURCE_NOT_FOUND)
    5xx                      -> ProviderUnavailableError(PROVIDER_UNAVAILABLE)
    other non-2xx            -> ProviderInvalidResponseError(PROVIDER_INVALID_RESPONSE)
    undecodable / scalar JSON-> ProviderInvalidResponseError(PROVIDER_INVALID_RESPONSE)

Successful bodies are classified into a ResponseBody variant (envelope,
list or object). Subclasses own headers and authentication.
"""

from typing import Any

import httpx
import structlog

from robinhood_connector.core.constants import (
    PROVIDER_TIMEOUT_DEFAULT,
    RESPONSE_BODY_MAX_LENGTH,
)
from robinhood_connector.core.result import Failure, Result, Success
from robinhood_connector.infrastructure.enums import ProviderErrorCode
from robinhood_connector.infrastructure.errors import (
    ProviderAuthenticationError,
    ProviderError,
    ProviderInvalidResponseError,
    ProviderRateLimitError,
    ProviderUnavailableError,
)
from robinhood_connector.infrastructure.providers.response_shapes import (
    ResponseBody,
    classify_body,
)


class BaseProviderAPIClient:
    """Base class owning request execution and response interpretation.

    Attributes:
        _base_url: API base URL (without trailing slash).
        _provider_name: Provider identifier used in errors and log events.
        _timeout: Per-request timeout in seconds.
        _logger: Logger bound to ``{provider_name}_api``.

    Example:
        >>> class QuotesClient(BaseProviderAPIClient):
        ...     async def quote(self, symbol: str):
        ...         return await self._execute_and_classify(
        ...             method="GET",
        ...             path=f"/quotes/{symbol}/",
        ...             headers={"Accept": "application/json"},
        ...             operation="quote",
        ...         )
    """

    def __init__(
        self,
        *,
        base_url: str,
        provider_name: str,
        timeout: float = PROVIDER_TIMEOUT_DEFAULT,
    ) -> None:
        """Initialize the transport.

        Args:
            base_url: API base URL; a trailing slash is dropped.
            provider_name: Provider identifier (e.g. "robinhood").
            timeout: Per-request timeout in seconds.
        """
        self._base_url = base_url.rstrip("/")
        self._provider_name = provider_name
        self._timeout = timeout
        self._logger = structlog.get_logger(f"{provider_name}_api")

    @property
    def _display_name(self) -> str:
        return self._provider_name.title()

    def _build_url(self, path: str) -> str:
        """Resolve a path against the base URL.

        Absolute URLs (pagination ``next`` links, instrument and watchlist
        URLs embedded in records) are used unchanged.
        """
        if path.startswith(("http://", "https://")):
            return path
        return f"{self._base_url}{path}"

    def _event(self, suffix: str) -> str:
        return f"{self._provider_name}_api_{suffix}"

    async def _execute_request(
        self,
        *,
        method: str,
        path: str,
        headers: dict[str, str],
        params: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
        operation: str,
    ) -> Result[httpx.Response, ProviderError]:
        """Send one request.

        The response is returned whatever its status; only transport-level
        failures become a Failure here.

        Args:
            method: HTTP method.
            path: Path relative to the base URL, or an absolute URL.
            headers: Request headers.
            params: Optional query parameters.
            json_data: Optional JSON body.
            operation: Operation name for logging.

        Returns:
            Success(httpx.Response) or Failure(ProviderUnavailableError).
        """
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.request(
                    method,
                    self._build_url(path),
                    headers=headers,
                    params=params,
                    json=json_data,
                )
        except httpx.TimeoutException as e:
            self._logger.warning(self._event("timeout"), operation=operation, error=str(e))
            return Failure(
                error=ProviderUnavailableError(
                    code=ProviderErrorCode.PROVIDER_TIMEOUT,
                    message=f"{self._display_name} API request timed out",
                    provider_name=self._provider_name,
                    is_transient=True,
                )
            )
        except httpx.RequestError as e:
            self._logger.warning(
                self._event("connection_error"), operation=operation, error=str(e)
            )
            return Failure(
                error=ProviderUnavailableError(
                    code=ProviderErrorCode.PROVIDER_CONNECTION_FAILED,
                    message=f"Could not reach {self._display_name} API: {e}",
                    provider_name=self._provider_name,
                    is_transient=True,
                )
            )

        return Success(value=response)

    def _check_error_response(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Failure[ProviderError] | None:
        """Interpret a non-2xx status.

        Args:
            response: Upstream response.
            operation: Operation name for logging.

        Returns:
            None for 2xx, otherwise Failure with the matching ProviderError.
        """
        status = response.status_code
        if 200 <= status < 300:
            return None

        error: ProviderError
        match status:
            case 401 | 403:
                expired = status == 401
                event = "auth_failed" if expired else "forbidden"
                error = ProviderAuthenticationError(
                    code=ProviderErrorCode.PROVIDER_AUTHENTICATION_FAILED,
                    message=(
                        f"{self._display_name} access token is invalid or expired"
                        if expired
                        else f"{self._display_name} denied access to the resource"
                    ),
                    provider_name=self._provider_name,
                    status_code=status,
                    is_token_expired=expired,
                )
            case 429:
                event = "rate_limited"
                retry_after = response.headers.get("Retry-After")
                error = ProviderRateLimitError(
                    code=ProviderErrorCode.PROVIDER_RATE_LIMITED,
                    message=f"{self._display_name} API rate limit exceeded",
                    provider_name=self._provider_name,
                    retry_after=(
                        int(retry_after)
                        if retry_after and retry_after.isdigit()
                        else None
                    ),
                )
            case 404:
                event = "not_found"
                error = ProviderInvalidResponseError(
                    code=ProviderErrorCode.PROVIDER_RESOURCE_NOT_FOUND,
                    message=f"{self._display_name} resource not found",
                    provider_name=self._provider_name,
                    status_code=status,
                    response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
                )
            case _ if status >= 500:
                event = "server_error"
                error = ProviderUnavailableError(
                    code=ProviderErrorCode.PROVIDER_UNAVAILABLE,
                    message=f"{self._display_name} API server error: {status}",
                    provider_name=self._provider_name,
                    details={"status_code": status},
                    is_transient=True,
                )
            case _:
                event = "unexpected_status"
                error = ProviderInvalidResponseError(
                    code=ProviderErrorCode.PROVIDER_INVALID_RESPONSE,
                    message=f"Unexpected {status} response from {self._display_name}",
                    provider_name=self._provider_name,
                    status_code=status,
                    response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
                )

        self._logger.warning(
            self._event(event),
            operation=operation,
            status_code=status,
            error_code=error.code.name,
        )
        return Failure(error=error)

    def _decode_json(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Result[Any, ProviderError]:
        """Check the status, then decode the body as JSON."""
        error_result = self._check_error_response(response, operation)
        if error_result is not None:
            return error_result

        try:
            return Success(value=response.json())
        except ValueError as e:
            self._logger.error(self._event("invalid_json"), operation=operation, error=str(e))
            return Failure(
                error=ProviderInvalidResponseError(
                    code=ProviderErrorCode.PROVIDER_INVALID_RESPONSE,
                    message=f"Invalid JSON response from {self._display_name}",
                    provider_name=self._provider_name,
                    status_code=response.status_code,
                    response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
                )
            )

    def _parse_body(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Result[ResponseBody, ProviderError]:
        """Decode the response and classify it.

        Returns:
            Success(ResponseBody): Envelope, list or object body.
            Failure(ProviderError): HTTP error, invalid JSON, or a JSON
                scalar where an object or array was expected.
        """
        decoded = self._decode_json(response, operation)
        if isinstance(decoded, Failure):
            return decoded

        body = classify_body(decoded.value)
        if body is None:
            self._logger.warning(
                self._event("unexpected_format"),
                operation=operation,
                data_type=type(decoded.value).__name__,
            )
            return Failure(
                error=ProviderInvalidResponseError(
                    code=ProviderErrorCode.PROVIDER_INVALID_RESPONSE,
                    message=f"Expected object or array response from {self._display_name}",
                    provider_name=self._provider_name,
                    status_code=response.status_code,
                    response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
                )
            )

        self._logger.debug(
            self._event("succeeded"),
            operation=operation,
            shape=type(body).__name__,
        )
        return Success(value=body)

    async def _execute_and_classify(
        self,
        *,
        method: str,
        path: str,
        headers: dict[str, str],
        params: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
        operation: str,
    ) -> Result[ResponseBody, ProviderError]:
        """Send a request and classify its body (see _parse_body)."""
        result = await self._execute_request(
            method=method,
            path=path,
            headers=headers,
            params=params,
            json_data=json_data,
            operation=operation,
        )
        if isinstance(result, Failure):
            return result
        return self._parse_body(result.value, operation)
