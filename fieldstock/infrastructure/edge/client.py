"""
HTTP client for hosted edge functions.

Each function is a POST to ``{base_url}/functions/v1/{name}`` returning
``{"success": bool, "data": ..., "error": str}``.
"""

from typing import Any

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from fieldstock.config import get_logger, get_settings
from fieldstock.config.settings import EdgeFunctionSettings
from fieldstock.core.exceptions import EdgeFunctionError, EdgeFunctionUnavailableError
from fieldstock.core.interfaces.edge_functions import IEdgeFunctionClient
from fieldstock.infrastructure.edge.circuit_breaker import CircuitBreakerState

logger = get_logger(__name__)


class EdgeFunctionClient(IEdgeFunctionClient):
    """
    Edge function client with retry and circuit breaker.

    Only connection failures are retried: the request never reached the
    server, so replaying it cannot apply an inventory change twice. Timeouts
    and error responses fail immediately and the caller falls back to local
    processing.
    """

    def __init__(
        self,
        settings: EdgeFunctionSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or get_settings().edge
        self._transport = transport
        self.circuit_breaker = CircuitBreakerState(
            failure_threshold=self.settings.failure_threshold,
            cooldown_seconds=self.settings.cooldown_seconds,
        )

    @property
    def enabled(self) -> bool:
        return self.settings.enabled and bool(self.settings.base_url)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.access_token}",
            "Content-Type": "application/json",
            "x-app-version": self.settings.app_version,
        }

    def _get_retry_decorator(self) -> Any:
        """Get tenacity retry decorator with current settings."""
        delay = self.settings.retry_delay
        return retry(
            stop=stop_after_attempt(max(1, self.settings.max_retries + 1)),
            wait=wait_exponential(
                multiplier=delay,
                min=delay,
                max=delay * (self.settings.retry_multiplier**3),
            ),
            retry=retry_if_exception_type(httpx.ConnectError),
            before_sleep=self._log_retry,
            reraise=True,
        )

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        logger.warning(
            "edge_function_retry",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def _post(self, function: str, payload: dict[str, Any]) -> httpx.Response:
        url = f"{self.settings.functions_url}/{function}"
        async with httpx.AsyncClient(
            timeout=self.settings.timeout,
            transport=self._transport,
        ) as client:
            return await client.post(url, json=payload, headers=self._headers())

    async def invoke(self, function: str, payload: dict[str, Any]) -> Any:
        """Call an edge function and return its ``data`` payload."""
        if not self.enabled:
            raise EdgeFunctionUnavailableError(function)

        self.circuit_breaker.check(function)
        logger.info("edge_function_call", function=function)

        try:
            response = await self._get_retry_decorator()(self._post)(function, payload)
        except httpx.TimeoutException as e:
            self.circuit_breaker.record_failure()
            raise EdgeFunctionError(function, f"timed out: {e}")
        except httpx.HTTPError as e:
            self.circuit_breaker.record_failure()
            raise EdgeFunctionError(function, f"{type(e).__name__}: {e}")

        try:
            body = response.json()
        except ValueError:
            self.circuit_breaker.record_failure()
            raise EdgeFunctionError(
                function,
                f"non-JSON response: {response.text[:200]}",
                status_code=response.status_code,
            )

        if response.status_code >= 400 or not isinstance(body, dict) or not body.get("success"):
            error = body.get("error") if isinstance(body, dict) else None
            # Server-side rejections do not count against availability
            if response.status_code >= 500:
                self.circuit_breaker.record_failure()
            raise EdgeFunctionError(
                function,
                error or f"HTTP {response.status_code}",
                status_code=response.status_code,
            )

        self.circuit_breaker.record_success()
        logger.info("edge_function_succeeded", function=function, status=response.status_code)
        return body.get("data")
