# 📄 File: plant_tracker/shared/infrastructure/external_apis/api_client.py

# 🧭 Purpose (Layman Explanation):
# A dependable messenger for talking to outside services such as the AI botanist, which
# waits a bit and tries again when the network hiccups and reports clear errors otherwise.

# 🧪 Purpose (Technical Summary):
# Generic async HTTP client with retry and exponential backoff on transport failures,
# status-code to exception mapping, per-call performance logging and request statistics.

# 🔗 Dependencies:
# - aiohttp: Async HTTP client
# - tenacity: Retry logic and backoff strategies

# 🔄 Connected Modules / Calls From:
# Used by: OpenRouterAssistant (AI chat completions)

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

import aiohttp
from aiohttp import ClientSession, ClientTimeout
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from plant_tracker.shared.core.exceptions import (
    APIAuthenticationError,
    APIQuotaExceededError,
    APITimeoutError,
    ExternalAPIError,
)
from plant_tracker.shared.utils.logging import get_logger

logger = get_logger(__name__)

RETRYABLE_EXCEPTIONS = (aiohttp.ClientConnectionError, asyncio.TimeoutError)


class APIClient:
    """
    Generic async HTTP client for external API integrations.

    Features:
    - Automatic retry with exponential backoff on connection errors and timeouts
    - HTTP status mapped onto the ExternalAPIError family
    - Request logging through PerformanceLogger
    - Bearer token authentication
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str],
        api_name: str,
        timeout: int = 30,
        max_retries: int = 3,
        retry_wait_min: float = 4,
        retry_wait_max: float = 10,
        extra_headers: Optional[Dict[str, str]] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.api_name = api_name
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_wait_min = retry_wait_min
        self.retry_wait_max = retry_wait_max
        self.extra_headers = extra_headers or {}

        self.session: Optional[ClientSession] = None

        self.stats = {
            'total_requests': 0,
            'successful_requests': 0,
            'failed_requests': 0,
            'average_response_time': 0,
            'last_request_time': None,
        }

        self.error_history: List[Dict[str, Any]] = []
        self.max_error_history = 100

    async def initialize(self):
        """Create the client session."""
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.timeout),
            connector=aiohttp.TCPConnector(limit=10, limit_per_host=5),
            headers=self._get_default_headers(),
        )
        logger.info(f"API client initialized for {self.api_name}")

    def _get_default_headers(self) -> Dict[str, str]:
        headers = {
            'User-Agent': f'PlantTracker/1.0 ({self.api_name}-client)',
            'Accept': 'application/json',
            'Content-Type': 'application/json',
            **self.extra_headers,
        }
        if self.api_key:
            headers['Authorization'] = f'Bearer {self.api_key}'
        return headers

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict] = None,
        data: Optional[Union[Dict, str, bytes]] = None,
        headers: Optional[Dict] = None,
        timeout: Optional[int] = None
    ) -> Dict[str, Any]:
        """Make HTTP request with retry logic."""
        if not self.api_key:
            raise APIAuthenticationError(self.api_name, f"No API key configured for {self.api_name}")

        if not self.session:
            await self.initialize()

        url = self._url(endpoint)
        request_kwargs: Dict[str, Any] = {'method': method, 'url': url}
        if headers:
            request_kwargs['headers'] = headers
        if params:
            request_kwargs['params'] = params
        if data is not None:
            if isinstance(data, dict):
                request_kwargs['json'] = data
            else:
                request_kwargs['data'] = data
        if timeout:
            request_kwargs['timeout'] = ClientTimeout(total=timeout)

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=1, min=self.retry_wait_min, max=self.retry_wait_max),
            retry=retry_if_exception_type(RETRYABLE_EXCEPTIONS),
            before_sleep=before_sleep_log(logger.logger, logging.WARNING),
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    return await self._send(request_kwargs)
        except Exception as e:
            self.stats['failed_requests'] += 1
            self._record_error(e, method, url)
            raise self._transform_exception(e, method, url) from e

    async def _send(self, request_kwargs: Dict[str, Any]) -> Dict[str, Any]:
        start_time = time.time()
        method, url = request_kwargs['method'], request_kwargs['url']

        async with self.session.request(**request_kwargs) as response:
            duration_ms = (time.time() - start_time) * 1000

            self.stats['total_requests'] += 1
            self.stats['last_request_time'] = datetime.now(timezone.utc).isoformat()
            if self.stats['average_response_time'] == 0:
                self.stats['average_response_time'] = duration_ms
            else:
                self.stats['average_response_time'] = (
                    self.stats['average_response_time'] * 0.7 + duration_ms * 0.3
                )

            success = 200 <= response.status < 300
            logger.performance.log_external_api_call(
                api_name=self.api_name,
                endpoint=url,
                method=method,
                status_code=response.status,
                duration_ms=duration_ms,
                success=success,
            )

            await self._handle_response_status(response)

            try:
                response_data = await response.json(content_type=None)
            except ValueError:
                response_data = {'raw_response': await response.text()}

            self.stats['successful_requests'] += 1
            return response_data

    async def _handle_response_status(self, response: aiohttp.ClientResponse):
        """Handle HTTP response status codes."""
        if 200 <= response.status < 300:
            return
        elif response.status in (401, 403):
            raise APIAuthenticationError(self.api_name)
        elif response.status in (402, 429):
            raise APIQuotaExceededError(self.api_name, response.headers.get('Retry-After'))
        elif 400 <= response.status < 500:
            response_text = await response.text()
            raise ExternalAPIError(
                f"Client error for {self.api_name} ({response.status}): {response_text}",
                api_name=self.api_name,
                status_code=response.status,
            )
        else:
            response_text = await response.text()
            raise ExternalAPIError(
                f"Server error for {self.api_name} ({response.status}): {response_text}",
                api_name=self.api_name,
                status_code=response.status,
            )

    def _transform_exception(self, exception: Exception, method: str, url: str) -> Exception:
        """Transform exceptions to appropriate API exceptions."""
        if isinstance(exception, ExternalAPIError):
            return exception
        if isinstance(exception, asyncio.TimeoutError):
            return APITimeoutError(self.api_name, self.timeout)
        if isinstance(exception, aiohttp.ClientError):
            return ExternalAPIError(f"Client error for {self.api_name}: {exception}", api_name=self.api_name)
        return exception

    def _record_error(self, error: Exception, method: str, url: str):
        error_record = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'error_type': type(error).__name__,
            'error_message': str(error),
            'method': method,
            'url': url,
            'api_name': self.api_name
        }

        self.error_history.append(error_record)
        if len(self.error_history) > self.max_error_history:
            self.error_history = self.error_history[-self.max_error_history:]

        logger.error(f"API error recorded for {self.api_name}", extra=error_record)

    async def post(
        self,
        endpoint: str,
        data: Optional[Union[Dict, str, bytes]] = None,
        params: Optional[Dict] = None,
        headers: Optional[Dict] = None,
        timeout: Optional[int] = None
    ) -> Dict[str, Any]:
        """Make POST request."""
        return await self._make_request('POST', endpoint, params, data, headers, timeout)

    async def get(
        self,
        endpoint: str,
        params: Optional[Dict] = None,
        headers: Optional[Dict] = None,
        timeout: Optional[int] = None
    ) -> Dict[str, Any]:
        """Make GET request."""
        return await self._make_request('GET', endpoint, params, None, headers, timeout)

    def get_stats(self) -> Dict[str, Any]:
        """Get client performance statistics."""
        return {
            **self.stats,
            'api_name': self.api_name,
            'error_rate': (
                self.stats['failed_requests'] / max(self.stats['total_requests'], 1)
            ) * 100,
        }

    def get_recent_errors(self, limit: int = 10) -> List[Dict]:
        return self.error_history[-limit:]

    async def close(self):
        """Close the client session and cleanup resources."""
        if self.session:
            await self.session.close()
            self.session = None
            logger.info(f"API client closed for {self.api_name}")


# Factory function for creating API clients
def create_api_client(
    api_name: str,
    base_url: str,
    api_key: Optional[str],
    **kwargs
) -> APIClient:
    """Factory function to create configured API client."""
    return APIClient(
        base_url=base_url,
        api_key=api_key,
        api_name=api_name,
        **kwargs
    )
