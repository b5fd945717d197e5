"""Statistics API HTTP client for resolving users and their income"""

import httpx
from typing import Any
from interest_account.domain.models import LookupRequest, LookupResponse
from interest_account.domain.exceptions import RemoteLookupError
from interest_account.config import settings
from interest_account.infrastructure.observability.metrics import record_lookup_failure


class StatisticsClient:
    """Client for the external statistics (user/income) API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
    ):
        self.base_url = (base_url or settings.statistics_api_base).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self.http_client = http_client

    def send_request(self, request: LookupRequest) -> LookupResponse:
        """
        Send a request to the statistics API and return its status and body.

        POST requests carry the payload as a JSON body; GET requests address
        the payload as a sub-resource (``users/<id>``). Non-200 statuses are
        returned, not raised, so the caller decides what they mean.

        Raises:
            RemoteLookupError: On timeout or when the API cannot be reached
        """
        try:
            if self.http_client is not None:
                response = self._send(self.http_client, request)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = self._send(client, request)

        except httpx.TimeoutException as e:
            record_lookup_failure(None)
            raise RemoteLookupError(None, f"Statistics API timeout after {self.timeout}s") from e
        except httpx.RequestError as e:
            record_lookup_failure(None)
            raise RemoteLookupError(None, f"Statistics API unavailable: {e}") from e

        return LookupResponse(status_code=response.status_code, body=self._parse_body(response))

    def _send(self, client: httpx.Client, request: LookupRequest) -> httpx.Response:
        url = f"{self.base_url}/{request.resource_path.strip('/')}"
        if request.method.upper() == "GET":
            return client.get(f"{url}/{request.payload}")
        return client.request(request.method.upper(), url, json=request.payload)

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        # Error responses may be plain text
        try:
            return response.json()
        except ValueError:
            return response.text
