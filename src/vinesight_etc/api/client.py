"""
HTTP client base for the weather provider.

A requests session with retries on throttling and server errors. The
provider is public and read-only, so there is no authentication and only
GET is retried.
"""

import logging
from typing import Dict, Any, Optional

import requests  # type: ignore
from requests.adapters import HTTPAdapter  # type: ignore
from urllib3.util.retry import Retry  # type: ignore

RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


class APIClient:
    """Read-only JSON client shared by the provider endpoint mixins."""

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        max_retries: int = 3,
        verify_ssl: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize API client.

        Args:
            base_url: Provider root URL, e.g. https://api.open-meteo.com
            timeout: Per-request timeout in seconds
            max_retries: Retries for connection errors and retryable statuses
            verify_ssl: Verify TLS certificates
            logger: Logger instance
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.logger = logger or logging.getLogger(__name__)

        if not verify_ssl:
            import urllib3
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

        self.session = self._create_session(max_retries)

    @staticmethod
    def _create_session(max_retries: int) -> requests.Session:
        session = requests.Session()
        adapter = HTTPAdapter(max_retries=Retry(
            total=max_retries,
            backoff_factor=1,
            status_forcelist=RETRY_STATUS_CODES,
            allowed_methods=["GET"]
        ))
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers.update({"Accept": "application/json"})
        return session

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def _make_request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """
        Send a request and raise on HTTP error status.

        Raises:
            requests.exceptions.RequestException: On connection, timeout or
                HTTP status failure
        """
        url = self._url(endpoint)
        kwargs.setdefault("verify", self.verify_ssl)
        self.logger.debug(f"{method} {url} params={kwargs.get('params')}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                timeout=self.timeout,
                **kwargs
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Weather API request failed: {method} {url} - {e}")
            raise

        return response

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        GET an endpoint and decode its JSON body.

        Raises:
            requests.exceptions.RequestException: On request failure or an
                undecodable body
        """
        return self._make_request("GET", endpoint, params=params).json()

    def close(self) -> None:
        """Close the session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
