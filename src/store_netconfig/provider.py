"""Configuration service client.

Fetches the store's network layout with a plain HTTP GET. The service answers
with a JSON array of ``{"network": {...}}`` records; only the first record is
used.
"""

import json
import logging
from dataclasses import dataclass
from http.client import HTTPException
from typing import Any, Protocol
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from pydantic import ValidationError

from store_netconfig.errors import ConfigFetchError
from store_netconfig.models import NetworkInfo, Settings, StoreRecord

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-KEY"


class HttpClient(Protocol):
    """Simple http client interface for testability."""

    def get_json(self, url: str, headers: dict[str, str]) -> Any:
        """Return parsed json for the given url."""
        ...


@dataclass
class UrllibHttpClient:
    """Default http client using urllib."""

    timeout_seconds: float = 10.0

    def get_json(self, url: str, headers: dict[str, str]) -> Any:
        req = Request(url, headers=headers, method="GET")
        with urlopen(req, timeout=self.timeout_seconds) as resp:
            body = resp.read().decode("utf-8")
        return json.loads(body)


class ConfigProvider:
    """Load NetworkInfo for a store from the configuration service."""

    def __init__(
        self,
        api_url: str,
        api_key: str | None = None,
        http: HttpClient | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            api_url: Base URL; the store identifier is appended to it
            api_key: Token sent in the X-API-KEY header (omitted if None)
            http: HTTP client (a default UrllibHttpClient if None)
        """
        self.api_url = api_url
        self.api_key = api_key
        self.http = http or UrllibHttpClient()

    @classmethod
    def from_settings(cls, settings: Settings, http: HttpClient | None = None) -> "ConfigProvider":
        return cls(
            api_url=settings.api_url,
            api_key=settings.api_key,
            http=http or UrllibHttpClient(timeout_seconds=settings.http_timeout),
        )

    def url_for(self, store: str) -> str:
        return self.api_url + quote(store, safe="")

    def fetch(self, store: str) -> NetworkInfo:
        """Fetch and validate the network layout for a store.

        Args:
            store: Store identifier

        Returns:
            NetworkInfo from the first record of the response

        Raises:
            ConfigFetchError: If the request fails, or the response is empty
                or does not match the expected schema
        """
        if not self.api_url:
            raise ConfigFetchError("No configuration service URL configured")
        if not store:
            logger.warning("No store identifier set; requesting the base URL")

        url = self.url_for(store)
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers[API_KEY_HEADER] = self.api_key

        logger.info("Fetching network configuration from %s", url)
        try:
            data = self.http.get_json(url, headers=headers)
        except HTTPError as e:
            raise ConfigFetchError(f"Configuration service returned HTTP {e.code} for {url}") from e
        except URLError as e:
            raise ConfigFetchError(f"Error making request to {url}: {e.reason}") from e
        except (OSError, HTTPException, ValueError) as e:
            # HTTPException covers truncated or garbled replies; ValueError covers
            # JSON and UTF-8 decoding failures
            raise ConfigFetchError(f"Error reading response from {url}: {e}") from e

        return self.parse(data)

    @staticmethod
    def parse(data: Any) -> NetworkInfo:
        """Validate a decoded response and return the first record's NetworkInfo.

        Records after the first are not validated.

        Raises:
            ConfigFetchError: If the response is empty or the first record is malformed
        """
        if not data:
            raise ConfigFetchError("No data received from configuration service")
        if not isinstance(data, list):
            raise ConfigFetchError(
                f"Invalid network configuration: expected a JSON array, got {type(data).__name__}"
            )

        try:
            record = StoreRecord.model_validate(data[0])
        except ValidationError as e:
            raise ConfigFetchError(f"Invalid network configuration: {e}") from e

        if len(data) > 1:
            logger.debug("Ignoring %d additional records", len(data) - 1)

        return record.network
