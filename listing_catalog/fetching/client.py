import logging
import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Sequence
from urllib.parse import quote

import requests

from .. import config
from ..exceptions import FetchError


@dataclass(frozen=True)
class ProxyEndpoint:
    name: str
    template: str   # '{url}' = percent-encoded target, '{raw_url}' = target as-is

    def build_url(self, target: str) -> str:
        return self.template.format(url=quote(target, safe=''), raw_url=target)


@dataclass(frozen=True)
class RetryPolicy:
    attempts_per_endpoint: int = config.ATTEMPTS_PER_ENDPOINT
    backoff_seconds: float = 0.0


def default_endpoints() -> List[ProxyEndpoint]:
    return [ProxyEndpoint(name, template) for name, template in config.PROXY_ENDPOINTS]


class ListingFetcher:
    """
    Downloads the listing HTML through an ordered list of proxy endpoints.

    Strategy:
      - Serve the cached body if it is younger than `cache_duration` seconds.
      - Otherwise try each endpoint in order, up to `attempts_per_endpoint`
        times each. An HTTP error or an empty body is a failed attempt.
      - If every endpoint fails, raise FetchError with all collected failures.
    """

    def __init__(self,
                 base_url: str = config.DEFAULT_BASE_URL,
                 endpoints: Optional[Sequence[ProxyEndpoint]] = None,
                 retry: Optional[RetryPolicy] = None,
                 cache_duration: float = config.CACHE_DURATION_SECONDS,
                 session: Optional[requests.Session] = None,
                 timeout: float = config.REQUEST_TIMEOUT):
        self.base_url = base_url
        self.endpoints = list(endpoints) if endpoints is not None else default_endpoints()
        self.retry = retry or RetryPolicy()
        self.cache_duration = cache_duration
        self.timeout = timeout

        self.session = session or requests.Session()
        self.session.headers.update(config.REQUEST_HEADERS)

        self.last_fetch: Optional[datetime] = None
        self._cached_html: Optional[str] = None

    def is_cache_valid(self) -> bool:
        if self.last_fetch is None or self._cached_html is None:
            return False
        return datetime.now() - self.last_fetch < timedelta(seconds=self.cache_duration)

    def clear_cache(self):
        self.last_fetch = None
        self._cached_html = None

    def fetch(self, refresh: bool = False) -> str:
        if refresh:
            self.clear_cache()
        elif self.is_cache_valid():
            logging.debug(f"Using cached listing for {self.base_url} (fetched {self.last_fetch})")
            return self._cached_html

        failures: List[str] = []
        for endpoint in self.endpoints:
            url = endpoint.build_url(self.base_url)
            for attempt in range(1, self.retry.attempts_per_endpoint + 1):
                logging.info(f"Fetching listing via {endpoint.name} (attempt {attempt}): {url}")
                try:
                    html = self._get(url)
                except (requests.RequestException, ValueError) as e:
                    failures.append(f"{endpoint.name}: {e}")
                    logging.warning(f"Fetch via {endpoint.name} failed: {e}")
                    if self.retry.backoff_seconds and attempt < self.retry.attempts_per_endpoint:
                        time.sleep(self.retry.backoff_seconds)
                    continue

                logging.debug(f"Received {len(html)} characters from {endpoint.name}")
                self._cached_html = html
                self.last_fetch = datetime.now()
                return html

        raise FetchError(
            f"All {len(self.endpoints)} endpoints failed for {self.base_url}",
            failures,
        )

    def _get(self, url: str) -> str:
        resp = self.session.get(url, timeout=self.timeout)
        resp.raise_for_status()

        html = resp.text
        if not html or not html.strip():
            raise ValueError("Received empty response from server")
        return html
