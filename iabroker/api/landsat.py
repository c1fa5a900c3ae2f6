"""Client for the Landsat Collection-1 scene list."""
import logging
from contextlib import contextmanager

import requests
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
from urllib3.exceptions import HTTPError as TransferError

from iabroker.config import config
from iabroker.errors import CatalogFetchError

logger = logging.getLogger(__name__)


class LandsatSceneListClient:
    """Downloads the compressed scene list published next to the Landsat bucket."""

    def __init__(self, scene_list_url=None, timeout=None, session=None):
        self.scene_list_url = scene_list_url or config.scene_list_url
        self.timeout = timeout or config.api_timeout
        self.session = session or requests.Session()

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
        reraise=True,
    )
    def _get(self, url):
        """Streaming GET with retry on transport errors."""
        return self.session.get(url, stream=True, timeout=self.timeout)

    @contextmanager
    def open_scene_list(self):
        """
        Open the scene list for streaming.

        The body is never buffered whole; the caller reads it as it arrives.

        Yields:
            Binary file-like object over the gzip-compressed body

        Raises:
            CatalogFetchError: Transport failure, non-200 response or a
                connection dropped mid-transfer
        """
        logger.debug("Fetching scene list from %s", self.scene_list_url)
        try:
            response = self._get(self.scene_list_url)
        except requests.RequestException as e:
            raise CatalogFetchError(f"Failed to fetch {self.scene_list_url}: {e}") from e

        try:
            if response.status_code != 200:
                raise CatalogFetchError(
                    f"Non-200 response code from {self.scene_list_url}: {response.status_code}"
                )
            try:
                yield response.raw
            except (requests.RequestException, TransferError) as e:
                raise CatalogFetchError(f"Failed to read {self.scene_list_url}: {e}") from e
        finally:
            response.close()
