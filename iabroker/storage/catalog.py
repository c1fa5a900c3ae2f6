"""
Periodically refreshed catalog of Collection-1 Landsat scenes.

The catalog maps scene IDs to the S3 folder and file-name prefix of the
scene. Every refresh builds a complete new snapshot and publishes it with a
single attribute assignment, so readers never lock and never see a
partially-built map.
"""
import csv
import gzip
import io
import logging
import threading
import zlib
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError

from iabroker.api.landsat import LandsatSceneListClient
from iabroker.errors import CatalogError, CatalogNotReadyError, CatalogParseError, SceneNotFoundError
from iabroker.models.catalog import CatalogEntry, CatalogSnapshot
from iabroker.utils.dates import utc_now

logger = logging.getLogger(__name__)

HEADER_FIELDS = ("productid", "entityid")


def folder_of(url):
    """Text of a URL up to and including its final '/'."""
    cut = url.rfind("/")
    if cut < 0:
        raise CatalogParseError(f"Storage URL has no folder component: {url!r}")
    return url[: cut + 1]


def parse_scene_list(source):
    """
    Decode a gzip-compressed scene list as it streams in.

    Columns are: file prefix, scene ID, ..., index file URL.

    Args:
        source: Binary file-like object (or bytes) holding the compressed list

    Returns:
        Dict of scene ID to CatalogEntry

    Raises:
        CatalogParseError: Undecodable payload or any malformed row
    """
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)

    entries = {}
    try:
        with gzip.GzipFile(fileobj=source, mode="rb") as compressed, io.TextIOWrapper(
            compressed, encoding="utf-8", newline=""
        ) as text:
            for line_no, row in enumerate(csv.reader(text), start=1):
                if not row:
                    continue
                if line_no == 1 and row[0].strip().lower() in HEADER_FIELDS:
                    continue
                if len(row) < 3:
                    raise CatalogParseError(f"Row {line_no} has {len(row)} columns, expected at least 3")
                prefix, scene_id, url = row[0].strip(), row[1].strip(), row[-1].strip()
                if not prefix or not scene_id:
                    raise CatalogParseError(f"Row {line_no} is missing a file prefix or scene ID")
                entries[scene_id] = CatalogEntry(scene_id=scene_id, folder_url=folder_of(url), file_prefix=prefix)
    except csv.Error as e:
        raise CatalogParseError(f"Failed to parse scene list: {e}") from e
    except (OSError, EOFError, zlib.error, UnicodeDecodeError) as e:
        raise CatalogParseError(f"Failed to decompress scene list: {e}") from e
    return entries


class SceneCatalog:
    """Owner of the live scene ID to storage location map."""

    def __init__(self, client=None):
        self.client = client or LandsatSceneListClient()
        self._snapshot = CatalogSnapshot.empty()
        self._refresh_lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="catalog-refresh")
        self._stop = threading.Event()
        self._ticker = None

    @property
    def snapshot(self):
        return self._snapshot

    @property
    def is_ready(self):
        return self._snapshot.ready

    @property
    def size(self):
        return len(self._snapshot.entries)

    @property
    def refreshed_at(self):
        return self._snapshot.refreshed_at

    def refresh(self):
        """
        Fetch and parse the scene list, then swap it in.

        Raises:
            CatalogFetchError: Download failed; the current snapshot is kept
            CatalogParseError: Decoding failed; the current snapshot is kept
        """
        with self._refresh_lock:
            with self.client.open_scene_list() as stream:
                entries = parse_scene_list(stream)
            self._snapshot = CatalogSnapshot.from_entries(entries, refreshed_at=utc_now())
        logger.info("Scene catalog refreshed with %d scenes", len(entries))
        return self._snapshot

    def refresh_async(self):
        """Run refresh() in the background; returns a concurrent.futures.Future."""
        return self._executor.submit(self.refresh)

    def warm_up(self, timeout=None):
        """
        Refresh once and wait for it.

        Args:
            timeout: Seconds to wait before giving up (None waits indefinitely)

        Returns:
            Whether the catalog is ready afterwards. A timed-out refresh keeps
            running and still governs the catalog when it finishes.
        """
        future = self.refresh_async()
        try:
            future.result(timeout=timeout)
        except FutureTimeoutError:
            logger.warning("Scene catalog refresh did not finish within %ss", timeout)
        except CatalogError as e:
            logger.error("Failed to update scene ID to URL map: %s", e)
        return self.is_ready

    def lookup(self, scene_id):
        """
        Entry for a scene in the live snapshot.

        Returns:
            CatalogEntry or None if the scene is unknown
        """
        return self._snapshot.entries.get(scene_id)

    def entry_for(self, scene_id):
        """
        Entry for a scene, raising when it cannot be found.

        Raises:
            CatalogNotReadyError: No refresh has succeeded yet
            SceneNotFoundError: The scene is not in the snapshot
        """
        snapshot = self._snapshot
        if not snapshot.ready:
            raise CatalogNotReadyError()
        entry = snapshot.entries.get(scene_id)
        if entry is None:
            raise SceneNotFoundError(scene_id)
        return entry

    def schedule_periodic_refresh(self, interval):
        """
        Refresh every `interval` seconds on a daemon thread.

        Failures are logged and the previous snapshot stays live.

        Returns:
            The background thread
        """
        if self._ticker is not None and self._ticker.is_alive():
            raise RuntimeError("Periodic refresh is already running")
        self._stop.clear()
        self._ticker = threading.Thread(
            target=self._run_periodic, args=(interval,), name="catalog-ticker", daemon=True
        )
        self._ticker.start()
        return self._ticker

    def _run_periodic(self, interval):
        while not self._stop.is_set():
            started = utc_now()
            try:
                self.refresh_async().result()
            except CatalogError as e:
                logger.error("Failed to update scene ID to URL map: %s", e)
            except Exception:
                logger.exception("Unexpected error while updating scene ID to URL map")
            elapsed = (utc_now() - started).total_seconds()
            self._stop.wait(max(0.0, interval - elapsed))

    def stop(self, timeout=None):
        """Stop the periodic refresh thread."""
        self._stop.set()
        if self._ticker is not None:
            self._ticker.join(timeout)
            self._ticker = None

    def close(self):
        self.stop()
        self._executor.shutdown(wait=False)
