"""In-memory cache of the Node.js release schedule.

The schedule is published by the Node.js Release working group as a JSON
document keyed by release line:

    {"v4": {"start": "2015-09-08", "lts": "2015-10-12", "maintenance": "2017-04-01",
            "end": "2018-04-30", "codename": "Argon"}, ...}

A ScheduleStore goes through two states. It starts empty, and the first
successful ``preload()`` populates it once. Nothing clears or updates it
afterwards. Queries are synchronous and only read the cache, so callers
await ``preload()`` once (typically at startup) and then look up release
lines freely.

Typical use:

    store = ScheduleStore()
    await store.preload()
    store.get_identifiers()        # ["0.8", "0.10", "0.12", "4", "5", ...]
    store.get_information(4).end   # datetime.date(2018, 4, 30)
"""

import asyncio
import dataclasses
import threading
from typing import Any, Dict, List, Optional, Union

import requests

from .config import DEFAULT_TIMEOUT, SCHEDULE_URL, ScheduleConfig
from .exceptions import EmptyCache, FetchFailure, NotPreloaded, UnknownVersion
from .http_client import get_default_headers
from .logging_config import logger
from .models import ScheduleEntry, parse_schedule_entry
from .versioning import version_sort_key

VersionInput = Union[str, int, float]


def coerce_version(version: VersionInput) -> str:
    """
    Coerce a version input to the string form used as cache key.

    ``4``, ``4.0`` and ``"4"`` all become ``"4"``; ``0.12`` becomes ``"0.12"``.
    No further normalization happens, so ``"4.0.0"`` stays ``"4.0.0"``.
    """
    if isinstance(version, float) and version.is_integer():
        return str(int(version))
    return str(version)


class ScheduleStore:
    """
    Populate-once cache of Node.js release schedule entries.

    Holds the parsed entries keyed by significant version number, plus the
    identifiers in chronological order (0.8, 0.12, 4, ...). Every value handed
    out is a copy, so callers can never change what the store holds.

    Args:
        url: Location of the schedule document
        timeout: HTTP timeout in seconds for the fetch
        session: Optional requests.Session to fetch with; when omitted a
            session is opened for the fetch and closed afterwards
    """

    def __init__(
        self,
        url: str = SCHEDULE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self._session = session
        self._entries: Dict[str, ScheduleEntry] = {}
        self._order: List[str] = []
        self._inflight: Optional[asyncio.Task] = None
        # Guards _inflight and the commit; preloads may run on several threads' event loops
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: ScheduleConfig, session: Optional[requests.Session] = None) -> "ScheduleStore":
        """Create a store using the URL and timeout of a ScheduleConfig."""
        return cls(url=config.url, timeout=config.timeout, session=session)

    @property
    def is_loaded(self) -> bool:
        """Whether a preload has populated the store."""
        return bool(self._order)

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, version: object) -> bool:
        if not isinstance(version, (str, int, float)):
            return False
        return coerce_version(version) in self._entries

    def __repr__(self) -> str:
        state = f"{len(self)} release lines" if self.is_loaded else "empty"
        return f"<ScheduleStore {self.url} ({state})>"

    async def preload(self) -> None:
        """
        Fetch the schedule document and populate the store.

        Returns immediately once the store is populated. Concurrent calls on
        the same event loop wait for the fetch already in flight instead of
        starting their own; calls from another thread's event loop fetch
        separately and the first to finish populates the store. A failed
        preload leaves the store empty, so calling it again retries from
        scratch.

        Raises:
            FetchFailure: If the document could not be fetched, decoded or
                parsed. The original error is chained as ``__cause__``.
        """
        if self._order:
            logger.debug(f"Cache hit (schedule): {len(self._order)} release lines already loaded")
            return

        loop = asyncio.get_running_loop()
        with self._lock:
            task = self._inflight
            if task is None:
                task = self._inflight = loop.create_task(self._load())
                task.add_done_callback(self._clear_inflight)
            elif task.get_loop() is not loop:
                task = None
            else:
                logger.debug("Schedule preload already in flight, waiting for it")

        if task is None:
            # A fetch is in flight on another thread's event loop, which this loop cannot await
            logger.debug("Schedule preload in flight on another event loop, fetching separately")
            await self._load()
            return

        # Shielded so one cancelled caller does not abort the fetch other callers wait on
        await asyncio.shield(task)

    def _clear_inflight(self, task: "asyncio.Task[None]") -> None:
        with self._lock:
            if self._inflight is task:
                self._inflight = None

    async def _load(self) -> None:
        logger.info(f"Fetching Node.js release schedule from {self.url}")
        loop = asyncio.get_running_loop()
        try:
            document = await loop.run_in_executor(None, self._fetch_document)
            entries = self._parse_document(document)
        except (requests.exceptions.RequestException, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Failed to fetch Node.js release schedule from {self.url}: {e}")
            raise FetchFailure(self.url) from e

        self._commit(entries)
        logger.info(f"Loaded {len(self._order)} Node.js release lines")

    def _fetch_document(self) -> Any:
        """Blocking GET of the schedule document, returning the decoded JSON."""
        session = self._session or requests.Session()
        try:
            response = session.get(self.url, headers=get_default_headers(), timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        finally:
            if self._session is None:
                session.close()

    @staticmethod
    def _parse_document(document: Any) -> List[ScheduleEntry]:
        """Parse the raw document into entries sorted chronologically by version."""
        if not isinstance(document, dict):
            raise TypeError(f"Schedule document must be a JSON object, got {type(document).__name__}")

        entries = [parse_schedule_entry(key, record) for key, record in document.items()]
        entries.sort(key=lambda entry: version_sort_key(entry.version))
        return entries

    def _commit(self, entries: List[ScheduleEntry]) -> None:
        # Keyed inserts, so a duplicate key ("v4" and "4") keeps entries and order 1:1
        new_entries: Dict[str, ScheduleEntry] = {}
        new_order: List[str] = []
        for entry in entries:
            if entry.version not in new_entries:
                new_order.append(entry.version)
            new_entries[entry.version] = entry

        with self._lock:
            if self._order:
                logger.debug("Schedule already populated by a parallel preload, discarding this fetch")
                return
            # _order is the emptiness gate, so it is published last
            self._entries = new_entries
            self._order = new_order

    def get_information(self, version: VersionInput) -> ScheduleEntry:
        """
        Get the schedule information of a release line.

        Only exact significant version numbers match: ``"4"`` (or ``4``) finds
        the v4 line, ``"4.0.0"`` does not.

        The result is a shallow copy. Reassigning its fields never affects the
        store. The dates are shared with the store, which is safe as
        ``datetime.date`` is immutable.

        Args:
            version: Significant version number, as string or number

        Returns:
            Copy of the cached ScheduleEntry

        Raises:
            EmptyCache: If the store has not been preloaded
            UnknownVersion: If the version is not a known release line
        """
        entry = self._entries.get(coerce_version(version))
        if entry is None:
            if not self._order:
                raise EmptyCache(version)
            raise UnknownVersion(version, self._order)
        return dataclasses.replace(entry)

    def get_identifiers(self) -> List[str]:
        """
        Get the significant version numbers of all release lines, oldest first.

        Returns:
            New list of identifiers (e.g. ["0.8", "0.10", "0.12", "4", ...])

        Raises:
            NotPreloaded: If the store has not been preloaded
        """
        if not self._order:
            raise NotPreloaded()
        return list(self._order)

    def get_schedule(self) -> List[ScheduleEntry]:
        """Get copies of every entry, oldest release line first.

        Raises:
            NotPreloaded: If the store has not been preloaded
        """
        return [self.get_information(version) for version in self.get_identifiers()]


# Process-wide store backing the module-level helpers below
default_store = ScheduleStore()


async def preload_node_schedule() -> None:
    """Preload the process-wide schedule store. See ScheduleStore.preload."""
    await default_store.preload()


def get_node_schedule_information(version: VersionInput) -> ScheduleEntry:
    """Look up a release line in the process-wide store. See ScheduleStore.get_information."""
    return default_store.get_information(version)


def get_node_schedule_identifiers() -> List[str]:
    """List release lines of the process-wide store. See ScheduleStore.get_identifiers."""
    return default_store.get_identifiers()
