"""Custom exceptions for nodejs-schedule."""

from typing import List, Optional, Union


class NodeScheduleError(Exception):
    """Base exception for all nodejs-schedule operations."""


class ConfigurationError(NodeScheduleError):
    """Raised when configuration validation fails."""


class FetchFailure(NodeScheduleError):
    """Raised when the schedule document could not be fetched, decoded or parsed.

    The underlying error is available as ``__cause__``.
    """

    def __init__(self, url: str, message: Optional[str] = None):
        self.url = url
        super().__init__(message or f"Failed to fetch the Node.js schedule information of the API: {url}")


class CacheNotLoadedError(NodeScheduleError):
    """Raised when the cache is queried before a successful preload."""


class EmptyCache(CacheNotLoadedError):
    """Raised when schedule information is requested before the cache was preloaded."""

    def __init__(self, version: Union[str, int, float]):
        self.version = version
        super().__init__(
            f"Unable to get the schedule information for Node.js version [{version!r}] as the cache was empty.\n"
            "Fetch first, then try again."
        )


class NotPreloaded(CacheNotLoadedError):
    """Raised when the identifier list is requested before the cache was preloaded."""

    def __init__(self) -> None:
        super().__init__("Node.js schedule identifiers have not yet been fetched.")


class UnknownVersion(NodeScheduleError):
    """Raised when a version is not one of the cached schedule identifiers."""

    def __init__(self, version: Union[str, int, float], known_versions: List[str]):
        self.version = version
        self.known_versions = list(known_versions)
        super().__init__(
            f"Unable to find the schedule information for Node.js version [{version!r}] in the cache.\n"
            "Check the version number is valid and try again.\n"
            f"Version numbers that do exist are: [{', '.join(self.known_versions)}]"
        )
