"""nodejs-schedule: cached access to the Node.js release schedule."""


def _get_version() -> str:
    """Get package version with fallback mechanisms."""
    # Method 1: Try importlib.metadata (preferred for installed packages)
    try:
        from importlib.metadata import PackageNotFoundError, version

        return version("nodejs-schedule")
    except PackageNotFoundError:
        pass

    # Method 2: Try reading from pyproject.toml directly
    try:
        from pathlib import Path

        import tomllib

        pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                pyproject_data = tomllib.load(f)
            return pyproject_data.get("project", {}).get("version", "unknown")
    except (OSError, ValueError):
        pass

    # Final fallback
    return "unknown"


__version__ = _get_version()

from .exceptions import (  # noqa: E402
    CacheNotLoadedError,
    ConfigurationError,
    EmptyCache,
    FetchFailure,
    NodeScheduleError,
    NotPreloaded,
    UnknownVersion,
)
from .models import ScheduleEntry  # noqa: E402
from .store import (  # noqa: E402
    ScheduleStore,
    default_store,
    get_node_schedule_identifiers,
    get_node_schedule_information,
    preload_node_schedule,
)

__all__ = [
    "__version__",
    "ScheduleStore",
    "ScheduleEntry",
    "default_store",
    "preload_node_schedule",
    "get_node_schedule_information",
    "get_node_schedule_identifiers",
    "NodeScheduleError",
    "ConfigurationError",
    "FetchFailure",
    "CacheNotLoadedError",
    "EmptyCache",
    "NotPreloaded",
    "UnknownVersion",
]
