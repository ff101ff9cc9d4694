"""Airport Finder client: local cached airport store and CLI."""

from .api import AirportsApiClient, AirportsApiError
from .store import AirportsStore

__all__ = ["AirportsApiClient", "AirportsApiError", "AirportsStore"]
__version__ = "0.1.0"
