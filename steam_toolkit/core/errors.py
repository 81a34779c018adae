# ===== TYPES & INTERFACES =====
from typing import Optional


class ToolkitError(Exception):
    """Base class for every error raised by the toolkit."""


class RemoteError(ToolkitError):
    """The Steam Storefront API could not produce a record for the requested app."""

    def __init__(self, app_id: str, message: str):
        super().__init__(message)
        self.app_id = app_id


class TransportError(RemoteError):
    """The HTTP exchange failed: non-success status, timeout or connection error."""

    def __init__(self, app_id: str, message: str, status: Optional[int] = None):
        super().__init__(app_id, message)
        self.status = status


class SchemaError(RemoteError):
    """The response was well-formed but did not mark success for the requested app."""


class FetchCancelled(ToolkitError):
    """A newer fetch superseded this one before it could complete."""

    def __init__(self, app_id: str):
        super().__init__(f"Fetch for app {app_id} was superseded by a newer request")
        self.app_id = app_id


class CacheFault(ToolkitError):
    """The cache store is unavailable or refused the operation."""


class AppIdNotFound(ToolkitError):
    """No Steam App ID could be identified for the current page."""
