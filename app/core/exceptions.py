"""Errors raised by the campaign endpoint and converted to HTTP responses in main.py."""

from typing import Sequence


class CampaignTrackerError(Exception):
    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(CampaignTrackerError):
    """Caller-supplied campaign data failed a precondition."""
    status_code = 400


class MethodNotSupportedError(CampaignTrackerError):
    status_code = 405

    def __init__(self, method: str, allowed: Sequence[str] = ("GET", "POST")):
        self.method = method
        self.allowed = list(allowed)
        super().__init__(f"Method {method} Not Allowed")

    @property
    def allow_header(self) -> str:
        return ", ".join(self.allowed)


class InternalError(CampaignTrackerError):
    """Opaque failure; the cause is logged, never returned to the client."""
    status_code = 500
