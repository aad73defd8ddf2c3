"""
Errors raised while fetching Copilot metrics from the GitHub API.
"""

from typing import Optional


class CopilotAPIError(Exception):
    """Base class for every failure of a single fetch cycle."""
    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        super().__init__(message)
        self.original_exception = original_exception


class UpstreamTransportError(CopilotAPIError):
    """Network, connection or timeout failure."""
    pass


class UpstreamStatusError(CopilotAPIError):
    """The API answered with a non-success status code."""
    def __init__(self, status_code: int, body: str):
        super().__init__(f"API request failed with status {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class UpstreamDecodeError(CopilotAPIError):
    """The response body is not a valid Copilot metrics document."""
    pass
