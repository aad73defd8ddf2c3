"""
Shared fixtures for exporter tests.
"""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from copilot_exporter.services.copilot.client import CopilotMetricsClient


def make_day(**overrides: Any) -> Dict[str, Any]:
    """Build one upstream day record with all totals set."""
    day = {
        "day": "2024-01-01",
        "total_suggestions_count": 100,
        "total_acceptances_count": 80,
        "total_lines_suggested": 500,
        "total_lines_accepted": 400,
        "total_active_users": 10,
        "total_chat_acceptances": 20,
        "total_chat_turns": 30,
        "total_active_chat_users": 5,
    }
    day.update(overrides)
    return day


def json_transport(payload: Any, status_code: int = 200, requests: Optional[List[httpx.Request]] = None) -> httpx.MockTransport:
    """MockTransport answering every request with ``payload`` as JSON."""
    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return httpx.Response(status_code, content=json.dumps(payload).encode())
    return httpx.MockTransport(handler)


def failing_transport(message: str = "connection refused") -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError(message, request=request)
    return httpx.MockTransport(handler)


@pytest.fixture
def client_factory() -> Callable[..., CopilotMetricsClient]:
    """Build a client for test-org wired to the given transport."""
    def factory(transport: httpx.MockTransport, **kwargs: Any) -> CopilotMetricsClient:
        params = {"token": "test-token", "organization": "test-org"}
        params.update(kwargs)
        return CopilotMetricsClient(transport=transport, **params)
    return factory
