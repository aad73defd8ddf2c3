"""
HTTP client for the GitHub Copilot metrics REST API.

One request per call: no retries, no backoff. Any failure aborts the
current collection cycle.
"""

import logging
from typing import List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from .errors import UpstreamDecodeError, UpstreamStatusError, UpstreamTransportError
from .models import CopilotUsageDay

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
GITHUB_ACCEPT = "application/vnd.github+json"
REQUEST_TIMEOUT_SECONDS = 10.0

_DOCUMENT_ADAPTER = TypeAdapter(List[CopilotUsageDay])


def metrics_path(organization: str = "", team: str = "", enterprise: str = "") -> str:
    """
    Select the API path for the configured target.

    Priority: enterprise > team within organization > organization.

    Raises:
        ValueError: If no usable selector is given (team needs an organization)
    """
    if enterprise:
        return f"/enterprises/{enterprise}/copilot/metrics"
    if not organization:
        if team:
            raise ValueError("A team selector requires an organization")
        raise ValueError("Either an organization or an enterprise is required")
    if team:
        return f"/orgs/{organization}/team/{team}/copilot/metrics"
    return f"/orgs/{organization}/copilot/metrics"


class CopilotMetricsClient:
    """
    Fetches per-day Copilot usage records for an organization, team or enterprise.
    """

    def __init__(
        self,
        token: str,
        organization: str = "",
        team: str = "",
        enterprise: str = "",
        base_url: str = DEFAULT_API_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Args:
            token: GitHub token sent as a bearer credential
            organization: Organization login
            team: Team slug (only used together with organization)
            enterprise: Enterprise slug, takes precedence over organization
            base_url: API root, override for GitHub Enterprise Server
            timeout: Total request timeout in seconds
            transport: Optional httpx transport (tests)
        """
        if not token:
            raise ValueError("GitHub token is required")

        self.token = token
        self.organization = organization
        self.team = team
        self.enterprise = enterprise
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self.url = self.base_url + metrics_path(organization, team, enterprise)

    @property
    def headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": GITHUB_ACCEPT,
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }

    def fetch(self) -> List[CopilotUsageDay]:
        """
        Request and decode the metrics document.

        Returns:
            One CopilotUsageDay per day, in upstream order

        Raises:
            UpstreamTransportError: Connection failure or timeout
            UpstreamStatusError: Any status other than 200 (body kept for diagnostics)
            UpstreamDecodeError: Malformed JSON or unexpected document shape
        """
        logger.debug(f"Fetching Copilot metrics from {self.url}")

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.get(self.url, headers=self.headers)
        except httpx.HTTPError as e:
            raise UpstreamTransportError(f"Error making request: {e}", e) from e

        if response.status_code != 200:
            raise UpstreamStatusError(response.status_code, response.text)

        try:
            records = _DOCUMENT_ADAPTER.validate_json(response.content, strict=True)
        except ValidationError as e:
            raise UpstreamDecodeError(f"Error decoding response: {e}", e) from e

        logger.info(f"Fetched {len(records)} day(s) of Copilot metrics")
        return records
