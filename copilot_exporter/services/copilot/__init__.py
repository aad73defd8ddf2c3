"""
GitHub Copilot metrics: API client, document model and Prometheus export.
"""

from .client import CopilotMetricsClient
from .collector import CachedCopilotCollector, CopilotCollector, SnapshotRefresher
from .descriptors import DescriptorRegistry, MetricDescriptor, MetricsMode, build_registry
from .errors import (
    CopilotAPIError,
    UpstreamDecodeError,
    UpstreamStatusError,
    UpstreamTransportError,
)
from .exporter import CopilotExporter, Observation
from .models import CopilotUsageDay

__all__ = [
    "CopilotMetricsClient",
    "CopilotCollector",
    "CachedCopilotCollector",
    "SnapshotRefresher",
    "DescriptorRegistry",
    "MetricDescriptor",
    "MetricsMode",
    "build_registry",
    "CopilotAPIError",
    "UpstreamDecodeError",
    "UpstreamStatusError",
    "UpstreamTransportError",
    "CopilotExporter",
    "Observation",
    "CopilotUsageDay",
]
