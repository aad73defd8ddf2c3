"""
Prometheus collectors exposing Copilot metrics.

Two deployment modes:
- ``CopilotCollector``: every scrape fetches from GitHub and exports fresh data.
- ``CachedCopilotCollector``: scrapes read the last successful snapshot, which
  a ``SnapshotRefresher`` replaces on a fixed period.

A failed fetch is logged and yields no samples for that cycle. Observations
are fully materialized before exposition, so a scrape never contains a
partial cycle.
"""

import asyncio
import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from prometheus_client.core import GaugeMetricFamily

from .client import CopilotMetricsClient
from .descriptors import DescriptorRegistry
from .errors import CopilotAPIError
from .exporter import CopilotExporter, Observation

logger = logging.getLogger(__name__)


def build_families(
    registry: DescriptorRegistry, observations: Iterable[Observation]
) -> List[GaugeMetricFamily]:
    """Group observations into one gauge family per descriptor, in registry order."""
    families: Dict[str, GaugeMetricFamily] = {}
    for observation in observations:
        descriptor = observation.descriptor
        family = families.get(descriptor.name)
        if family is None:
            family = GaugeMetricFamily(
                descriptor.name, descriptor.documentation, labels=list(descriptor.labels)
            )
            families[descriptor.name] = family
        family.add_metric(list(observation.labels), observation.value)
    return [families[name] for name in registry.names if name in families]


class CopilotCollector:
    """
    Custom collector that fetches and exports on every scrape.

    Holds no mutable state, so concurrent scrapes are independent.
    """

    def __init__(self, client: CopilotMetricsClient, exporter: CopilotExporter):
        self.client = client
        self.exporter = exporter
        self.registry = exporter.registry

    def describe(self) -> Iterator[GaugeMetricFamily]:
        for descriptor in self.registry:
            yield GaugeMetricFamily(
                descriptor.name, descriptor.documentation, labels=list(descriptor.labels)
            )

    def collect(self) -> Iterator[GaugeMetricFamily]:
        observations = self.run_cycle()
        if observations is None:
            return
        yield from build_families(self.registry, observations)

    def run_cycle(self) -> Optional[List[Observation]]:
        """Fetch and export once. Returns None when the fetch failed."""
        try:
            records = self.client.fetch()
        except CopilotAPIError as e:
            logger.error(f"Error fetching metrics: {e}")
            return None
        return self.exporter.export_all(records)


class CachedCopilotCollector(CopilotCollector):
    """
    Serves the last successfully exported snapshot.

    ``refresh`` is the only writer: it builds a new immutable tuple and swaps
    it in with a single assignment. Readers take one reference and never see
    a half-built snapshot.
    """

    def __init__(self, client: CopilotMetricsClient, exporter: CopilotExporter):
        super().__init__(client, exporter)
        self._snapshot: Tuple[Observation, ...] = ()

    @property
    def snapshot(self) -> Tuple[Observation, ...]:
        return self._snapshot

    def refresh(self) -> bool:
        """Fetch a new snapshot. On failure the previous one is kept."""
        observations = self.run_cycle()
        if observations is None:
            return False
        self._snapshot = tuple(observations)
        logger.info(f"Metrics snapshot refreshed with {len(observations)} observations")
        return True

    def collect(self) -> Iterator[GaugeMetricFamily]:
        snapshot = self._snapshot
        yield from build_families(self.registry, snapshot)


class SnapshotRefresher:
    """
    Background task refreshing a CachedCopilotCollector on a fixed period.

    The first refresh runs immediately. The blocking HTTP call runs in a
    worker thread so the event loop keeps serving scrapes.
    """

    def __init__(self, collector: CachedCopilotCollector, interval_seconds: float):
        if interval_seconds <= 0:
            raise ValueError("Refresh interval must be > 0")
        self.collector = collector
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    async def run(self) -> None:
        while True:
            try:
                await asyncio.to_thread(self.collector.refresh)
            except Exception as e:
                logger.error(f"Metrics refresh failed: {e}", exc_info=True)
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> asyncio.Task:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run())
            logger.info(f"Metrics refresh scheduled every {self.interval_seconds:g} seconds")
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
