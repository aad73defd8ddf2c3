# copilot_exporter/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import HTMLResponse, PlainTextResponse
from prometheus_client import CollectorRegistry

from .api.endpoints import metrics
from .config import METRICS_ENDPOINT, Settings
from .services.copilot import (
    CachedCopilotCollector,
    CopilotCollector,
    CopilotExporter,
    CopilotMetricsClient,
    SnapshotRefresher,
    build_registry,
)

logger = logging.getLogger(__name__)

LANDING_PAGE = f"""<html>
<head><title>GitHub Copilot Metrics Exporter</title></head>
<body>
<h1>GitHub Copilot Metrics Exporter</h1>
<p><a href="{METRICS_ENDPOINT}">Metrics</a></p>
</body>
</html>"""


def build_collector(settings: Settings, client: Optional[CopilotMetricsClient] = None) -> CopilotCollector:
    """Wire client, descriptor registry and exporter for the configured mode."""
    if client is None:
        client = CopilotMetricsClient(
            token=settings.github_token,
            organization=settings.organization,
            team=settings.team,
            enterprise=settings.enterprise,
            base_url=settings.api_url,
        )
    exporter = CopilotExporter(
        registry=build_registry(settings.metrics_mode),
        organization=settings.organization,
        enterprise=settings.enterprise,
    )
    if settings.cache_enabled:
        return CachedCopilotCollector(client, exporter)
    return CopilotCollector(client, exporter)


def create_app(settings: Settings, collector: Optional[CopilotCollector] = None) -> FastAPI:
    if collector is None:
        collector = build_collector(settings)

    registry = CollectorRegistry(auto_describe=True)
    registry.register(collector)

    refresher = None
    if isinstance(collector, CachedCopilotCollector):
        refresher = SnapshotRefresher(collector, settings.refresh_interval)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if refresher is not None:
            refresher.start()
        yield
        if refresher is not None:
            await refresher.stop()

    app = FastAPI(title="GitHub Copilot Metrics Exporter", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.collector = collector
    app.state.registry = registry

    # Include routers
    app.include_router(metrics.router)

    @app.get("/", response_class=HTMLResponse)
    async def root():
        return LANDING_PAGE

    @app.get("/health", response_class=PlainTextResponse)
    async def health():
        return "OK"

    return app
