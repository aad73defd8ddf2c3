"""
Prometheus scrape endpoint.

Declared as a plain ``def`` so FastAPI runs it in its threadpool: in live
mode every scrape performs a blocking GitHub API request.
"""

from fastapi import APIRouter, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from ...config import METRICS_ENDPOINT

router = APIRouter(tags=["metrics"])


@router.get(METRICS_ENDPOINT)
def scrape_metrics(request: Request):
    """Expose Copilot metrics in the Prometheus text format."""
    payload = generate_latest(request.app.state.registry)
    return Response(content=payload, media_type=CONTENT_TYPE_LATEST)
