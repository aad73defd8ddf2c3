"""
GitHub Copilot Metrics Exporter.

Fetches Copilot usage metrics from the GitHub REST API and exposes them to Prometheus.
"""

__version__ = "1.0.0"
