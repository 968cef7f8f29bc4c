"""
secrets_api.health

Health check package.

Responsibilities:
- Named, tagged health checks and an aggregated report.
"""

# Package marker.
