"""FastAPI backend for mortgage-charts.

This module contains:
- REST API endpoints for both chart views
- Plotly JSON and HTML rendering of each view
"""

from mortgage_charts.api.app import app

__all__ = [
    "app",
]
