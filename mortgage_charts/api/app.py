"""FastAPI application for mortgage-charts.

This module provides the REST API endpoints that serve both chart views as
JSON, with the matching Plotly figure as JSON or as an HTML fragment.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, Literal

from fastapi import FastAPI, HTTPException, Query, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from mortgage_charts import __version__
from mortgage_charts.analysis import build_rate_trend_view, build_spread_delinquency_view
from mortgage_charts.config import get_settings
from mortgage_charts.core.datasource import MortgageDataSource, get_data_source
from mortgage_charts.core.errors import (
    LOAD_ERROR_MESSAGE,
    InsufficientData,
    LoadFailure,
    UndefinedStatistic,
)
from mortgage_charts.visualization import (
    PlotResult,
    create_rate_trend_plot,
    create_spread_scatter_plot,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting mortgage-charts API")

    # Preload the data; requests retry the load if this fails
    try:
        source = get_data_source()
        logger.info(f"Data loaded: {source.total_rows} rows from {source.path}")
    except LoadFailure as e:
        logger.warning(f"Could not preload data: {e}")

    yield

    logger.info("Shutting down mortgage-charts API")


# Create FastAPI app
app = FastAPI(
    title="mortgage-charts API",
    description="Interest-rate trends and spread vs delinquency charts",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


# Response models
class HealthResponse(BaseModel):
    """Response from health check."""

    status: str
    version: str
    data_loaded: bool
    total_rows: int | None = None


class ChartResponse(BaseModel):
    """Response from a chart endpoint."""

    success: bool
    chart: Literal["rates", "spread"]
    view: dict[str, Any] = Field(default_factory=dict)
    plot_json: str | None = None


def _load_source() -> MortgageDataSource:
    try:
        return get_data_source()
    except LoadFailure as e:
        logger.exception("Data load failed")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=LOAD_ERROR_MESSAGE,
        ) from e


def _build(chart: str, min_rows: int | None = None) -> tuple[dict[str, Any], PlotResult]:
    """Build the view and figure for a chart, mapping errors to HTTP codes."""
    raw = _load_source().dataframe

    try:
        if chart == "rates":
            view = build_rate_trend_view(raw)
            plot = create_rate_trend_plot(view)
        else:
            rows = min_rows if min_rows is not None else get_settings().min_valid_rows
            view = build_spread_delinquency_view(raw, min_rows=rows)
            plot = create_spread_scatter_plot(view)
    except InsufficientData as e:
        raise HTTPException(
            status_code=422,
            detail=e.user_message,
        ) from e
    except UndefinedStatistic as e:
        raise HTTPException(
            status_code=422,
            detail=str(e),
        ) from e

    return view.to_dict(), plot


@app.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    try:
        source = get_data_source()
    except LoadFailure:
        return HealthResponse(status="degraded", version=__version__, data_loaded=False)

    return HealthResponse(
        status="healthy",
        version=__version__,
        data_loaded=True,
        total_rows=source.total_rows,
    )


@app.get("/data/info")
def data_info() -> dict[str, Any]:
    """Describe the loaded CSV: path, row count and column coverage."""
    source = _load_source()
    info = source.metadata.to_dict()
    info["missing_columns"] = source.metadata.missing_columns()
    return info


@app.get("/charts/rates", response_model=ChartResponse)
def rates_chart() -> ChartResponse:
    """Interest rates over time."""
    view, plot = _build("rates")
    return ChartResponse(success=True, chart="rates", view=view, plot_json=plot.to_json())


@app.get("/charts/spread", response_model=ChartResponse)
def spread_chart(
    min_rows: int | None = Query(default=None, ge=2, description="Minimum complete rows"),
) -> ChartResponse:
    """Spread vs delinquency z-scores with regression line."""
    view, plot = _build("spread", min_rows)
    return ChartResponse(success=True, chart="spread", view=view, plot_json=plot.to_json())


@app.get("/charts/{chart}/html", response_class=HTMLResponse)
def chart_html(
    chart: Literal["rates", "spread"],
    min_rows: int | None = Query(default=None, ge=2),
) -> HTMLResponse:
    """Chart as a standalone HTML page."""
    _, plot = _build(chart, min_rows)
    return HTMLResponse(content=plot.to_html(full_html=True))
