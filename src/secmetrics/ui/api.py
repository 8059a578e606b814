"""
FastAPI application for the Secmetrics web dashboard.

Provides the HTML dashboard and JSON API endpoints.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from secmetrics import __version__
from secmetrics.dashboard.models import DashboardState, LoadError
from secmetrics.dashboard.service import DashboardService
from secmetrics.edr.models import EdrSummary
from secmetrics.ui import views
from secmetrics.vulnerabilities.models import VulnSummary

logger = logging.getLogger(__name__)

# Setup templates
template_dir = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(template_dir))


async def refresh_dashboard(app: FastAPI) -> DashboardState:
    """
    Run a full load cycle and publish its result on the app.

    Args:
        app: Application whose dashboard state is replaced

    Returns:
        The new dashboard state
    """
    service: DashboardService = app.state.service
    try:
        state = await service.load()
    except Exception as e:
        logger.error(f"Dashboard load failed: {e}", exc_info=True)
        state = DashboardState(
            errors=[LoadError(source="dashboard", path="", message=str(e))]
        )
    app.state.dashboard = state
    return state


def create_app(service: Optional[DashboardService] = None, background_load: bool = True) -> FastAPI:
    """
    Build the dashboard application.

    Args:
        service: Dashboard service (defaults to one configured from environment)
        background_load: Serve requests while the first load runs, showing
            the loading page until it completes. When False, startup waits
            for the first load.

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.dashboard = DashboardState(loading=True)
        task = None
        if background_load:
            task = asyncio.create_task(refresh_dashboard(app))
        else:
            await refresh_dashboard(app)
        yield
        if task is not None and not task.done():
            task.cancel()

    app = FastAPI(
        title="Secmetrics Security Dashboard",
        description="EDR and vulnerability management KPIs",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.service = service or DashboardService()

    # ========================================================================
    # HTML Pages
    # ========================================================================

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(request: Request):
        """
        Main dashboard page.

        Shows EDR and vulnerability KPI cards and charts.
        """
        try:
            data = views.get_dashboard_view(request.app.state.dashboard)
            return templates.TemplateResponse(request, "dashboard.html", data)
        except Exception as e:
            logger.error(f"Dashboard error: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail=str(e))

    # ========================================================================
    # JSON API Endpoints
    # ========================================================================

    @app.get("/api/dashboard", response_model=DashboardState)
    async def api_dashboard(request: Request):
        """Get the full dashboard state of the latest load cycle."""
        return request.app.state.dashboard

    @app.get("/api/edr", response_model=EdrSummary)
    async def api_edr(request: Request):
        """Get the EDR summary."""
        return request.app.state.dashboard.edr

    @app.get("/api/vulnerabilities", response_model=VulnSummary)
    async def api_vulnerabilities(request: Request):
        """Get the vulnerability summary."""
        return request.app.state.dashboard.vulnerabilities

    @app.post("/api/reload", response_model=DashboardState)
    async def api_reload(request: Request):
        """
        Reload both datasets and recompute every summary.

        Returns:
            The new dashboard state
        """
        logger.info("Dashboard reload requested")
        return await refresh_dashboard(request.app)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
