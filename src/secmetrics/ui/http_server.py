"""
Main HTTP server for the Secmetrics dashboard.
"""

import logging

import uvicorn

from secmetrics import get_log_level
from secmetrics.core.config import get_config

from .api import create_app

logging.basicConfig(
    level=get_log_level(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = create_app()


def main(host: str = None, port: int = None):
    """Main entry point for HTTP server."""
    config = get_config()
    host = host or config.server.host
    port = port or config.server.port

    logger.info("=" * 60)
    logger.info("Secmetrics - Security KPI Dashboard")
    logger.info("=" * 60)
    logger.info(f"Host: {host}")
    logger.info(f"Port: {port}")
    logger.info(f"EDR data: {config.data.edr_path}")
    logger.info(f"Vulnerability data: {config.data.vulnerabilities_path}")
    logger.info("=" * 60)
    logger.info(f"Dashboard: http://{host}:{port}/")
    logger.info("=" * 60)

    uvicorn.run(
        "secmetrics.ui.http_server:app",
        host=host,
        port=port,
        reload=config.server.reload,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
