"""Main entry point for the catlingo admin service."""

import logging

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI

from catlingo.admin.router import router
from catlingo.config import get_settings
from catlingo.connectors import activate_connector

# Load .env before anything else
load_dotenv()

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="catlingo admin",
    description="Category administration with locale-aware connectors",
    version="0.1.0",
)

# Include REST routes
app.include_router(router)


@app.get("/health")
def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


def main() -> None:
    """Run the admin service with the configured connector active."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    settings = get_settings()
    connector = activate_connector()
    logger.info(f"Connector '{connector.name}' active")

    logger.info(f"Starting catlingo admin on {settings.admin_host}:{settings.admin_port}")
    uvicorn.run(app, host=settings.admin_host, port=settings.admin_port)


if __name__ == "__main__":
    main()
