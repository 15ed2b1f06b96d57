"""Command-line entry point: ``python -m statustracker``."""

from __future__ import annotations

import uvicorn

from statustracker.api import create_app
from statustracker.config import load_settings
from statustracker.logging import setup_logging


def main() -> None:
    """Load settings, set up logging and serve the API with uvicorn."""
    settings = load_settings()
    logger = setup_logging(settings.log_dir, level=settings.log_level)
    logger.info("Starting status tracker on http://%s:%d", settings.host, settings.port)

    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level="info")


if __name__ == "__main__":
    main()
