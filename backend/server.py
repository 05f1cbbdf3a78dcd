#!/usr/bin/env python3
"""
Server entry point for the LogicCraft analyzer backend.
"""
import uvicorn

from backend.app.config import settings, logger


def main():
    """Run the server."""
    logger.info(f"Starting LogicCraft analyzer on {settings.HOST}:{settings.PORT}")

    uvicorn.run(
        "backend.app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
