"""FastAPI application entry point — wires logging, rules and routes.

Usage:
    python -m screener.main
"""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from screener.config import settings
from screener.screening.router import get_rule_store
from screener.screening.router import router as screening_router

# ── Logging setup ────────────────────────────────────────────────────

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    stream=sys.stdout,
)
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = logging.getLogger(__name__)

# ── FastAPI lifespan ─────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load the rule store once at startup."""
    logger.info("Starting benefit screener (env=%s)", settings.environment)
    store = get_rule_store()
    logger.info("Rule store ready: %d rules", len(store.all_rules()))
    yield
    logger.info("Benefit screener shutdown complete")


# ── FastAPI app ──────────────────────────────────────────────────────

app = FastAPI(
    title="Benefit Screener API",
    description="Eligibility screening for veteran and public benefit programs",
    version="0.1.0",
    lifespan=lifespan,
)
app.include_router(screening_router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "status": "ok",
        "environment": settings.environment,
        "default_jurisdiction": settings.rules.default_jurisdiction,
    }


# ── Entry point ──────────────────────────────────────────────────────

if __name__ == "__main__":
    uvicorn.run(
        "screener.main:app",
        host=settings.api.api_host,
        port=settings.api.api_port,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )
