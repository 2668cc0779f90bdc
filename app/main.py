# app/main.py
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import get_settings
from app.core.logging import setup_logging
from app.http_problem_handlers import register_exception_handlers
from app.obs.metrics import PrometheusMiddleware
from app.router_mount import mount_routers

settings = get_settings()
setup_logging(settings.LOG_LEVEL, json=settings.JSON_LOG)
logger = logging.getLogger("shipfee")

app = FastAPI(
    title="VN Shipping Fee",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# frontend calls from another origin (dev server on :3000 / :5173)
cors_origins = settings.cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials="*" not in cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(PrometheusMiddleware)

register_exception_handlers(app)
mount_routers(app)

logger.info(
    "shipping provider=%s ghn_configured=%s ghtk_configured=%s",
    settings.SHIPPING_PROVIDER,
    settings.ghn_credentials().configured,
    settings.ghtk_credentials().configured,
)


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}
