"""
Compliance Scoring Engine — FastAPI Application Entry Point

POST /v1/risk/customer                                 → customer risk score
POST /v1/risk/organizations/{organization_id}/recalculate → batch recompute
POST /v1/audit/score                                   → audit readiness score
GET  /v1/risk/health                                   → health check
GET  /docs                                             → OpenAPI / Swagger UI
"""
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from compliance_engine.api.admin_endpoint import router as admin_router
from compliance_engine.api.audit_endpoint import router as audit_router
from compliance_engine.api.risk_endpoint import router as risk_router
from compliance_engine.core.config import get_settings
from compliance_engine.services.event_publisher import close_producer

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.ConsoleRenderer() if get_settings().app_env == "development"
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(get_settings().log_level),
)
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("scoring_engine_starting", model_version=get_settings().scoring_model_version)
    yield
    await close_producer()
    logger.info("scoring_engine_shutting_down")


app = FastAPI(
    title="Compliance Scoring Engine",
    description="Customer AML risk scoring and audit readiness scoring",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (admin console + client portal) ──
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # tighten in production
    allow_methods=["POST", "GET", "PUT"],
    allow_headers=["*"],
)

# ── Prometheus metrics ──
metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)

# ── Routes ──
app.include_router(risk_router)
app.include_router(audit_router)
app.include_router(admin_router)


@app.get("/", include_in_schema=False)
async def root():
    return {
        "service": get_settings().app_name,
        "version": "1.0.0",
        "docs": "/docs",
        "customer_risk": "POST /v1/risk/customer",
        "audit_score": "POST /v1/audit/score",
    }
