from __future__ import annotations

import logging
import os
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from app.config import GroupProofConfig
from app.models.error import INTERNAL_ERROR_DETAIL
from app.routers import commits, contributors, health, projects, users
from app.services.analytics_service import AnalyticsAggregator
from app.services.blockchain_service import ContractClient, ContractReader, ProjectNotFoundError
from app.services.cache import TTLCache
from app.services.evm_contract_client import EvmContractClient
from app.services.rate_limiter import RateLimiter

app = FastAPI(title="GroupProof API", version=health.HEALTH_VERSION)
logger = logging.getLogger("groupproof.api")
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
logger.propagate = False
logger.setLevel(logging.INFO)

RATE_LIMIT_DETAIL = "Too many requests, please try again later"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name, "1" if default else "").strip().lower()
    return raw in {"1", "true", "yes", "on"}


def _client_identity(request: Request) -> str:
    xff = request.headers.get("x-forwarded-for")
    if xff:
        return xff.split(",", 1)[0].strip()
    remote = request.client.host if request.client and request.client.host else ""
    return remote or "unknown"


def configure_services(
    target: FastAPI,
    config: GroupProofConfig,
    client: ContractClient | None = None,
) -> None:
    """Build the cache, reader, aggregator and rate limiter for ``target`` and store them on its state.

    One TTLCache instance is shared by the reader and the aggregator.
    """
    if client is None:
        client = EvmContractClient(
            config.rpc_url,
            config.contract_address,
            timeout=config.rpc_timeout_seconds,
        )
    cache = TTLCache(ttl_seconds=config.cache_ttl_seconds)
    reader = ContractReader(client, cache)
    target.state.config = config
    target.state.cache = cache
    target.state.contract_reader = reader
    target.state.analytics = AnalyticsAggregator(reader, cache)
    target.state.rate_limiter = RateLimiter(
        max_requests=config.rate_limit_max,
        window_seconds=config.rate_limit_window_ms / 1000.0,
    )


settings = GroupProofConfig.from_env()
configure_services(app, settings)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(ProjectNotFoundError)
async def _project_not_found(request: Request, exc: ProjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unexpected_error method=%s path=%s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": INTERNAL_ERROR_DETAIL})


@app.middleware("http")
async def enforce_rate_limit(request: Request, call_next):
    limiter: RateLimiter | None = getattr(request.app.state, "rate_limiter", None)
    if limiter is None or not request.url.path.startswith("/api"):
        return await call_next(request)
    client = _client_identity(request)
    decision = limiter.hit(client)
    if not decision.allowed:
        logger.warning("rate_limited path=%s client=%s limit=%s", request.url.path, client, decision.limit)
        headers = decision.headers()
        headers["Retry-After"] = str(decision.reset_seconds)
        return JSONResponse(status_code=429, content={"detail": RATE_LIMIT_DETAIL}, headers=headers)
    response = await call_next(request)
    response.headers.update(decision.headers())
    return response


@app.middleware("http")
async def apply_security_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


@app.middleware("http")
async def log_request_timing(request: Request, call_next):
    start = time.perf_counter()
    status_code: int | None = None
    exc_name: str | None = None
    response = None
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    except Exception as exc:
        status_code = 500
        exc_name = exc.__class__.__name__
        raise
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        if response is not None:
            response.headers["x-groupproof-runtime-ms"] = f"{max(0.1, elapsed_ms):.4f}"
        config = getattr(request.app.state, "config", settings)
        if elapsed_ms >= config.slow_request_ms or _env_flag("API_LOG_ALL_REQUESTS", False):
            logger.warning(
                "slow_api_request method=%s path=%s status=%s elapsed_ms=%.2f client=%s exception=%s",
                request.method,
                request.url.path,
                status_code,
                elapsed_ms,
                _client_identity(request),
                exc_name or "none",
            )


@app.get("/", include_in_schema=False)
async def root():
    """Redirect to API documentation."""
    return RedirectResponse(url="/docs")


app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(projects.router, prefix="/api", tags=["projects"])
app.include_router(commits.router, prefix="/api", tags=["commits"])
app.include_router(contributors.router, prefix="/api", tags=["contributors"])
app.include_router(users.router, prefix="/api", tags=["users"])
