from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi.errors import RateLimitExceeded

from app.config import settings
from app.api.v1.router import api_router
from app.core.exceptions import AppError
from app.core.logging import configure_logger, handle_app_errors, handle_broad_exceptions
from app.core.rate_limit import limiter
from app.database import create_all


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    logger.bind(url_path=str(request.url.path)).warning("Rate limit exceeded: {}", exc.detail)
    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests. Please try again later.", "code": "RATE_LIMITED"},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    configure_logger(settings.LOG_LEVEL, settings.LOG_JSON)
    if settings.DEBUG:
        # Migrations own the schema outside of local development
        await create_all()
    logger.info("{} started", settings.APP_NAME)
    yield
    # Shutdown
    logger.info("{} stopped", settings.APP_NAME)


app = FastAPI(
    title=settings.APP_NAME,
    description="""
## Carbon Accounting SaaS

Multi-tenant API for greenhouse gas accounting.

### Methodologies
- **DEFRA**: UK Government conversion factors, per-gas breakdown by scope
- **GHG Protocol**: Corporate Standard inventories (Scope 1, 2 and 3)
- **ISO 14064-1**: Organization inventories with reference factors
- **IPCC 2006**: National-style inventories by sector, category and tier
- **ISCC EU / PLUS**: Biofuel GHG savings (E = eec + el + ep + etd - eccr)
- **Carbon projects**: Step-by-step cultivation and land-use worksheets

### Authentication
```
POST /api/v1/auth/login
Body: { "email": "...", "password": "..." }
```
Send the returned access token as `Authorization: Bearer <token>`.
Refresh it with `POST /api/v1/auth/refresh`.

### Tenants
Users join organizations by creating them or by accepting an invitation.
Every project belongs to a tenant and is visible to its members only.
    """,
    version="1.0.0",
    lifespan=lifespan,
)

# Rate limiter state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Typed errors and last-resort 500s
app.add_exception_handler(AppError, handle_app_errors)
app.middleware("http")(handle_broad_exceptions)

# CORS middleware with configured origins
cors_origins = [origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.APP_NAME}


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "service": settings.APP_NAME,
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
    }
