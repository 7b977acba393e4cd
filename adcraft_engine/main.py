"""
Main FastAPI application for the AdCraft content engine
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from slowapi.errors import RateLimitExceeded

from adcraft_engine.config import settings, validate_required_config, is_placeholder_api_key
from adcraft_engine.logging_config import logger
from adcraft_engine.routers import generate
from adcraft_engine.services.identity import PresenceIdentityVerifier

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Starting AdCraft engine", environment=settings.ENVIRONMENT)

    # Validate required configuration
    validate_required_config()

    # Initialize Sentry if DSN provided
    if settings.SENTRY_DSN:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            environment=settings.SENTRY_ENVIRONMENT,
            traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
            integrations=[FastApiIntegration()],
        )
        logger.info("Sentry initialized")

    if is_placeholder_api_key(settings.GEMINI_API_KEY):
        logger.error("GEMINI_API_KEY not configured!")

    logger.info(
        "AdCraft engine started",
        text_model=settings.GEMINI_TEXT_MODEL,
        image_model=settings.GEMINI_IMAGE_MODEL
    )

    yield

    logger.info("Shutting down AdCraft engine")


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Throttled requests fail like any other generation failure"""
    logger.warning("Rate limit exceeded", path=request.url.path, limit=exc.detail)
    return JSONResponse(
        status_code=500,
        content={"error": f"Rate limit exceeded: {exc.detail}"}
    )


# Create FastAPI app
app = FastAPI(
    title="AdCraft Content Engine",
    description="AI-powered marketing copy, page copy and brand image generation",
    version=VERSION,
    lifespan=lifespan
)

# Rate limiter lives on the generate router
app.state.limiter = generate.limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

ALLOWED_ORIGINS = [
    origin.strip()
    for origin in settings.CORS_ORIGINS.split(",")
    if origin.strip()
]

# Wildcard origins in development, configured origins otherwise
if settings.ENVIRONMENT == "development" or settings.DEBUG:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,  # Cannot use credentials with wildcard origins
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "AdCraft Content Engine",
        "version": VERSION,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check"""
    gemini_ok = not is_placeholder_api_key(settings.GEMINI_API_KEY)
    return {
        "status": "healthy" if gemini_ok else "degraded",
        "version": VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {
            "gemini_api": {
                "configured": gemini_ok,
                "status": "ok" if gemini_ok else "missing"
            }
        }
    }


@app.get("/readiness")
async def readiness_check():
    """Kubernetes readiness probe"""
    health = await health_check()
    if health["checks"]["gemini_api"]["status"] == "ok":
        return {"status": "ready"}
    return JSONResponse(
        status_code=503,
        content={"status": "not_ready", "checks": health["checks"]}
    )


# Include routers
app.include_router(generate.router, tags=["Generation"])


# Error handlers
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies share the generic failure surface"""
    fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})

    # The identity gate still comes first for bodies that fail validation
    uid = exc.body.get("uid") if isinstance(exc.body, dict) else None
    if not isinstance(uid, str) or not PresenceIdentityVerifier().verify(uid):
        logger.warning("Invalid request body without caller identity", path=request.url.path, fields=fields)
        return JSONResponse(status_code=401, content={"error": "Unauthorized"})

    logger.warning("Invalid request body", path=request.url.path, fields=fields)
    return JSONResponse(
        status_code=500,
        content={"error": f"Invalid request: {', '.join(fields)}"}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler with Sentry integration"""
    logger.error(
        "Unhandled exception",
        error=str(exc),
        path=request.url.path,
        exc_info=True
    )

    if settings.SENTRY_DSN:
        sentry_sdk.capture_exception(exc)

    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error"}
    )


if __name__ == "__main__":
    import uvicorn
    # Only enable reload in development
    reload_enabled = settings.ENVIRONMENT == "development" or settings.DEBUG
    uvicorn.run("adcraft_engine.main:app", host="0.0.0.0", port=8001, reload=reload_enabled)
