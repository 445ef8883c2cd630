# contact_relay/main.py

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded

from contact_relay.common.config import Settings, load_settings
from contact_relay.common.logging_config import configure_logging
from contact_relay.common.rate_limit import limiter, rate_limit_exceeded_handler
from contact_relay.common.security import OriginGuardMiddleware, security_headers_middleware
from contact_relay.common.utils.email_service import ResendClient
from contact_relay.router.routers import include_routers

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, email_client: Optional[ResendClient] = None) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(
        title="Contact Relay",
        description="Forwards contact form submissions by email through Resend.",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.email_client = email_client or ResendClient(settings)

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # Middleware added last runs first: security headers wrap the origin guard
    app.add_middleware(OriginGuardMiddleware, allowed_origins=settings.allowed_origins)
    app.middleware("http")(security_headers_middleware)

    include_routers(app)
    return app


def log_startup(settings: Settings) -> None:
    logger.info("contact-relay on :%s", settings.PORT)
    logger.info("Resend key: %s", settings.masked_api_key)
    logger.info("From: %s -> To: %s", settings.FROM_EMAIL, settings.TO_EMAIL)
    logger.info("Allowed origins: %s", ", ".join(settings.allowed_origins) or "(any)")


configure_logging()

# Served by `uvicorn contact_relay.main:app`; exits at import if the configuration is invalid
app = create_app()


def run() -> None:
    settings = app.state.settings
    log_startup(settings)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
