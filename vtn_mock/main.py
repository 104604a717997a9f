"""
Mock VTN - OpenADR 3 test server for VEN client implementations.

Features:
- Event polling with a seeded smoke-test event
- Subscription CRUD and webhook dispatch of synthesized events
- Structured logging with correlation IDs
- Prometheus metrics
- Health checks (liveness and readiness)
"""
import httpx
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from . import __version__
from .api import admin_router, auth_router, router, subscriptions_router
from .api.errors import register_error_handlers
from .auth import BearerAuthorizer
from .auth.token_grant import StaticTokenIssuer
from .config import Settings, get_settings
from .health import HealthChecker
from .logging import SERVICE_NAME, get_logger, setup_logging
from .metrics import Metrics
from .middleware import CorrelationIdMiddleware, MetricsMiddleware, ValidationMiddleware
from .services import DispatchEngine, WebhookSender
from .storage import EventStore, SubscriptionRegistry
from .storage.seed import seed_event

logger = get_logger()


def create_app(
    settings: Settings | None = None,
    webhook_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Build an application with its own stores, metrics and dispatcher.

    Args:
        settings: Configuration (defaults to the environment)
        webhook_transport: httpx transport for outbound webhooks, for tests
    """
    settings = settings or get_settings()
    setup_logging(json_output=settings.LOG_JSON, service_name=SERVICE_NAME, level=settings.LOG_LEVEL)

    metrics = Metrics(service_name=SERVICE_NAME, version=__version__)
    event_store = EventStore()
    if settings.SEED_EVENT:
        event_store.append(seed_event())
    subscriptions = SubscriptionRegistry()
    sender = WebhookSender(
        timeout=settings.WEBHOOK_TIMEOUT_SECONDS,
        transport=webhook_transport,
        metrics=metrics,
    )
    health_checker = HealthChecker(
        service_name=SERVICE_NAME,
        version=__version__,
        store_sizes=lambda: {"events": len(event_store), "subscriptions": len(subscriptions)},
    )

    app = FastAPI(
        title="Mock VTN",
        version=__version__,
        description="OpenADR 3 VTN stand-in with operator-controlled events and webhook dispatch",
    )
    app.state.settings = settings
    app.state.metrics = metrics
    app.state.event_store = event_store
    app.state.subscriptions = subscriptions
    app.state.dispatcher = DispatchEngine(event_store, subscriptions, sender=sender, metrics=metrics)
    app.state.authorizer = BearerAuthorizer(settings.bearer_header)
    app.state.token_issuer = StaticTokenIssuer(settings.BASIC_AUTH_HEADER, settings.DUMMY_TOKEN)

    # Last added runs first: metrics, then correlation ID, then body validation
    app.add_middleware(ValidationMiddleware, max_body_size=settings.MAX_BODY_SIZE)
    app.add_middleware(CorrelationIdMiddleware)
    app.add_middleware(MetricsMiddleware, metrics=metrics)

    register_error_handlers(app)

    app.include_router(router.router)
    app.include_router(auth_router.router)
    app.include_router(subscriptions_router.router)
    app.include_router(admin_router.router)

    app.mount("/metrics", make_asgi_app(registry=metrics.registry))

    @app.get("/health")
    async def health():
        """Liveness probe."""
        logger.debug("health_check_liveness")
        return health_checker.liveness()

    @app.get("/health/ready")
    async def health_ready():
        """Readiness probe; 503 when disk or memory is exhausted."""
        logger.debug("health_check_readiness")
        result = health_checker.readiness()
        status_code = 200 if result["status"] == "ready" else 503
        return JSONResponse(result, status_code=status_code)

    @app.on_event("startup")
    async def startup_event():
        logger.info(
            "service_starting",
            version=__version__,
            env=settings.ENV,
            seeded_events=len(event_store),
            callback_configured=settings.DEFAULT_CALLBACK_URL is not None,
        )

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("service_stopping")
        metrics.app_up.labels(service=SERVICE_NAME, version=__version__).set(0)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "vtn_mock.main:app",
        host=get_settings().SERVICE_HOST,
        port=get_settings().SERVICE_PORT,
    )
