"""HTTP surface for the transaction and notification relays.

`create_app` takes the settings and both collaborator clients explicitly so
the same routes can be served with the real SDK wrappers or with test fakes.
"""

from time import perf_counter
from typing import Any, Callable
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cartrelay.common.config import RelaySettings
from cartrelay.common.errors import InvalidCartError, describe_error
from cartrelay.common.logging import logger, trace_id_ctx
from cartrelay.common.metrics import (
    http_request_duration_seconds,
    http_requests_total,
    metrics_response,
    notification_failures_total,
    notifications_sent_total,
    transaction_token_failures_total,
    transaction_token_latency_seconds,
    transaction_token_requests_total,
)
from cartrelay.services.notification.service import send_order_notification
from cartrelay.services.transaction.service import create_transaction_token, epoch_millis, extract_items

TOKEN_FALLBACK_ERROR = "Failed to create transaction token"


async def read_json_body(request: Request) -> dict[str, Any]:
    """Parsed JSON object body, or an empty dict for anything else."""

    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def create_app(
    config: RelaySettings,
    gateway,
    messenger,
    now_ms: Callable[[], int] = epoch_millis,
) -> FastAPI:
    """Build the relay app around already-initialized collaborators."""

    app = FastAPI(title="Cart Relay")
    app.state.settings = config
    app.state.gateway = gateway
    app.state.messenger = messenger
    app.state.now_ms = now_ms
    service_name = config.service_name

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.cors_origin],
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Authorization"],
        allow_credentials=True,
    )

    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next):
        """Bind a trace id and record request count and latency."""

        trace_token = trace_id_ctx.set(request.headers.get("x-correlation-id") or str(uuid4()))
        start = perf_counter()
        route = request.url.path
        method = request.method
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            route_obj = request.scope.get("route")
            if route_obj is not None and getattr(route_obj, "path", None):
                route = route_obj.path
            return response
        finally:
            elapsed = max(0.0, perf_counter() - start)
            http_request_duration_seconds.labels(service=service_name, route=route, method=method).observe(elapsed)
            http_requests_total.labels(
                service=service_name,
                route=route,
                method=method,
                status_code=str(status_code),
            ).inc()
            trace_id_ctx.reset(trace_token)

    @app.post("/create-transaction")
    async def create_transaction(request: Request):
        """Normalize the cart and return a Snap transaction token."""

        payload = await read_json_body(request)
        try:
            items = extract_items(payload)
        except InvalidCartError as exc:
            transaction_token_failures_total.labels(service=service_name, reason="invalid_cart").inc()
            return JSONResponse(status_code=400, content={"error": str(exc)})

        transaction_token_requests_total.labels(service=service_name).inc()
        try:
            with transaction_token_latency_seconds.labels(service=service_name).time():
                token = await create_transaction_token(items, request.app.state.gateway, request.app.state.now_ms)
        except Exception as exc:
            logger.error("midtrans_error: %s", exc)
            transaction_token_failures_total.labels(service=service_name, reason=type(exc).__name__).inc()
            return JSONResponse(status_code=500, content={"error": str(exc) or TOKEN_FALLBACK_ERROR})
        return {"token": token}

    @app.post("/api/notify")
    async def notify(request: Request):
        """Push an order-processed notification to one device token."""

        payload = await read_json_body(request)
        try:
            response = await send_order_notification(
                payload.get("token"),
                payload.get("orderDetails"),
                request.app.state.messenger,
            )
        except Exception as exc:
            logger.error("notification_error: %s", exc)
            notification_failures_total.labels(service=service_name).inc()
            return JSONResponse(status_code=500, content={"success": False, "error": describe_error(exc)})
        notifications_sent_total.labels(service=service_name).inc()
        return {"success": True, "response": response}

    @app.get("/health")
    def health():
        """Container health probe endpoint."""

        return {"ok": True}

    @app.get("/metrics")
    def metrics():
        """Prometheus scrape endpoint."""

        return metrics_response()

    return app
