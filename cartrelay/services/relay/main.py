"""Process entrypoint: credential setup, collaborator clients and the listener."""

import uvicorn

from cartrelay.common.config import settings
from cartrelay.common.logging import configure_logging, logger
from cartrelay.common.startup import ensure_payment_credentials, log_startup_config
from cartrelay.common.tracing import instrument_app, setup_tracing
from cartrelay.services.notification.messenger import FirebaseMessenger, init_firebase
from cartrelay.services.relay.app import create_app
from cartrelay.services.transaction.gateway import MidtransGateway

configure_logging()
setup_tracing(settings.service_name, settings.otel_exporter_otlp_endpoint)
log_startup_config(
    settings.service_name,
    [
        "SERVICE_NAME",
        "PORT",
        "CORS_ORIGIN",
        "MIDTRANS_IS_PRODUCTION",
        "SECRET",
        "NEXT_PUBLIC_CLIENT",
        "FIREBASE_PROJECT_ID",
        "FIREBASE_CLIENT_EMAIL",
        "FIREBASE_PRIVATE_KEY",
    ],
)
firebase_app = init_firebase(settings)
ensure_payment_credentials(settings)

app = create_app(settings, MidtransGateway.from_settings(settings), FirebaseMessenger(firebase_app))
instrument_app(app)


def run() -> None:
    """Serve the relay on the configured port."""

    logger.info("Server is running on http://localhost:%s", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
