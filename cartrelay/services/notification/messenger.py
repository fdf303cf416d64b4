"""Firebase Cloud Messaging client wrapper used by the notification handler."""

import asyncio
from typing import Any

import firebase_admin
from firebase_admin import credentials, messaging

from cartrelay.common.config import RelaySettings


def init_firebase(config: RelaySettings) -> firebase_admin.App:
    """Initialize the default Firebase app from service-account settings."""

    cert = credentials.Certificate(config.firebase_service_account())
    return firebase_admin.initialize_app(cert)


class FirebaseMessenger:
    """Sends one push message per call without blocking the event loop."""

    def __init__(self, app: firebase_admin.App | None = None) -> None:
        self.app = app

    @staticmethod
    def to_message(message: dict[str, Any]) -> messaging.Message:
        notification = message.get("notification") or {}
        return messaging.Message(
            notification=messaging.Notification(
                title=notification.get("title"),
                body=notification.get("body"),
            ),
            token=message.get("token"),
        )

    async def send(self, message: dict[str, Any]) -> str:
        """Deliver `message` and return the provider's message id."""

        return await asyncio.to_thread(messaging.send, self.to_message(message), False, self.app)
