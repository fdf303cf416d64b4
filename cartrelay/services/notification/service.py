"""Order-processed push notifications."""

from typing import Any

from cartrelay.common.logging import logger

NOTIFICATION_TITLE = "Pembayaran Berhasil!"


def _display_id(value: Any) -> Any:
    # JSON numbers like 7.0 decode to float; show them as 7.
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def build_message(token: Any, order_details: Any) -> dict[str, Any]:
    """Fixed-shape notification for one processed order.

    Neither the token nor `order_details["id"]` is validated; a missing id
    shows up as `None` in the body text.
    """

    details = order_details if isinstance(order_details, dict) else {}
    return {
        "notification": {
            "title": NOTIFICATION_TITLE,
            "body": f"Order #{_display_id(details.get('id'))} telah diproses",
        },
        "token": token,
    }


async def send_order_notification(token: Any, order_details: Any, messenger) -> Any:
    """Send the order notification and return the messenger's response."""

    message = build_message(token, order_details)
    logger.info("notification_message=%s", message)
    return await messenger.send(message)
