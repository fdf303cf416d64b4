"""Cart validation, normalization and token issuance.

A cart is checked and normalized in full before the gateway is called, so a
bad item anywhere in the list means no token request is sent at all.
"""

import math
import time
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable

from cartrelay.common.errors import CartItemError, InvalidCartError
from cartrelay.common.logging import logger, order_id_ctx
from cartrelay.services.transaction.schemas import NormalizedItem, TransactionRequest

ITEM_FIELDS_MESSAGE = "Each item must include productName, price (number), and quantity (number)."


def epoch_millis() -> int:
    return int(time.time() * 1000)


def round_half_up(value: int | float) -> int:
    """Round to the nearest integer, halves away from zero."""

    return int(Decimal(value).to_integral_value(rounding=ROUND_HALF_UP))


def _is_number(value: Any) -> bool:
    # JSON true/false decode to bool, which is an int subclass; json also
    # accepts Infinity and NaN literals.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isinstance(value, int) or math.isfinite(value)


def extract_items(payload: Any) -> list[Any]:
    """Return the `items` list or raise `InvalidCartError`."""

    items = payload.get("items") if isinstance(payload, dict) else None
    if not isinstance(items, list) or not items:
        raise InvalidCartError("Invalid or empty items array")
    return items


def normalize_item(item: Any, now_ms: Callable[[], int] = epoch_millis) -> NormalizedItem:
    """Validate one cart item and round its price and quantity."""

    if not isinstance(item, dict):
        raise CartItemError(ITEM_FIELDS_MESSAGE)
    product_name = item.get("productName")
    price = item.get("price")
    quantity = item.get("quantity")
    if not product_name or not _is_number(price) or not _is_number(quantity):
        raise CartItemError(ITEM_FIELDS_MESSAGE)

    return NormalizedItem(
        id=item.get("id") or f"item-{now_ms()}",
        name=product_name,
        price=round_half_up(price),
        quantity=round_half_up(quantity),
    )


def build_transaction(items: list[Any], now_ms: Callable[[], int] = epoch_millis) -> TransactionRequest:
    """Normalize every item and compute the gross amount."""

    order_id = f"ORDER-{now_ms()}"
    item_details = [normalize_item(item, now_ms) for item in items]
    gross_amount = sum(item.price * item.quantity for item in item_details)
    return TransactionRequest(order_id=order_id, gross_amount=gross_amount, item_details=item_details)


async def create_transaction_token(
    items: list[Any],
    gateway,
    now_ms: Callable[[], int] = epoch_millis,
) -> str:
    """Build the transaction for `items` and return the gateway's token."""

    transaction = build_transaction(items, now_ms)
    order_token = order_id_ctx.set(transaction.order_id)
    try:
        parameter = transaction.to_gateway_parameter()
        logger.info("midtrans_parameter=%s", parameter)
        token = await gateway.create_transaction_token(parameter)
        logger.info("transaction_token=%s", token)
        return token
    finally:
        order_id_ctx.reset(order_token)
