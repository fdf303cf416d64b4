"""Unit tests for cart validation, rounding and gross-amount calculation."""

import asyncio

import pytest

from cartrelay.common.errors import CartItemError, InvalidCartError
from cartrelay.services.transaction.service import (
    build_transaction,
    create_transaction_token,
    extract_items,
    normalize_item,
    round_half_up,
)


def _clock():
    return 1_700_000_000_000


def test_rounds_price_and_quantity_and_sums_gross_amount():
    items = [
        {"productName": "A", "price": 10.4, "quantity": 2},
        {"productName": "B", "price": 5, "quantity": 1.6},
    ]

    transaction = build_transaction(items, _clock)

    assert [(item.price, item.quantity) for item in transaction.item_details] == [(10, 2), (5, 2)]
    assert transaction.gross_amount == 30
    assert transaction.order_id == "ORDER-1700000000000"


def test_gross_amount_is_exact_integer_sum():
    items = [{"productName": f"p{i}", "price": 999_999.6, "quantity": 3} for i in range(7)]

    transaction = build_transaction(items, _clock)

    assert transaction.gross_amount == 7 * 1_000_000 * 3
    assert isinstance(transaction.gross_amount, int)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (2.5, 3), (-2.5, -3), (0.49999999999999994, 0), (1.5, 2), (7, 7), (-0.4, 0),
        (10**30, 10**30), (1e30, int(1e30)),
    ],
)
def test_round_half_up_rounds_halves_away_from_zero_at_any_magnitude(value, expected):
    assert round_half_up(value) == expected


def test_missing_id_gets_time_based_fallback():
    item = normalize_item({"productName": "A", "price": 1, "quantity": 1}, _clock)

    assert item.id == "item-1700000000000"


def test_supplied_id_is_kept():
    item = normalize_item({"id": 42, "productName": "A", "price": 1, "quantity": 1}, _clock)

    assert item.id == 42
    assert item.name == "A"


def test_zero_and_negative_values_are_accepted():
    transaction = build_transaction([{"productName": "Refund", "price": -100, "quantity": 0}], _clock)

    assert transaction.gross_amount == 0


@pytest.mark.parametrize(
    "item",
    [
        {"price": 1, "quantity": 1},
        {"productName": "", "price": 1, "quantity": 1},
        {"productName": "A", "price": "10", "quantity": 1},
        {"productName": "A", "price": 1, "quantity": None},
        {"productName": "A", "price": True, "quantity": 1},
        {"productName": "A", "price": float("inf"), "quantity": 1},
        {"productName": "A", "price": 1, "quantity": float("nan")},
        "not-an-item",
    ],
)
def test_invalid_item_raises(item):
    with pytest.raises(CartItemError):
        normalize_item(item, _clock)


@pytest.mark.parametrize("payload", [{}, {"items": []}, {"items": "abc"}, {"items": {"a": 1}}, [], None])
def test_extract_items_rejects_missing_or_empty(payload):
    with pytest.raises(InvalidCartError, match="Invalid or empty items array"):
        extract_items(payload)


def test_gateway_receives_snap_parameter(gateway):
    gateway.token = "tok"
    items = [{"id": "sku-1", "productName": "A", "price": 10.4, "quantity": 2}]

    token = asyncio.run(create_transaction_token(items, gateway, _clock))

    assert token == "tok"
    assert gateway.calls == [
        {
            "transaction_details": {"order_id": "ORDER-1700000000000", "gross_amount": 20},
            "item_details": [{"id": "sku-1", "name": "A", "price": 10, "quantity": 2}],
        }
    ]


def test_bad_item_anywhere_prevents_gateway_call(gateway):
    items = [{"productName": "A", "price": 1, "quantity": 1}, {"productName": "B", "price": "x", "quantity": 1}]

    with pytest.raises(CartItemError):
        asyncio.run(create_transaction_token(items, gateway, _clock))
    assert gateway.calls == []
