"""Derived transaction shapes handed to the payment gateway."""

from typing import Any

from pydantic import BaseModel


class NormalizedItem(BaseModel):
    """One cart line with whole-number price and quantity."""

    id: Any
    name: Any
    price: int
    quantity: int


class TransactionRequest(BaseModel):
    """Order id, gross amount and item details for one token request."""

    order_id: str
    gross_amount: int
    item_details: list[NormalizedItem]

    def to_gateway_parameter(self) -> dict[str, Any]:
        """Build the Snap `create_transaction_token` parameter."""

        return {
            "transaction_details": {
                "order_id": self.order_id,
                "gross_amount": self.gross_amount,
            },
            "item_details": [item.model_dump() for item in self.item_details],
        }
