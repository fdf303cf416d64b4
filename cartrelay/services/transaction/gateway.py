"""Midtrans Snap client wrapper used by the transaction handler."""

import asyncio
from typing import Any

import midtransclient

from cartrelay.common.config import RelaySettings


class MidtransGateway:
    """Issues Snap transaction tokens without blocking the event loop."""

    def __init__(self, snap: midtransclient.Snap) -> None:
        self.snap = snap

    @classmethod
    def from_settings(cls, config: RelaySettings) -> "MidtransGateway":
        snap = midtransclient.Snap(
            is_production=config.midtrans_is_production,
            server_key=config.midtrans_server_key,
            client_key=config.midtrans_client_key,
        )
        return cls(snap)

    async def create_transaction_token(self, parameter: dict[str, Any]) -> str:
        # The SDK call is blocking and has no timeout of its own.
        return await asyncio.to_thread(self.snap.create_transaction_token, parameter)
