"""Post a sample cart (and optionally a notification) to a running relay.

Useful for checking sandbox credentials end to end after a deploy.
"""

import argparse
import asyncio
import json
import time
from pathlib import Path

import httpx

SAMPLE_ITEMS = [
    {"id": "sku-1", "productName": "Kopi Susu", "price": 18000, "quantity": 2},
    {"productName": "Roti Bakar", "price": 15000.4, "quantity": 1},
]


async def run(base_url: str, items: list[dict], device_token: str | None) -> int:
    """Call both endpoints and print status and body; return an exit code."""

    exit_code = 0
    async with httpx.AsyncClient(timeout=30.0) as client:
        started = time.perf_counter()
        resp = await client.post(f"{base_url}/create-transaction", json={"items": items})
        latency_ms = (time.perf_counter() - started) * 1000
        print(f"create-transaction status={resp.status_code} latency_ms={latency_ms:.1f} body={resp.text}")
        if resp.status_code != 200:
            exit_code = 1

        if device_token:
            order_id = f"SMOKE-{int(time.time())}"
            resp = await client.post(
                f"{base_url}/api/notify",
                json={"token": device_token, "orderDetails": {"id": order_id}},
            )
            print(f"notify status={resp.status_code} body={resp.text}")
            if resp.status_code != 200:
                exit_code = 1
    return exit_code


def main() -> None:
    """Parse CLI args and run the smoke check."""

    parser = argparse.ArgumentParser(description="Smoke-test a running cart relay.")
    parser.add_argument("--base-url", default="http://localhost:3000")
    parser.add_argument("--items-file", default=None, help="Path to JSON list of cart items")
    parser.add_argument("--device-token", default=None, help="FCM token; enables the notify call")
    args = parser.parse_args()

    items = json.loads(Path(args.items_file).read_text()) if args.items_file else SAMPLE_ITEMS
    raise SystemExit(asyncio.run(run(args.base_url.rstrip("/"), items, args.device_token)))


if __name__ == "__main__":
    main()
