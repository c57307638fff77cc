from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Final

import httpx

from .config import Settings
from .maytapi_client import ProviderFailure, send_message
from .messages import OutboundMessageRequest

log = logging.getLogger("maytapi_relay.pipeline")

MISSING_INPUT_MESSAGE: Final[str] = "Recipient number and message are required."
PROVIDER_ERROR_MESSAGE: Final[str] = (
    "Maytapi reported an error. Check their response data for details."
)
CONNECTION_ERROR_MESSAGE: Final[str] = (
    "Failed to connect to Maytapi API. Check server logs for details."
)


@dataclass
class RelayResult:
    status_code: int
    body: dict[str, Any]


def _reports_success(body: Any) -> bool:
    return isinstance(body, dict) and bool(body.get("success"))


async def forward_message(
    payload: OutboundMessageRequest,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> RelayResult:
    """
    Core send-message logic:
    - normalizes the recipient and rejects empty input with a 400
    - makes a single call to Maytapi
    - maps the outcome to 200 (provider success) or 500 (anything else)
    """
    recipient = payload.recipient
    if not recipient or not payload.message:
        log.warning("Rejected send-message request: recipient or message missing")
        return RelayResult(400, {"success": False, "message": MISSING_INPUT_MESSAGE})

    outcome = await send_message(settings, recipient, payload.message, transport=transport)

    if isinstance(outcome, ProviderFailure):
        log.error("Network or API connection error: %s", outcome.details)
        return RelayResult(
            500,
            {"success": False, "message": CONNECTION_ERROR_MESSAGE, "details": outcome.details},
        )

    if _reports_success(outcome.body):
        log.info(
            "Message successfully queued to %s. Maytapi ID: %s",
            recipient,
            outcome.body.get("message_id"),
        )
        return RelayResult(
            200,
            {"success": True, "message": f"Message sent to {recipient}.", "data": outcome.body},
        )

    log.error("Maytapi reported failure: %s", outcome.body)
    return RelayResult(
        500,
        {"success": False, "message": PROVIDER_ERROR_MESSAGE, "details": outcome.body},
    )
