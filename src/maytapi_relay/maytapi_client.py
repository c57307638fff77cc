from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from .config import Settings

log = logging.getLogger("maytapi_relay.maytapi_client")


@dataclass(frozen=True)
class ProviderReply:
    """Maytapi answered with a JSON body (which may still report failure)."""

    body: Any


@dataclass(frozen=True)
class ProviderFailure:
    """The call itself failed: transport error, non-2xx status or unusable body."""

    details: Any


SendOutcome = ProviderReply | ProviderFailure


def build_headers(settings: Settings) -> dict[str, str]:
    return {
        "x-maytapi-key": settings.maytapi_token,
        "Content-Type": "application/json",
    }


def _error_details(response: httpx.Response, exc: Exception) -> Any:
    try:
        body = response.json()
    except ValueError:
        body = None
    if body not in (None, "", {}, []):
        return body
    return response.text or str(exc) or exc.__class__.__name__


async def send_message(
    settings: Settings,
    to_number: str,
    message: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> SendOutcome:
    """
    Send a plain text WhatsApp message through the configured Maytapi instance.

    Exactly one POST is made; there is no retry and the httpx default timeout
    applies. Errors never propagate: they come back as ProviderFailure.
    """
    payload = {"to_number": to_number, "message": message}

    async with httpx.AsyncClient(transport=transport) as client:
        try:
            response = await client.post(
                settings.send_message_url,
                json=payload,
                headers=build_headers(settings),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            log.debug("Maytapi returned HTTP %s", exc.response.status_code)
            return ProviderFailure(details=_error_details(exc.response, exc))
        except httpx.HTTPError as exc:
            return ProviderFailure(details=str(exc) or exc.__class__.__name__)

    try:
        return ProviderReply(body=response.json())
    except ValueError:
        return ProviderFailure(details=response.text or "Maytapi returned an empty response body")
