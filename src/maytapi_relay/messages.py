from __future__ import annotations

import re
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, field_validator

_STRIP_RE: Final[re.Pattern[str]] = re.compile(r"[+\s]")


class OutboundMessageRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    countryCode: str = ""
    phoneNumber: str = ""
    message: str = ""

    @field_validator("countryCode", "phoneNumber", "message", mode="before")
    @classmethod
    def _coerce_to_str(cls, value: Any) -> str:
        # Form posts and loose JSON clients send numbers or nulls here
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @property
    def recipient(self) -> str:
        return normalize_recipient(self.countryCode, self.phoneNumber)


def normalize_recipient(country_code: str, phone_number: str) -> str:
    """
    Join country code and number into the form Maytapi expects.

    Every '+' and whitespace character is removed, e.g.
    ("+91", " 98765 43210") -> "919876543210".
    """
    return _STRIP_RE.sub("", f"{country_code}{phone_number}")
