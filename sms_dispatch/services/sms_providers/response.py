from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, NoReturn

from .. import exceptions


@dataclass(frozen=True, slots=True)
class ProviderResponse:
    """Raw outcome of one HTTP call; ``status_code`` is 0 when nothing came back."""

    status_code: int
    text: str = ""
    timed_out: bool = False

    @property
    def is_success(self) -> bool:
        return is_success_status(self.status_code)


def is_success_status(status_code: int) -> bool:
    return 200 <= status_code < 300


def parse_body(text: str | bytes | None) -> dict[str, Any] | None:
    """Decode a JSON object body, returning None when there is none."""

    if not text:
        return None
    try:
        data = json.loads(text)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def log_then_raise(log: logging.Logger, text: str, error: exceptions.SMSDeliveryError) -> NoReturn:
    try:
        log.error(text)
    finally:
        raise error


def raise_for_message_error(response: ProviderResponse, *, label: str, log: logging.Logger) -> None:
    """Shared check for gateways reporting failures as a non-2xx status with a ``message`` field."""

    code = response.status_code
    if not code or response.is_success:
        return

    body = parse_body(response.text) or {}
    message = body.get("message")
    message = str(message) if message not in (None, "") else None

    error = exceptions.ProviderError(
        f"{label} SMS sending error. Code: {code}.",
        code=code,
        provider_message=message,
    )
    if message:
        log_then_raise(log, f"{label} SMS sending error. Message: {message}", error)
    raise error
