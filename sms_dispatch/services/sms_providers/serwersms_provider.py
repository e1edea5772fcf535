from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from .. import exceptions
from ..integrations import ConfigResolver
from .base import BaseSMSProvider, OutgoingRequest, ProviderProfile, SMSMessage
from .response import ProviderResponse, is_success_status, log_then_raise, parse_body


@dataclass(frozen=True, slots=True)
class SerwerSmsProfile(ProviderProfile):
    username: str = ""
    password: str = ""
    sender: str = ""
    test: bool = False


class SerwerSmsSMSProvider(BaseSMSProvider):
    """Serwer SMS JSON API with the account credentials in the request body.

    Failures come back as an ``error`` object; its code is translated through
    ``error_codes`` before being logged.
    """

    name = "SerwerSms"
    label = "Serwer SMS"
    verify_tls = False

    BASE_URL = "https://api2.serwersms.pl"
    TIMEOUT = 30
    SYSTEM = "client_php"

    def __init__(self, *, error_codes: Mapping[int, str] | None = None):
        self.error_codes = dict(error_codes or {})

    def resolve_profile(self, resolver: ConfigResolver, message: SMSMessage) -> SerwerSmsProfile:
        username = resolver.require("serwerSmsUsername", "Serwer SMS: No username.")
        password = resolver.require("serwerSmsPassword", "Serwer SMS: No password.")
        return SerwerSmsProfile(
            base_url=resolver.resolve_url("serwerSmsBaseUrl", "serwerSmsBaseUrl", self.BASE_URL),
            timeout=resolver.resolve_timeout("serwerSmsTimeout", "serwerSmsTimeout", self.TIMEOUT),
            username=username,
            password=password,
            sender=message.from_number or resolver.resolve("serwerSmsSender", default=""),
            test=resolver.resolve_flag("serwerSmsTest"),
        )

    def build_request(self, profile: SerwerSmsProfile, message: SMSMessage, to_number: str) -> OutgoingRequest:
        return OutgoingRequest(
            method="POST",
            url=f"{profile.base_url}/messages/send_sms",
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            json={
                "system": self.SYSTEM,
                "username": profile.username,
                "password": profile.password,
                "sender": profile.sender,
                "test": profile.test,
                "text": message.body,
                "phone": self.format_number(to_number),
            },
        )

    def interpret_response(self, response: ProviderResponse, log: logging.Logger) -> None:
        body = parse_body(response.text) or {}
        error = body.get("error")
        if isinstance(error, dict):
            self._process_error(error, response.status_code, log)

        code = response.status_code
        if code and not is_success_status(code):
            raise exceptions.ProviderError(f"Serwer SMS sending error. Code: {code}", code=code)

    def _process_error(self, error: dict[str, Any], status_code: int, log: logging.Logger) -> None:
        try:
            code = int(error.get("code"))
        except (TypeError, ValueError):
            code = status_code
        error_type = error.get("type") or ""
        message = self.error_codes.get(code) or error.get("message") or ""

        exc = exceptions.ProviderError(
            f"Serwer SMS sending error. Code: {code}",
            code=code,
            status_code=status_code,
            provider_message=message or None,
        )
        if message:
            log_then_raise(log, f"Serwer SMS ({error_type}): [{code}] {message}", exc)
        raise exc
