from __future__ import annotations

import logging
from dataclasses import dataclass

from .. import exceptions
from ..integrations import ConfigResolver
from .base import BaseSMSProvider, OutgoingRequest, ProviderProfile, SMSMessage
from .response import ProviderResponse, log_then_raise, parse_body

SUCCESS_CODE = 100

# Non-success values of the "success" response field.
ERROR_MESSAGES = {
    201: "The sender is invalid. A maximum of 11 alphanumeric or 16 numeric characters are allowed.",
    202: "The recipient number is invalid.",
    301: "The variable to is not set.",
    305: "The variable text is not set.",
    401: "The variable text is too long.",
    402: "The Reload Lock prevents sending this SMS as it has already been sent within the last 180 seconds.",
    403: "The maximum limit for this number per day has been reached.",
    500: "The account has too little credit available.",
    600: "The carrier delivery failed.",
    700: "An unknown error occurred.",
    900: "The authentication failed. Please check your API key.",
    902: "The API key has no access rights to this endpoint.",
    903: "The server IP is wrong.",
}


@dataclass(frozen=True, slots=True)
class Sms77Profile(ProviderProfile):
    api_key: str = ""
    sender: str | None = None


def _success_code(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


class Sms77SMSProvider(BaseSMSProvider):
    name = "Sms77"
    label = "sms77"

    BASE_URL = "https://gateway.sms77.io/api"
    TIMEOUT = 10

    def resolve_profile(self, resolver: ConfigResolver, message: SMSMessage) -> Sms77Profile:
        api_key = resolver.require("sms77ApiKey", "No sms77 Auth Token.")
        return Sms77Profile(
            base_url=resolver.resolve_url("apiBaseUrl", "sms77BaseUrl", self.BASE_URL),
            timeout=resolver.resolve_timeout("sms77SmsSendTimeout", "sms77SmsSendTimeout", self.TIMEOUT),
            api_key=api_key,
            sender=resolver.resolve("sms77From"),
        )

    def build_request(self, profile: Sms77Profile, message: SMSMessage, to_number: str) -> OutgoingRequest:
        return OutgoingRequest(
            method="POST",
            url=f"{profile.base_url}/sms",
            headers={
                "X-Api-Key": profile.api_key,
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            json={
                "from": profile.sender,
                "text": message.body,
                "to": self.format_number(to_number),
            },
        )

    def interpret_response(self, response: ProviderResponse, log: logging.Logger) -> None:
        code = response.status_code
        if not code:
            return
        if code != 200:
            raise exceptions.UnexpectedStatus(f"sms77: Unexpected HTTP code {code}", status_code=code)

        body = parse_body(response.text) or {}
        success = _success_code(body.get("success"))
        if success == SUCCESS_CODE:
            return

        message = ERROR_MESSAGES.get(success) if success is not None else None
        error = exceptions.ProviderError(
            f"sms77 SMS sending error. Code: {code}.",
            code=code,
            provider_message=message,
        )
        if message:
            log_then_raise(log, f"sms77 SMS sending error. Message: {message}", error)
        raise error
