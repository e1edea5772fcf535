from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..integrations import ConfigResolver
from .base import BaseSMSProvider, OutgoingRequest, ProviderProfile, SMSMessage
from .response import ProviderResponse, raise_for_message_error


@dataclass(frozen=True, slots=True)
class SmstoolProfile(ProviderProfile):
    client_id: str = ""
    client_secret: str = ""
    sender: Any = None
    reference: Any = None
    test: Any = None


class SmstoolSMSProvider(BaseSMSProvider):
    name = "Smstool"
    label = "Smstool(s)"

    BASE_URL = "https://api.smsgatewayapi.com/v1"
    TIMEOUT = 10

    def resolve_profile(self, resolver: ConfigResolver, message: SMSMessage) -> SmstoolProfile:
        client_id = resolver.require("smstoolClientId", "No Smstool(s) Client Id.")
        client_secret = resolver.require("smstoolClientSecret", "No Smstool(s) Client Secret.")
        return SmstoolProfile(
            base_url=resolver.resolve_url("smstoolBaseUrl", "smstoolBaseUrl", self.BASE_URL),
            timeout=resolver.resolve_timeout("smstoolSmsSendTimeout", "smstoolSmsSendTimeout", self.TIMEOUT),
            client_id=client_id,
            client_secret=client_secret,
            sender=resolver.resolve("smstoolSender"),
            reference=resolver.resolve("smstoolReference"),
            test=resolver.resolve("smstoolTest"),
        )

    def build_request(self, profile: SmstoolProfile, message: SMSMessage, to_number: str) -> OutgoingRequest:
        return OutgoingRequest(
            method="POST",
            url=f"{profile.base_url}/message/send",
            headers={
                "X-Client-Id": profile.client_id,
                "X-Client-Secret": profile.client_secret,
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            json={
                "client_id": profile.client_id,
                "client_secret": profile.client_secret,
                "sender": profile.sender,
                "reference": profile.reference,
                "test": profile.test,
                "message": message.body,
                "to": self.format_number(to_number),
            },
        )

    def interpret_response(self, response: ProviderResponse, log: logging.Logger) -> None:
        raise_for_message_error(response, label=self.label, log=log)
