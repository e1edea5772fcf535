from __future__ import annotations

import logging
from dataclasses import dataclass

from .. import exceptions
from ..integrations import ConfigResolver
from .base import BaseSMSProvider, OutgoingRequest, ProviderProfile, SMSMessage
from .response import ProviderResponse


@dataclass(frozen=True, slots=True)
class GatewayApiProfile(ProviderProfile):
    token: str = ""
    sender: str = ""


class GatewayApiSMSProvider(BaseSMSProvider):
    """GatewayAPI REST gateway, token sent as the basic auth username."""

    name = "GatewayAPI"
    label = "GatewayAPI"
    verify_tls = False

    BASE_URL = "https://gatewayapi.com/rest/mtsms"
    TIMEOUT = 30

    def resolve_profile(self, resolver: ConfigResolver, message: SMSMessage) -> GatewayApiProfile:
        token = resolver.require("gatewayApiToken", "GatewayAPI: No Token.")
        return GatewayApiProfile(
            base_url=resolver.resolve_url("gatewayApiBaseUrl", "gatewayApiBaseUrl", self.BASE_URL),
            timeout=resolver.resolve_timeout("gatewayApiTimeout", "gatewayApiTimeout", self.TIMEOUT),
            token=token,
            sender=message.from_number or resolver.resolve("gatewayApiSender", default=""),
        )

    def build_request(self, profile: GatewayApiProfile, message: SMSMessage, to_number: str) -> OutgoingRequest:
        return OutgoingRequest(
            method="POST",
            url=profile.base_url,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            json={
                "sender": profile.sender,
                "message": message.body,
                "recipients": [{"msisdn": self.format_number(to_number)}],
            },
            auth=(profile.token, ""),
        )

    def interpret_response(self, response: ProviderResponse, log: logging.Logger) -> None:
        if response.status_code != 200:
            raise exceptions.UnexpectedStatus(
                f"GatewayAPI: Unexpected HTTP code {response.status_code}",
                status_code=response.status_code,
            )
