from __future__ import annotations

import logging
from dataclasses import dataclass

from ..integrations import ConfigResolver
from .base import BaseSMSProvider, OutgoingRequest, ProviderProfile, SMSMessage
from .response import ProviderResponse, raise_for_message_error


@dataclass(frozen=True, slots=True)
class VerimorProfile(ProviderProfile):
    username: str = ""
    password: str = ""
    sender: str | None = None


class VerimorSMSProvider(BaseSMSProvider):
    name = "Verimor"
    label = "Verimor"

    BASE_URL = "http://sms.verimor.com.tr/v2"
    TIMEOUT = 24
    DATA_CODING = "1"

    def resolve_profile(self, resolver: ConfigResolver, message: SMSMessage) -> VerimorProfile:
        username = resolver.require("verimorUsername", "No Verimor username.")
        password = resolver.require("verimorPassword", "No Verimor password.")
        return VerimorProfile(
            base_url=resolver.resolve_url("verimorBaseUrl", "verimorBaseUrl", self.BASE_URL),
            timeout=resolver.resolve_timeout("verimorSmsSendTimeout", "verimorSmsSendTimeout", self.TIMEOUT),
            username=username,
            password=password,
            sender=resolver.resolve("verimorSender"),
        )

    def build_request(self, profile: VerimorProfile, message: SMSMessage, to_number: str) -> OutgoingRequest:
        return OutgoingRequest(
            method="POST",
            url=f"{profile.base_url}/send.json",
            headers={"Content-Type": "application/json", "Accept": "*/*"},
            json={
                "username": profile.username,
                "password": profile.password,
                "source_addr": profile.sender,
                "datacoding": self.DATA_CODING,
                "messages": [
                    {"msg": message.body, "dest": self.format_number(to_number)},
                ],
            },
        )

    def interpret_response(self, response: ProviderResponse, log: logging.Logger) -> None:
        raise_for_message_error(response, label=self.label, log=log)
