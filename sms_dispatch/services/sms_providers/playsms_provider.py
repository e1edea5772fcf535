from __future__ import annotations

import logging
from dataclasses import dataclass

from .. import exceptions
from ..integrations import ConfigResolver
from .base import BaseSMSProvider, OutgoingRequest, ProviderProfile, SMSMessage
from .response import ProviderResponse, raise_for_message_error


@dataclass(frozen=True, slots=True)
class PlaySmsProfile(ProviderProfile):
    username: str = ""
    token: str = ""
    sender: str = ""
    number_prefix: str = ""


class PlaySmsSMSProvider(BaseSMSProvider):
    """playSMS webservices API.

    The legacy ``op=pv`` endpoint only takes a GET with the username and
    webservices token in the query string, so there is no request body.
    Numbers are sent as bare digits, behind ``playSmsNumberPrefix`` when set.
    """

    name = "playSMS"
    label = "playSMS"
    number_prefix = ""

    TIMEOUT = 10

    def resolve_profile(self, resolver: ConfigResolver, message: SMSMessage) -> PlaySmsProfile:
        username = resolver.require("playSmsUsername", "No playSMS username.")
        token = resolver.require("playSmsWebservicesToken", "No playSMS Webservices Token.")
        base_url = resolver.resolve_url("playSmsBaseUrl", None, None)
        if not base_url:
            raise exceptions.MissingCredential("No playSMS base URL.")
        if not (message.from_number or "").strip():
            raise exceptions.MissingCredential("No sender phone number.")

        return PlaySmsProfile(
            base_url=base_url,
            timeout=resolver.resolve_timeout("playSmsSendTimeout", "playSmsSendTimeout", self.TIMEOUT),
            username=username,
            token=token,
            sender=message.from_number,
            number_prefix=str(resolver.resolve("playSmsNumberPrefix", default="")),
        )

    def build_request(self, profile: PlaySmsProfile, message: SMSMessage, to_number: str) -> OutgoingRequest:
        return OutgoingRequest(
            method="GET",
            url=f"{profile.base_url}/index.php",
            params={
                "app": "ws",
                "u": profile.username,
                "h": profile.token,
                "op": "pv",
                "to": profile.number_prefix + self.format_number(to_number),
                "from": self.format_number(profile.sender),
                "msg": message.body,
            },
        )

    def interpret_response(self, response: ProviderResponse, log: logging.Logger) -> None:
        raise_for_message_error(response, label=self.label, log=log)
