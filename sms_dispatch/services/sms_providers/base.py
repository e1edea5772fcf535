from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from sms_dispatch.core.phone import format_number

from .. import exceptions
from ..integrations import ConfigResolver
from .response import ProviderResponse


@dataclass(frozen=True, slots=True)
class SMSMessage:
    """Outgoing message addressed to one or more numbers."""

    body: str
    to_number_list: tuple[str, ...] = ()
    from_number: Optional[str] = None

    def __post_init__(self) -> None:
        numbers = self.to_number_list
        if isinstance(numbers, str):
            numbers = (numbers,)
        object.__setattr__(self, "to_number_list", tuple(numbers))


@dataclass(frozen=True, slots=True)
class ProviderProfile:
    """Settings resolved for a single provider call."""

    base_url: str
    timeout: float


@dataclass(frozen=True, slots=True)
class OutgoingRequest:
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    json: Optional[dict[str, Any]] = None
    params: Optional[dict[str, str]] = None
    auth: Optional[tuple[str, str]] = None


class BaseSMSProvider(ABC):
    """Interface all SMS providers must implement."""

    # Integration record name.
    name: str
    # Provider name used in error and log messages.
    label: str
    number_prefix: str = "+"
    verify_tls: bool = True

    def format_number(self, number: str) -> str:
        return format_number(number, self.number_prefix)

    @abstractmethod
    def resolve_profile(self, resolver: ConfigResolver, message: SMSMessage) -> ProviderProfile:
        """Build the per-call profile, raising ``MissingCredential`` when incomplete."""
        raise NotImplementedError

    @abstractmethod
    def build_request(self, profile: Any, message: SMSMessage, to_number: str) -> OutgoingRequest:
        raise NotImplementedError

    @abstractmethod
    def interpret_response(self, response: ProviderResponse, log: logging.Logger) -> None:
        """Raise an ``SMSDeliveryError`` unless the provider accepted the message."""
        raise NotImplementedError

    def disabled_error(self) -> exceptions.IntegrationDisabled:
        return exceptions.IntegrationDisabled(f"{self.label} integration is not enabled.")

    def timeout_error(self) -> exceptions.Timeout:
        return exceptions.Timeout(f"{self.label} SMS sending timeout.")
