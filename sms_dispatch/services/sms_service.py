from __future__ import annotations

import logging
from typing import Callable

import httpx

from sms_dispatch.core.config import Settings, get_settings
from sms_dispatch.core.logging import SMS_LOGGER_NAME, configure_sms_logging
from sms_dispatch.core.phone import strip_non_digits

from . import exceptions
from .integrations import ConfigResolver, ConfigStore, IntegrationStore, SettingsConfigStore
from .sms_providers import PROVIDER_CLASSES, BaseSMSProvider, SerwerSmsSMSProvider, SMSMessage
from .sms_providers.base import OutgoingRequest, ProviderProfile
from .sms_providers.response import ProviderResponse

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., httpx.Client]


class SMSDispatcher:
    """Sends a message to each of its recipients through one provider.

    Recipients are processed in order, one blocking request each, and the
    first failure aborts the rest of the list.
    """

    def __init__(
        self,
        provider: BaseSMSProvider,
        *,
        integrations: IntegrationStore,
        config: ConfigStore,
        log: logging.Logger | None = None,
        client_factory: ClientFactory = httpx.Client,
    ):
        self.provider = provider
        self.integrations = integrations
        self.config = config
        self.log = log or logging.getLogger(SMS_LOGGER_NAME)
        self._client_factory = client_factory

    def send(self, message: SMSMessage) -> None:
        if not message.to_number_list:
            raise exceptions.MissingRecipient("No recipient phone number.")

        for number in message.to_number_list:
            self._send_to_number(message, number)

    def _send_to_number(self, message: SMSMessage, to_number: str) -> None:
        provider = self.provider
        record = self.integrations.get(provider.name)
        if record is None or not record.enabled:
            raise provider.disabled_error()

        profile = provider.resolve_profile(ConfigResolver(record, self.config), message)

        if not strip_non_digits(to_number):
            raise exceptions.MissingRecipient(f"{provider.label}: No recipient phone number.")

        request = provider.build_request(profile, message, to_number)
        self.log.debug("Sending %s SMS | to=%s | url=%s", provider.label, to_number, request.url)

        response = self._execute(request, profile, to_number)
        if response.timed_out:
            self.log.warning("%s SMS timed out after %ss | to=%s", provider.label, profile.timeout, to_number)
            raise provider.timeout_error()

        provider.interpret_response(response, self.log)
        self.log.info("%s SMS sent | to=%s | status=%s", provider.label, to_number, response.status_code)

    def _execute(self, request: OutgoingRequest, profile: ProviderProfile, to_number: str) -> ProviderResponse:
        timeout = httpx.Timeout(profile.timeout)
        try:
            with self._client_factory(timeout=timeout, verify=self.provider.verify_tls) as client:
                response = client.request(
                    request.method,
                    request.url,
                    headers=request.headers,
                    json=request.json,
                    params=request.params,
                    auth=request.auth,
                )
        except httpx.TimeoutException:
            return ProviderResponse(status_code=0, timed_out=True)
        except httpx.TransportError as exc:
            self.log.warning("%s SMS transport error | to=%s | %s", self.provider.label, to_number, exc)
            return ProviderResponse(status_code=0)
        return ProviderResponse(status_code=response.status_code, text=response.text)


def build_provider(name: str, settings: Settings | None = None) -> BaseSMSProvider:
    provider_cls = PROVIDER_CLASSES.get((name or "").strip().lower())
    if provider_cls is None:
        raise exceptions.UnknownProvider(f"Unsupported SMS provider {name}")
    if provider_cls is SerwerSmsSMSProvider:
        settings = settings or get_settings()
        return SerwerSmsSMSProvider(error_codes=settings.SERWER_SMS_ERROR_CODES)
    return provider_cls()


def get_sms_dispatcher(
    provider_name: str | None = None,
    *,
    integrations: IntegrationStore,
    config: ConfigStore | None = None,
    settings: Settings | None = None,
    log: logging.Logger | None = None,
    client_factory: ClientFactory = httpx.Client,
) -> SMSDispatcher:
    """Build a dispatcher for ``provider_name``, defaulting to ``SMS_PROVIDER``."""

    settings = settings or get_settings()
    name = provider_name or settings.SMS_PROVIDER
    provider = build_provider(name, settings)
    logger.debug("Using SMS provider %s", provider.name)
    return SMSDispatcher(
        provider,
        integrations=integrations,
        config=config or SettingsConfigStore(settings),
        log=log or configure_sms_logging(settings),
        client_factory=client_factory,
    )
