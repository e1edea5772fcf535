import logging
import os
import sys
from pathlib import Path

import httpx
import pytest

BASE_DIR = Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("SMS_PROVIDER", "GatewayAPI")

from sms_dispatch.core.config import get_settings
from sms_dispatch.services import (
    InMemoryIntegrationStore,
    IntegrationRecord,
    MappingConfigStore,
    SMSDispatcher,
    SMSMessage,
)
from sms_dispatch.services.sms_service import build_provider

get_settings.cache_clear()


class RecordingTransport:
    """Serves queued outcomes and keeps every request it received."""

    def __init__(self, outcomes: list[object] | None = None):
        self.outcomes = list(outcomes or [])
        self.requests: list[httpx.Request] = []
        self.client_kwargs: list[dict] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes.pop(0) if self.outcomes else httpx.Response(200, json={})
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def client_factory(self, **kwargs) -> httpx.Client:
        self.client_kwargs.append(kwargs)
        return httpx.Client(transport=httpx.MockTransport(self.handler), **kwargs)


def response(status_code: int = 200, json_body: object | None = None, text: str | None = None) -> httpx.Response:
    if text is not None:
        return httpx.Response(status_code, text=text)
    return httpx.Response(status_code, json=json_body if json_body is not None else {})


def read_timeout() -> httpx.ReadTimeout:
    return httpx.ReadTimeout("timed out", request=httpx.Request("POST", "http://example.com"))


PROVIDER_FIELDS = {
    "GatewayAPI": {"gatewayApiToken": "gw-token"},
    "SerwerSms": {"serwerSmsUsername": "serwer-user", "serwerSmsPassword": "serwer-pass"},
    "Sms77": {"sms77ApiKey": "sms77-key", "sms77From": "Espo"},
    "Smstool": {"smstoolClientId": "client-id", "smstoolClientSecret": "client-secret"},
    "Verimor": {"verimorUsername": "verimor-user", "verimorPassword": "verimor-pass"},
    "playSMS": {
        "playSmsUsername": "play-user",
        "playSmsWebservicesToken": "play-token",
        "playSmsBaseUrl": "https://playsms.example.com/",
    },
}


@pytest.fixture()
def transport():
    return RecordingTransport()


@pytest.fixture()
def sms_logger():
    return logging.getLogger("tests.sms")


@pytest.fixture()
def make_dispatcher(transport, sms_logger):
    def _make(provider_name: str, *, fields: dict | None = None, enabled: bool = True, config: dict | None = None):
        record_fields = dict(PROVIDER_FIELDS[provider_name])
        record_fields.update(fields or {})
        store = InMemoryIntegrationStore([IntegrationRecord(name=provider_name, enabled=enabled, fields=record_fields)])
        return SMSDispatcher(
            build_provider(provider_name),
            integrations=store,
            config=MappingConfigStore(config),
            log=sms_logger,
            client_factory=transport.client_factory,
        )

    return _make


@pytest.fixture()
def message():
    return SMSMessage(body="Hello from the CRM", to_number_list=["+48 (600) 100-200"], from_number="+1 555 0100")
