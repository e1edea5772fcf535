import logging

import httpx
import pytest

from conftest import PROVIDER_FIELDS, read_timeout, response
from sms_dispatch.services import (
    InMemoryIntegrationStore,
    IntegrationRecord,
    MappingConfigStore,
    SMSDispatcher,
    SMSMessage,
    exceptions,
    get_sms_dispatcher,
)
from sms_dispatch.services.sms_providers import GatewayApiSMSProvider, PlaySmsSMSProvider, Sms77SMSProvider

ALL_PROVIDERS = list(PROVIDER_FIELDS)


@pytest.mark.parametrize("provider_name", ALL_PROVIDERS)
def test_empty_recipient_list_fails_without_network(make_dispatcher, transport, provider_name):
    dispatcher = make_dispatcher(provider_name)

    with pytest.raises(exceptions.MissingRecipient):
        dispatcher.send(SMSMessage(body="Hi", to_number_list=[], from_number="+15550100"))

    assert transport.calls == 0


@pytest.mark.parametrize("provider_name", ALL_PROVIDERS)
def test_number_without_digits_fails_without_network(make_dispatcher, transport, provider_name):
    dispatcher = make_dispatcher(provider_name)

    with pytest.raises(exceptions.MissingRecipient):
        dispatcher.send(SMSMessage(body="Hi", to_number_list=["n/a"], from_number="+15550100"))

    assert transport.calls == 0


@pytest.mark.parametrize("provider_name", ALL_PROVIDERS)
def test_disabled_integration_fails_without_network(make_dispatcher, transport, message, provider_name):
    dispatcher = make_dispatcher(provider_name, enabled=False)

    with pytest.raises(exceptions.IntegrationDisabled, match="integration is not enabled"):
        dispatcher.send(message)

    assert transport.calls == 0


@pytest.mark.parametrize("provider_name", ALL_PROVIDERS)
def test_missing_integration_record_fails_without_network(transport, message, provider_name):
    dispatcher = get_sms_dispatcher(
        provider_name,
        integrations=InMemoryIntegrationStore(),
        config=MappingConfigStore(),
        client_factory=transport.client_factory,
    )

    with pytest.raises(exceptions.IntegrationDisabled):
        dispatcher.send(message)

    assert transport.calls == 0


@pytest.mark.parametrize(
    "provider_name, credential",
    [
        ("GatewayAPI", "gatewayApiToken"),
        ("SerwerSms", "serwerSmsUsername"),
        ("SerwerSms", "serwerSmsPassword"),
        ("Sms77", "sms77ApiKey"),
        ("Smstool", "smstoolClientId"),
        ("Smstool", "smstoolClientSecret"),
        ("Verimor", "verimorUsername"),
        ("Verimor", "verimorPassword"),
        ("playSMS", "playSmsUsername"),
        ("playSMS", "playSmsWebservicesToken"),
        ("playSMS", "playSmsBaseUrl"),
    ],
)
def test_missing_credential_fails_without_network(make_dispatcher, transport, message, provider_name, credential):
    dispatcher = make_dispatcher(provider_name, fields={credential: None})

    with pytest.raises(exceptions.MissingCredential):
        dispatcher.send(message)

    assert transport.calls == 0


@pytest.mark.parametrize("provider_name", ALL_PROVIDERS)
def test_timeout_is_reported_without_parsing_body(make_dispatcher, transport, message, provider_name, monkeypatch):
    transport.outcomes = [read_timeout()]
    dispatcher = make_dispatcher(provider_name)

    def _fail(*args, **kwargs):
        raise AssertionError("body must not be interpreted after a timeout")

    monkeypatch.setattr(dispatcher.provider, "interpret_response", _fail)

    with pytest.raises(exceptions.Timeout, match="SMS sending timeout"):
        dispatcher.send(message)

    assert transport.calls == 1


@pytest.mark.parametrize("provider_name", ALL_PROVIDERS)
def test_successful_send(make_dispatcher, transport, message, provider_name):
    transport.outcomes = [response(200, {"success": 100})]

    make_dispatcher(provider_name).send(message)

    assert transport.calls == 1


def test_first_failure_aborts_remaining_recipients(make_dispatcher, transport):
    transport.outcomes = [response(500, {"message": "boom"}), response(200)]
    dispatcher = make_dispatcher("Verimor")

    with pytest.raises(exceptions.ProviderError):
        dispatcher.send(SMSMessage(body="Hi", to_number_list=["+905551112233", "+905551112244"]))

    assert transport.calls == 1


def test_recipients_are_sent_in_order(make_dispatcher, transport):
    transport.outcomes = [response(200), response(200), response(200)]
    numbers = ["+1 555 0101", "+1 555 0102", "+1 555 0103"]

    make_dispatcher("GatewayAPI").send(SMSMessage(body="Hi", to_number_list=numbers))

    sent = [request.read() for request in transport.requests]
    assert [b'"+15550101"' in body for body in sent] == [True, False, False]
    assert b'"+15550103"' in sent[2]


def test_timeout_configures_connect_and_read(make_dispatcher, transport, message):
    make_dispatcher("Smstool", fields={"smstoolSmsSendTimeout": None}, config={"smstoolSmsSendTimeout": 7}).send(message)

    timeout = transport.client_kwargs[0]["timeout"]
    assert timeout.connect == 7
    assert timeout.read == 7


@pytest.mark.parametrize(
    "provider_name, verify",
    [("GatewayAPI", False), ("SerwerSms", False), ("Sms77", True), ("Smstool", True), ("Verimor", True), ("playSMS", True)],
)
def test_tls_verification_per_provider(make_dispatcher, transport, message, provider_name, verify):
    transport.outcomes = [response(200, {"success": 100})]

    make_dispatcher(provider_name).send(message)

    assert transport.client_kwargs[0]["verify"] is verify


def test_connection_error_without_status_is_ignored_for_2xx_providers(make_dispatcher, transport, message, caplog):
    transport.outcomes = [httpx.ConnectError("refused", request=httpx.Request("POST", "http://example.com"))]

    with caplog.at_level(logging.WARNING, logger="tests.sms"):
        make_dispatcher("Verimor").send(message)

    assert "transport error" in caplog.text


def test_connection_error_is_unexpected_status_for_gatewayapi(make_dispatcher, transport, message):
    transport.outcomes = [httpx.ConnectError("refused", request=httpx.Request("POST", "http://example.com"))]

    with pytest.raises(exceptions.UnexpectedStatus) as exc_info:
        make_dispatcher("GatewayAPI").send(message)

    assert exc_info.value.status_code == 0


def test_failing_log_sink_does_not_replace_error(transport, message):
    class BrokenLogger(logging.Logger):
        def error(self, *args, **kwargs):
            raise RuntimeError("log sink down")

    store = InMemoryIntegrationStore([IntegrationRecord(name="Sms77", enabled=True, fields=PROVIDER_FIELDS["Sms77"])])
    dispatcher = SMSDispatcher(
        Sms77SMSProvider(),
        integrations=store,
        config=MappingConfigStore(),
        log=BrokenLogger("broken"),
        client_factory=transport.client_factory,
    )
    transport.outcomes = [response(200, {"success": 401})]

    with pytest.raises(exceptions.ProviderError):
        dispatcher.send(message)


def test_get_sms_dispatcher_uses_default_provider():
    dispatcher = get_sms_dispatcher(integrations=InMemoryIntegrationStore())
    assert isinstance(dispatcher.provider, GatewayApiSMSProvider)

    dispatcher = get_sms_dispatcher("PLAYSMS", integrations=InMemoryIntegrationStore())
    assert isinstance(dispatcher.provider, PlaySmsSMSProvider)


def test_get_sms_dispatcher_rejects_unknown_provider():
    with pytest.raises(exceptions.UnknownProvider):
        get_sms_dispatcher("carrier-pigeon", integrations=InMemoryIntegrationStore())


def test_single_number_string_is_one_recipient(make_dispatcher, transport):
    message = SMSMessage(body="Hi", to_number_list="4860")
    assert message.to_number_list == ("4860",)

    make_dispatcher("GatewayAPI").send(message)

    assert transport.calls == 1
    assert b'"+4860"' in transport.requests[0].read()
