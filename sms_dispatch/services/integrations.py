from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol

from sms_dispatch.core.config import Settings

from . import exceptions


@dataclass(frozen=True, slots=True)
class IntegrationRecord:
    """Enablement flag and named settings of one SMS integration."""

    name: str
    enabled: bool = False
    fields: Mapping[str, Any] = field(default_factory=dict)

    def get(self, name: str) -> Any | None:
        return self.fields.get(name)


class IntegrationStore(Protocol):
    def get(self, name: str) -> IntegrationRecord | None:
        ...


class ConfigStore(Protocol):
    def get(self, key: str) -> Any | None:
        ...


class InMemoryIntegrationStore:
    def __init__(self, records: list[IntegrationRecord] | None = None) -> None:
        self._records: dict[str, IntegrationRecord] = {}
        for record in records or []:
            self.add(record)

    def add(self, record: IntegrationRecord) -> None:
        self._records[record.name] = record

    def get(self, name: str) -> IntegrationRecord | None:
        return self._records.get(name)


class MappingConfigStore:
    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values = dict(values or {})

    def get(self, key: str) -> Any | None:
        return self._values.get(key)


class SettingsConfigStore:
    """Exposes the global keys read by the providers on top of ``Settings``."""

    KEY_MAP = {
        "gatewayApiBaseUrl": "GATEWAY_API_BASE_URL",
        "gatewayApiTimeout": "GATEWAY_API_TIMEOUT",
        "serwerSmsBaseUrl": "SERWER_SMS_BASE_URL",
        "serwerSmsTimeout": "SERWER_SMS_TIMEOUT",
        "sms77BaseUrl": "SMS77_BASE_URL",
        "sms77SmsSendTimeout": "SMS77_SMS_SEND_TIMEOUT",
        "smstoolBaseUrl": "SMSTOOL_BASE_URL",
        "smstoolSmsSendTimeout": "SMSTOOL_SMS_SEND_TIMEOUT",
        "verimorBaseUrl": "VERIMOR_BASE_URL",
        "verimorSmsSendTimeout": "VERIMOR_SMS_SEND_TIMEOUT",
        "playSmsSendTimeout": "PLAY_SMS_SEND_TIMEOUT",
    }

    def __init__(self, settings: Settings):
        self.settings = settings

    def get(self, key: str) -> Any | None:
        attr = self.KEY_MAP.get(key)
        if attr is None:
            return None
        return getattr(self.settings, attr, None)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _to_timeout(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        return None
    return timeout if timeout > 0 else None


class ConfigResolver:
    """Resolves one integration's settings, first non-empty value wins.

    Lookup order is the integration record field, then the global config key,
    then the hardcoded default.
    """

    def __init__(self, record: IntegrationRecord, config: ConfigStore):
        self.record = record
        self.config = config

    def _candidates(self, record_field: str | None, config_key: str | None) -> list[Any]:
        values = []
        if record_field:
            values.append(self.record.get(record_field))
        if config_key:
            values.append(self.config.get(config_key))
        return values

    def resolve(
        self,
        record_field: str | None = None,
        config_key: str | None = None,
        default: Any = None,
    ) -> Any:
        for value in self._candidates(record_field, config_key):
            if not _is_empty(value):
                return value.strip() if isinstance(value, str) else value
        return default

    def require(self, record_field: str, error_message: str) -> str:
        value = self.resolve(record_field)
        if _is_empty(value):
            raise exceptions.MissingCredential(error_message)
        return str(value)

    def resolve_url(self, record_field: str | None, config_key: str | None, default: str | None) -> str | None:
        value = self.resolve(record_field, config_key, default)
        if _is_empty(value):
            return None
        return str(value).rstrip("/")

    def resolve_timeout(self, record_field: str | None, config_key: str | None, default: float) -> float:
        for value in self._candidates(record_field, config_key):
            timeout = _to_timeout(value)
            if timeout is not None:
                return timeout
        return float(default)

    def resolve_flag(self, record_field: str, default: bool = False) -> bool:
        value = self.resolve(record_field)
        if value is None:
            return default
        return _to_bool(value)
