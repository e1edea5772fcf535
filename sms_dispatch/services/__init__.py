from . import exceptions
from .integrations import (
    ConfigResolver,
    InMemoryIntegrationStore,
    IntegrationRecord,
    MappingConfigStore,
    SettingsConfigStore,
)
from .sms_providers import SMSMessage
from .sms_service import SMSDispatcher, build_provider, get_sms_dispatcher

__all__ = [
    "exceptions",
    "ConfigResolver",
    "InMemoryIntegrationStore",
    "IntegrationRecord",
    "MappingConfigStore",
    "SettingsConfigStore",
    "SMSMessage",
    "SMSDispatcher",
    "build_provider",
    "get_sms_dispatcher",
]
