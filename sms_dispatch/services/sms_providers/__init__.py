from .base import BaseSMSProvider, OutgoingRequest, ProviderProfile, SMSMessage
from .gatewayapi_provider import GatewayApiSMSProvider
from .playsms_provider import PlaySmsSMSProvider
from .response import ProviderResponse, parse_body
from .serwersms_provider import SerwerSmsSMSProvider
from .sms77_provider import Sms77SMSProvider
from .smstool_provider import SmstoolSMSProvider
from .verimor_provider import VerimorSMSProvider

PROVIDER_CLASSES: dict[str, type[BaseSMSProvider]] = {
    cls.name.lower(): cls
    for cls in (
        GatewayApiSMSProvider,
        SerwerSmsSMSProvider,
        Sms77SMSProvider,
        SmstoolSMSProvider,
        VerimorSMSProvider,
        PlaySmsSMSProvider,
    )
}

__all__ = [
    "BaseSMSProvider",
    "OutgoingRequest",
    "ProviderProfile",
    "ProviderResponse",
    "SMSMessage",
    "parse_body",
    "GatewayApiSMSProvider",
    "SerwerSmsSMSProvider",
    "Sms77SMSProvider",
    "SmstoolSMSProvider",
    "VerimorSMSProvider",
    "PlaySmsSMSProvider",
    "PROVIDER_CLASSES",
]
