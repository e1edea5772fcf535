class ServiceError(Exception):
    """Base exception for service-level errors."""


class SMSDeliveryError(ServiceError):
    """Base exception for every failed SMS dispatch."""


class UnknownProvider(ServiceError):
    pass


class MissingRecipient(SMSDeliveryError):
    pass


class IntegrationDisabled(SMSDeliveryError):
    pass


class MissingCredential(SMSDeliveryError):
    pass


class Timeout(SMSDeliveryError):
    pass


class UnexpectedStatus(SMSDeliveryError):
    def __init__(self, message: str, *, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class ProviderError(SMSDeliveryError):
    """The provider answered but refused the message.

    ``code`` is the provider's own error code when it reports one, otherwise
    the HTTP status code.
    """

    def __init__(
        self,
        message: str,
        *,
        code: int,
        status_code: int | None = None,
        provider_message: str | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.status_code = status_code if status_code is not None else code
        self.provider_message = provider_message
