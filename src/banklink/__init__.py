"""Merchant-side iPizza banklink: signed payment requests and verified notifications."""

from .application.ipizza import IPizzaProtocol
from .domain.entities import MerchantConfig, PaymentResponse, PaymentStatus
from .domain.errors import (
    BanklinkError,
    FieldTooLongError,
    InvalidFieldValueError,
    KeyLoadError,
    MissingFieldError,
    UnsupportedServiceError,
)
from .domain.registry import ServiceDescriptor, ServiceRegistry

__all__ = [
    "BanklinkError",
    "FieldTooLongError",
    "IPizzaProtocol",
    "InvalidFieldValueError",
    "KeyLoadError",
    "MerchantConfig",
    "MissingFieldError",
    "PaymentResponse",
    "PaymentStatus",
    "ServiceDescriptor",
    "ServiceRegistry",
    "UnsupportedServiceError",
]
