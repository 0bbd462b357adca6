"""iPizza service ids and the field order each of them hashes."""

from __future__ import annotations

from typing import Final

from ...domain.registry import ServiceDescriptor, ServiceRegistry
from . import fields as f

PAYMENT_REQUEST: Final[str] = "1001"
PAYMENT_SUCCESS: Final[str] = "1101"
PAYMENT_CANCEL: Final[str] = "1901"

PAYMENT_REQUEST_FIELDS: Final[tuple[str, ...]] = (
    f.SERVICE_ID,
    f.PROTOCOL_VERSION,
    f.SELLER_ID,
    f.ORDER_ID,
    f.SUM,
    f.CURRENCY,
    f.SELLER_BANK_ACC,
    f.SELLER_NAME,
    f.ORDER_REFERENCE,
    f.DESCRIPTION,
)

PAYMENT_SUCCESS_FIELDS: Final[tuple[str, ...]] = (
    f.SERVICE_ID,
    f.PROTOCOL_VERSION,
    f.SELLER_ID,
    f.RECEIVER_ID,
    f.ORDER_ID,
    f.TRANSACTION_ID,
    f.SUM,
    f.CURRENCY,
    f.RECEIVER_BANK_ACC,
    f.RECEIVER_NAME,
    f.SENDER_BANK_ACC,
    f.SENDER_NAME,
    f.ORDER_REFERENCE,
    f.DESCRIPTION,
    f.TRANSACTION_DATE,
)

PAYMENT_CANCEL_FIELDS: Final[tuple[str, ...]] = (
    f.SERVICE_ID,
    f.PROTOCOL_VERSION,
    f.SELLER_ID,
    f.RECEIVER_ID,
    f.ORDER_ID,
    f.ORDER_REFERENCE,
    f.DESCRIPTION,
)


def default_registry() -> ServiceRegistry:
    """Return the registry of the iPizza services a merchant deals with."""
    return ServiceRegistry(
        [
            ServiceDescriptor(
                service_id=PAYMENT_REQUEST, fields=PAYMENT_REQUEST_FIELDS
            ),
            ServiceDescriptor(
                service_id=PAYMENT_SUCCESS,
                fields=PAYMENT_SUCCESS_FIELDS,
                is_payment=True,
            ),
            ServiceDescriptor(
                service_id=PAYMENT_CANCEL,
                fields=PAYMENT_CANCEL_FIELDS,
                is_payment=True,
            ),
        ]
    )
