"""Use case: build a signed iPizza payment request."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Union

from ...crypto.canonical import CanonicalHashBuilder, serialize_value
from ...crypto.signatures import Signer
from ...domain.entities import MerchantConfig
from ...domain.errors import InvalidFieldValueError
from ...domain.shared import Amount, OrderReferenceGenerator
from ...protocol.ipizza import fields as f
from ...protocol.ipizza import services
from ...protocol.reference import generate_order_reference

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")


def format_amount(amount: Amount) -> str:
    """Format a sum with exactly two decimals, e.g. ``10.5`` -> ``"10.50"``.

    Amounts are padded, never rounded.

    Raises:
        InvalidFieldValueError: If the amount is not a positive number or has
            more than two decimal places.
    """
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation:
        raise InvalidFieldValueError(f.SUM, amount, reason="not a number") from None
    if not value.is_finite() or value <= 0:
        raise InvalidFieldValueError(f.SUM, amount, reason="must be positive")
    try:
        cents = value.quantize(_CENTS)
    except InvalidOperation:
        raise InvalidFieldValueError(f.SUM, amount, reason="out of range") from None
    if cents != value:
        raise InvalidFieldValueError(
            f.SUM, amount, reason="more than two decimal places"
        )
    return str(cents)


class PaymentRequestBuilder:
    """Assembles the outbound payment request field map and signs it."""

    def __init__(
        self,
        merchant: MerchantConfig,
        hash_builder: CanonicalHashBuilder,
        signer: Signer,
        *,
        reference_generator: OrderReferenceGenerator = generate_order_reference,
        service_id: str = services.PAYMENT_REQUEST,
    ):
        self.merchant = merchant
        self.hash_builder = hash_builder
        self.signer = signer
        self.reference_generator = reference_generator
        self.service_id = service_id

    def prepare_request(
        self,
        order_id: Union[int, str],
        amount: Amount,
        message: str = "",
        language: str = "EST",
        currency: str = "EUR",
    ) -> dict[str, str]:
        """Return the complete field map for a payment request.

        The signature is computed last, over the fields the request service
        hashes, and stored under ``VK_MAC``.
        """
        merchant = self.merchant
        request_data = {
            f.SERVICE_ID: self.service_id,
            f.PROTOCOL_VERSION: merchant.protocol_version,
            f.SELLER_ID: merchant.seller_id,
            f.ORDER_ID: serialize_value(order_id),
            f.SUM: format_amount(amount),
            f.CURRENCY: currency,
            f.SELLER_BANK_ACC: merchant.seller_account_number,
            f.SELLER_NAME: merchant.seller_name,
            f.ORDER_REFERENCE: self.reference_generator(order_id),
            f.DESCRIPTION: message,
            f.SUCCESS_URL: merchant.endpoint_url,
            f.CANCEL_URL: merchant.endpoint_url,
            f.USER_LANG: language,
        }

        hash_bytes = self.hash_builder.build(self.service_id, request_data)
        request_data[f.SIGNATURE] = self.signer.sign(hash_bytes)

        logger.debug(
            "Prepared payment request service=%s order_id=%s",
            self.service_id,
            request_data[f.ORDER_ID],
        )
        return request_data
