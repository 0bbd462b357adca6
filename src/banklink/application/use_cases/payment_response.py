"""Use case: authenticate and classify an inbound bank notification."""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from ...crypto.canonical import CanonicalHashBuilder, serialize_value
from ...crypto.signatures import Verifier
from ...domain.entities import PaymentResponse, PaymentStatus
from ...domain.errors import (
    InvalidFieldValueError,
    MissingFieldError,
    UnsupportedServiceError,
)
from ...domain.registry import ServiceRegistry
from ...protocol.ipizza import fields as f
from ...protocol.ipizza import services

logger = logging.getLogger(__name__)

TRANSACTION_DATE_FORMAT = "%d.%m.%Y"


def parse_transaction_date(value: Any) -> datetime:
    """Parse ``DD.MM.YYYY`` (iPizza 008), falling back to ISO-8601."""
    text = serialize_value(value).strip()
    try:
        return datetime.strptime(text, TRANSACTION_DATE_FORMAT)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise InvalidFieldValueError(f.TRANSACTION_DATE, value) from None


def parse_amount(value: Any) -> Decimal:
    try:
        amount = Decimal(serialize_value(value).strip())
    except InvalidOperation:
        raise InvalidFieldValueError(f.SUM, value) from None
    if not amount.is_finite():
        raise InvalidFieldValueError(f.SUM, value)
    return amount


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else serialize_value(value)


class PaymentResponseInterpreter:
    """Turns an inbound field map into exactly one PaymentResponse.

    The service id only suggests the outcome. A signature that does not verify
    always turns the response into ``PaymentStatus.ERROR``.
    """

    def __init__(
        self,
        registry: ServiceRegistry,
        hash_builder: CanonicalHashBuilder,
        verifier: Verifier,
        *,
        success_service_id: str = services.PAYMENT_SUCCESS,
    ):
        self.registry = registry
        self.hash_builder = hash_builder
        self.verifier = verifier
        self.success_service_id = success_service_id

    def interpret(self, response_data: Mapping[str, Any]) -> PaymentResponse:
        """Classify ``response_data``.

        Raises:
            UnsupportedServiceError: If the service id is not a payment service.
            MissingFieldError: If a field the service hashes is absent.
            InvalidFieldValueError: If a verified success carries an unparseable
                sum or transaction date.
        """
        service_id = response_data.get(f.SERVICE_ID)
        if service_id is None:
            raise MissingFieldError("notification", f.SERVICE_ID)
        service_id = serialize_value(service_id)
        if not self.registry.is_payment_service(service_id):
            raise UnsupportedServiceError(service_id)

        if service_id == self.success_service_id:
            status = PaymentStatus.SUCCESS
        else:
            status = PaymentStatus.CANCEL

        order_id = _optional_str(response_data.get(f.ORDER_ID))

        try:
            hash_bytes = self.hash_builder.build(service_id, response_data)
        except InvalidFieldValueError as e:
            # The bank cannot have signed bytes that do not exist in the charset.
            logger.warning(
                "Unencodable notification service=%s order_id=%s: %s",
                service_id,
                order_id,
                e,
            )
            hash_bytes = None

        if hash_bytes is None or not self.verifier.verify(
            hash_bytes, response_data.get(f.SIGNATURE)
        ):
            logger.warning(
                "Signature verification failed for service=%s order_id=%s",
                service_id,
                order_id,
            )
            status = PaymentStatus.ERROR

        logger.debug(
            "Payment response order_id=%s status=%s", order_id, status.value
        )
        if status is not PaymentStatus.SUCCESS:
            return PaymentResponse(
                status=status, order_id=order_id, raw_data=response_data
            )

        def required(field_name: str) -> Any:
            value = response_data.get(field_name)
            if value is None:
                raise MissingFieldError(service_id, field_name)
            return value

        return PaymentResponse(
            status=status,
            order_id=order_id,
            raw_data=response_data,
            sum=parse_amount(required(f.SUM)),
            currency=serialize_value(required(f.CURRENCY)),
            sender_name=serialize_value(required(f.SENDER_NAME)),
            sender_bank_account=serialize_value(required(f.SENDER_BANK_ACC)),
            transaction_id=serialize_value(required(f.TRANSACTION_ID)),
            transaction_date=parse_transaction_date(required(f.TRANSACTION_DATE)),
        )
