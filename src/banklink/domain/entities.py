"""Banklink domain entities: MerchantConfig, PaymentStatus and PaymentResponse."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PaymentStatus(str, Enum):
    """Terminal outcome of a payment notification."""

    SUCCESS = "success"
    CANCEL = "cancel"
    ERROR = "error"


class MerchantConfig(BaseModel):
    """Merchant data shared read-only by every request a handler builds."""

    model_config = ConfigDict(frozen=True)

    seller_id: str = Field(..., min_length=1)
    seller_name: str = Field(..., min_length=1)
    seller_account_number: str = Field(..., min_length=1)
    # Used for both the success and the cancel redirect.
    endpoint_url: str = Field(..., min_length=1)
    protocol_version: str = "008"


_FINANCIAL_FIELDS = (
    "sum",
    "currency",
    "sender_name",
    "sender_bank_account",
    "transaction_id",
    "transaction_date",
)


class PaymentResponse(BaseModel):
    """Interpreted bank notification.

    Financial details are only populated when ``status`` is ``SUCCESS``; a
    cancelled or forged notification never exposes them.
    """

    model_config = ConfigDict(frozen=True)

    status: PaymentStatus
    order_id: Optional[str] = None
    raw_data: Mapping[str, Any] = Field(default_factory=dict)

    sum: Optional[Decimal] = None
    currency: Optional[str] = None
    sender_name: Optional[str] = None
    sender_bank_account: Optional[str] = None
    transaction_id: Optional[str] = None
    transaction_date: Optional[datetime] = None

    @field_validator("raw_data", mode="after")
    @classmethod
    def freeze_raw_data(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @model_validator(mode="after")
    def check_financial_fields(self) -> "PaymentResponse":
        if self.status is PaymentStatus.SUCCESS:
            return self
        exposed = [
            name for name in _FINANCIAL_FIELDS if getattr(self, name) is not None
        ]
        if exposed:
            raise ValueError(
                f"{self.status.value} response must not carry financial fields: "
                + ", ".join(exposed)
            )
        return self

    def is_successful(self) -> bool:
        """Return True only for a verified payment success."""
        return self.status is PaymentStatus.SUCCESS
