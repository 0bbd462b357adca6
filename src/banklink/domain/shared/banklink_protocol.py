"""Protocol interfaces for banklink implementations.

These protocols define the contracts the application layer relies on. They
enable dependency injection: a handler accepts any reference generator or
protocol implementation that satisfies them, which keeps the hashing and
signature logic testable against fixed collaborators.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Callable, Mapping, Protocol, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from ..entities import PaymentResponse


Amount = Union[Decimal, int, float, str]


class BanklinkProtocol(Protocol):
    """Protocol defining the merchant side of a bank payment-initiation protocol."""

    def prepare_payment_request(
        self,
        order_id: Union[int, str],
        amount: Amount,
        message: str = "",
        language: str = "EST",
        currency: str = "EUR",
    ) -> dict[str, str]:
        """Build the signed field map for a payment request.

        Args:
            order_id: Merchant order identifier
            amount: Sum to pay
            message: Payment description shown to the payer
            language: Bank UI language
            currency: ISO currency code

        Returns:
            Field map ready for transport, signature included
        """
        ...

    def handle_response(self, response_data: Mapping[str, Any]) -> "PaymentResponse":
        """Authenticate and classify an inbound bank notification.

        Args:
            response_data: Field map received from the bank

        Returns:
            Interpreted payment response
        """
        ...


# Deterministic order id -> order reference function
OrderReferenceGenerator = Callable[[Union[int, str]], str]
