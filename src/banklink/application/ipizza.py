"""iPizza protocol handler.

Composes the canonical hash builder, signer, verifier, request builder and
response interpreter around one merchant configuration and one key pair.
Everything the handler holds is read-only after construction, so a single
instance can serve concurrent callers.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from cryptography.hazmat.primitives.asymmetric import rsa

from ..crypto.canonical import DEFAULT_CHARSET, CanonicalHashBuilder
from ..crypto.signatures import DEFAULT_DIGEST, Signer, Verifier
from ..domain.entities import MerchantConfig, PaymentResponse
from ..domain.registry import ServiceRegistry
from ..domain.shared import Amount, OrderReferenceGenerator
from ..env import Settings
from ..protocol.ipizza.services import default_registry
from ..protocol.reference import generate_order_reference
from .use_cases.payment_request import PaymentRequestBuilder
from .use_cases.payment_response import PaymentResponseInterpreter


class IPizzaProtocol:
    """Merchant side of the iPizza banklink protocol."""

    def __init__(
        self,
        merchant: MerchantConfig,
        private_key: rsa.RSAPrivateKey,
        bank_public_key: rsa.RSAPublicKey,
        *,
        registry: Optional[ServiceRegistry] = None,
        digest: str = DEFAULT_DIGEST,
        charset: str = DEFAULT_CHARSET,
        reference_generator: OrderReferenceGenerator = generate_order_reference,
    ):
        self.merchant = merchant
        self.registry = registry if registry is not None else default_registry()
        self.hash_builder = CanonicalHashBuilder(self.registry, charset=charset)
        self.signer = Signer(private_key, digest)
        self.verifier = Verifier(bank_public_key, digest)
        self.request_builder = PaymentRequestBuilder(
            merchant,
            self.hash_builder,
            self.signer,
            reference_generator=reference_generator,
        )
        self.response_interpreter = PaymentResponseInterpreter(
            self.registry, self.hash_builder, self.verifier
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, *, registry: Optional[ServiceRegistry] = None
    ) -> "IPizzaProtocol":
        """Build a handler from typed settings, reusing the keys they loaded."""
        return cls(
            settings.merchant_config(),
            settings.private_key,
            settings.bank_public_key,
            registry=registry,
            digest=settings.digest,
            charset=settings.charset,
        )

    def prepare_payment_request(
        self,
        order_id: Union[int, str],
        amount: Amount,
        message: str = "",
        language: str = "EST",
        currency: str = "EUR",
    ) -> dict[str, str]:
        return self.request_builder.prepare_request(
            order_id, amount, message, language, currency
        )

    def handle_response(self, response_data: Mapping[str, Any]) -> PaymentResponse:
        return self.response_interpreter.interpret(response_data)
