"""Shared pytest fixtures for banklink tests."""

from __future__ import annotations

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from banklink.application.ipizza import IPizzaProtocol
from banklink.domain.entities import MerchantConfig
from tests.helpers.bank import BankSimulator


def _generate_rsa_key_pair() -> tuple[rsa.RSAPrivateKey, rsa.RSAPublicKey]:
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return private_key, private_key.public_key()


@pytest.fixture(scope="session")
def merchant_key_pair() -> tuple[rsa.RSAPrivateKey, rsa.RSAPublicKey]:
    """Merchant key pair: signs payment requests."""
    return _generate_rsa_key_pair()


@pytest.fixture(scope="session")
def bank_key_pair() -> tuple[rsa.RSAPrivateKey, rsa.RSAPublicKey]:
    """Bank key pair: signs payment notifications."""
    return _generate_rsa_key_pair()


@pytest.fixture(scope="session")
def merchant_private_key_pem(
    merchant_key_pair: tuple[rsa.RSAPrivateKey, rsa.RSAPublicKey],
) -> str:
    private_key, _ = merchant_key_pair
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()


@pytest.fixture(scope="session")
def bank_public_key_pem(
    bank_key_pair: tuple[rsa.RSAPrivateKey, rsa.RSAPublicKey],
) -> str:
    _, public_key = bank_key_pair
    return public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()


@pytest.fixture
def merchant() -> MerchantConfig:
    return MerchantConfig(
        seller_id="SHOP",
        seller_name="Test Shop OÜ",
        seller_account_number="EE382200221020145685",
        endpoint_url="https://shop.example.com/banklink/return",
    )


@pytest.fixture
def protocol(
    merchant: MerchantConfig,
    merchant_key_pair: tuple[rsa.RSAPrivateKey, rsa.RSAPublicKey],
    bank_key_pair: tuple[rsa.RSAPrivateKey, rsa.RSAPublicKey],
) -> IPizzaProtocol:
    merchant_private_key, _ = merchant_key_pair
    _, bank_public_key = bank_key_pair
    return IPizzaProtocol(merchant, merchant_private_key, bank_public_key)


@pytest.fixture
def bank(
    bank_key_pair: tuple[rsa.RSAPrivateKey, rsa.RSAPublicKey],
    merchant: MerchantConfig,
) -> BankSimulator:
    bank_private_key, _ = bank_key_pair
    return BankSimulator(bank_private_key, merchant)
