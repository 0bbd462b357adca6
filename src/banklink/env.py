from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from cryptography.hazmat.primitives.asymmetric import rsa
from pydantic import BaseModel, PrivateAttr, field_validator, model_validator

from .crypto.key_utils import load_private_key_from_pem, load_public_key_from_pem
from .crypto.signatures import DEFAULT_DIGEST, get_digest
from .domain.entities import MerchantConfig
from .domain.errors import KeyLoadError


class Settings(BaseModel):
    """Typed banklink settings built from environment variables."""

    seller_id: str
    seller_name: str
    seller_account_number: str
    endpoint_url: str
    protocol_version: str = "008"

    private_key_pem: str
    private_key_password: Optional[str] = None
    bank_public_key_pem: str

    digest: str = DEFAULT_DIGEST
    charset: str = "utf-8"

    _private_key: Optional[rsa.RSAPrivateKey] = PrivateAttr(default=None)
    _bank_public_key: Optional[rsa.RSAPublicKey] = PrivateAttr(default=None)

    @field_validator("digest")
    @classmethod
    def validate_digest(cls, v: str) -> str:
        get_digest(v)
        return v.lower()

    @field_validator("charset")
    @classmethod
    def validate_charset(cls, v: str) -> str:
        try:
            "".encode(v)
        except LookupError as e:
            raise ValueError(f"Unknown charset {v!r}") from e
        return v

    @model_validator(mode="after")
    def load_keys(self) -> "Settings":
        """Parse both keys once; handlers built from these settings reuse them."""
        if not self.private_key_pem:
            raise ValueError("Private key cannot be empty")
        if not self.bank_public_key_pem:
            raise ValueError("Bank public key cannot be empty")
        try:
            self._private_key = load_private_key_from_pem(
                self.private_key_pem, self.private_key_password
            )
            self._bank_public_key = load_public_key_from_pem(self.bank_public_key_pem)
        except KeyLoadError as e:
            raise ValueError(str(e)) from e
        return self

    @property
    def private_key(self) -> rsa.RSAPrivateKey:
        return self._private_key

    @property
    def bank_public_key(self) -> rsa.RSAPublicKey:
        return self._bank_public_key

    def merchant_config(self) -> MerchantConfig:
        return MerchantConfig(
            seller_id=self.seller_id,
            seller_name=self.seller_name,
            seller_account_number=self.seller_account_number,
            endpoint_url=self.endpoint_url,
            protocol_version=self.protocol_version,
        )


def _read_pem(pem_var: str, path_var: str) -> Optional[str]:
    """Return PEM text from ``pem_var``, or from the file named by ``path_var``."""
    pem = os.environ.get(pem_var)
    if pem:
        return pem
    path = os.environ.get(path_var)
    if path:
        try:
            return Path(path).read_text()
        except OSError as e:
            raise KeyLoadError(f"Cannot read {path_var}={path}: {e}") from e
    return None


def get_settings() -> Settings:
    """Return typed settings instance sourced from env vars."""
    return Settings(
        seller_id=os.environ.get("BANKLINK_SELLER_ID"),
        seller_name=os.environ.get("BANKLINK_SELLER_NAME"),
        seller_account_number=os.environ.get("BANKLINK_SELLER_ACCOUNT_NUMBER"),
        endpoint_url=os.environ.get("BANKLINK_ENDPOINT_URL"),
        protocol_version=os.environ.get("BANKLINK_PROTOCOL_VERSION", "008"),
        private_key_pem=_read_pem(
            "BANKLINK_PRIVATE_KEY_PEM", "BANKLINK_PRIVATE_KEY_PATH"
        ),
        private_key_password=os.environ.get("BANKLINK_PRIVATE_KEY_PASSWORD"),
        bank_public_key_pem=_read_pem(
            "BANKLINK_BANK_PUBLIC_KEY_PEM", "BANKLINK_BANK_PUBLIC_KEY_PATH"
        ),
        digest=os.environ.get("BANKLINK_DIGEST", DEFAULT_DIGEST),
        charset=os.environ.get("BANKLINK_CHARSET", "utf-8"),
    )
