"""Load RSA key material from PEM text, PEM files and X.509 certificates."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from ..domain.errors import KeyLoadError

PemData = Union[str, bytes]

_CERTIFICATE_MARKER = b"-----BEGIN CERTIFICATE-----"


def _as_bytes(data: PemData) -> bytes:
    return data.encode() if isinstance(data, str) else data


def _read_file(path: Union[str, Path]) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise KeyLoadError(f"Cannot read key file {path}: {e}") from e


def load_private_key_from_pem(
    pem: PemData, password: Optional[PemData] = None
) -> rsa.RSAPrivateKey:
    """Load an RSA private key from PEM data."""
    try:
        private_key = serialization.load_pem_private_key(
            _as_bytes(pem),
            password=_as_bytes(password) if password is not None else None,
        )
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise KeyLoadError(f"Invalid private key PEM: {e}") from e
    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise KeyLoadError(
            f"Expected an RSA private key, got {type(private_key).__name__}"
        )
    return private_key


def load_private_key_from_file(
    path: Union[str, Path], password: Optional[PemData] = None
) -> rsa.RSAPrivateKey:
    return load_private_key_from_pem(_read_file(path), password)


def load_public_key_from_pem(pem: PemData) -> rsa.RSAPublicKey:
    """Load an RSA public key from a PEM public key or a PEM X.509 certificate.

    Banks usually hand out a certificate; the public key is taken from it.
    """
    data = _as_bytes(pem)
    try:
        if _CERTIFICATE_MARKER in data:
            public_key = x509.load_pem_x509_certificate(data).public_key()
        else:
            public_key = serialization.load_pem_public_key(data)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise KeyLoadError(f"Invalid public key or certificate PEM: {e}") from e
    if not isinstance(public_key, rsa.RSAPublicKey):
        raise KeyLoadError(
            f"Expected an RSA public key, got {type(public_key).__name__}"
        )
    return public_key


def load_public_key_from_file(path: Union[str, Path]) -> rsa.RSAPublicKey:
    return load_public_key_from_pem(_read_file(path))


def public_key_pem_from_private_pem(
    private_key_pem: PemData, password: Optional[PemData] = None
) -> str:
    """Derive the SubjectPublicKeyInfo PEM of a private key."""
    public_key = load_private_key_from_pem(private_key_pem, password).public_key()
    return public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()
