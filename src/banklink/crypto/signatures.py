from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Final

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

# iPizza 008 signs with openssl_sign defaults: RSA PKCS#1 v1.5 over SHA-1.
DEFAULT_DIGEST: Final[str] = "sha1"

DIGESTS: Final[dict[str, type[hashes.HashAlgorithm]]] = {
    "sha1": hashes.SHA1,
    "sha256": hashes.SHA256,
    "sha512": hashes.SHA512,
}


def get_digest(name: str) -> hashes.HashAlgorithm:
    """Return a hash algorithm instance for a digest name such as ``sha1``."""
    try:
        return DIGESTS[name.lower()]()
    except KeyError:
        raise ValueError(
            f"Unsupported digest {name!r}, expected one of {sorted(DIGESTS)}"
        ) from None


def sign_bytes(
    private_key: rsa.RSAPrivateKey,
    payload_bytes: bytes,
    digest: str = DEFAULT_DIGEST,
) -> str:
    """Sign bytes with RSA PKCS#1 v1.5 and return the base64-encoded signature."""
    signature = private_key.sign(
        payload_bytes, padding.PKCS1v15(), get_digest(digest)
    )
    return base64.b64encode(signature).decode("ascii")


def verify_signature_bytes(
    public_key: rsa.RSAPublicKey,
    payload_bytes: bytes,
    signature_b64: object,
    digest: str = DEFAULT_DIGEST,
) -> bool:
    """Verify a base64-encoded signature over payload bytes.

    Returns False instead of raising when the signature is not valid base64,
    has the wrong shape, or does not match the payload.
    """
    if not isinstance(signature_b64, (str, bytes)):
        return False
    try:
        signature = base64.b64decode(signature_b64, validate=True)
        public_key.verify(
            signature, payload_bytes, padding.PKCS1v15(), get_digest(digest)
        )
    except (binascii.Error, ValueError, InvalidSignature):
        return False
    return True


@dataclass(frozen=True)
class Signer:
    """Signs canonical hash bytes with the merchant private key."""

    private_key: rsa.RSAPrivateKey
    digest: str = DEFAULT_DIGEST

    def __post_init__(self) -> None:
        get_digest(self.digest)

    def sign(self, hash_bytes: bytes) -> str:
        return sign_bytes(self.private_key, hash_bytes, self.digest)


@dataclass(frozen=True)
class Verifier:
    """Checks bank signatures against canonical hash bytes."""

    public_key: rsa.RSAPublicKey
    digest: str = DEFAULT_DIGEST

    def __post_init__(self) -> None:
        get_digest(self.digest)

    def verify(self, hash_bytes: bytes, signature_b64: object) -> bool:
        return verify_signature_bytes(
            self.public_key, hash_bytes, signature_b64, self.digest
        )
