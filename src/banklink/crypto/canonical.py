"""Canonical hash input shared by the signer and the verifier.

For every field of a service, in the order the service descriptor defines,
the encoded value is prefixed with its byte length written as exactly three
zero-padded decimal digits. The prefixed values are concatenated without any
separator:

    VK_SERVICE=1001, VK_VERSION=008  ->  b"0041001003008"

The bank performs the same computation, so both the order and the encoding
have to match it byte for byte.
"""

from __future__ import annotations

from typing import Any, Final, Iterable, Mapping

from ..domain.errors import (
    FieldTooLongError,
    InvalidFieldValueError,
    MissingFieldError,
)
from ..domain.registry import ServiceRegistry

LENGTH_PREFIX_DIGITS: Final[int] = 3
MAX_FIELD_LENGTH: Final[int] = 10**LENGTH_PREFIX_DIGITS - 1
DEFAULT_CHARSET: Final[str] = "utf-8"


def serialize_value(value: Any) -> str:
    """Serialize a field value to the string that goes on the wire."""
    return value if isinstance(value, str) else str(value)


def build_canonical_hash(
    service_id: Any,
    field_names: Iterable[str],
    field_map: Mapping[str, Any],
    *,
    charset: str = DEFAULT_CHARSET,
) -> bytes:
    """Concatenate the length-prefixed values of ``field_names`` in order.

    Raises:
        MissingFieldError: If a listed field is absent or None.
        FieldTooLongError: If an encoded value exceeds 999 bytes.
        InvalidFieldValueError: If a value cannot be encoded in ``charset``.
    """
    buffer = bytearray()
    for field_name in field_names:
        value = field_map.get(field_name)
        if value is None:
            raise MissingFieldError(service_id, field_name)

        try:
            encoded = serialize_value(value).encode(charset)
        except UnicodeEncodeError:
            raise InvalidFieldValueError(
                field_name, value, reason=f"not representable in {charset}"
            ) from None
        if len(encoded) > MAX_FIELD_LENGTH:
            raise FieldTooLongError(field_name, len(encoded))

        buffer += str(len(encoded)).zfill(LENGTH_PREFIX_DIGITS).encode("ascii")
        buffer += encoded
    return bytes(buffer)


class CanonicalHashBuilder:
    """Builds canonical hash input using the field order from a registry."""

    def __init__(
        self, registry: ServiceRegistry, *, charset: str = DEFAULT_CHARSET
    ) -> None:
        self.registry = registry
        self.charset = charset

    def build(self, service_id: Any, field_map: Mapping[str, Any]) -> bytes:
        """Return the canonical bytes of ``field_map`` for ``service_id``.

        Raises:
            UnsupportedServiceError: If the registry does not know ``service_id``.
            MissingFieldError: If a field the service hashes is absent.
            FieldTooLongError: If a value exceeds 999 bytes once encoded.
        """
        descriptor = self.registry.get(service_id)
        return build_canonical_hash(
            descriptor.service_id,
            descriptor.fields,
            field_map,
            charset=self.charset,
        )
